# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "KTT_APP_NAME": "App display name (default: KillTaskTracker).",
    "KTT_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Connectors
    "KTT_CONSOLE_ENABLED": "Read chat lines and commands from the console (true/false).",
    # Paths (gitignored)
    "KTT_DATA_DIR": "Local data directory (default: .local/ktt). Holds ktt.log.",
    "KTT_DEFINITIONS_PATH": (
        "Task definitions JSON (default: <data_dir>/task_definitions.json). "
        "See task_definitions.example.json."
    ),
    "KTT_PROGRESS_DIR": "Where <character>.json progress snapshots live (default: <data_dir>).",
    # Session
    "KTT_CHARACTER_NAME": "Character to restore at startup (empty => use /login <name>).",
    # Tracking behaviour
    "KTT_PERSIST_UNMATCHED_KILLS": (
        "Rewrite the progress file on kill broadcasts for untracked monsters (default: true)."
    ),
}
