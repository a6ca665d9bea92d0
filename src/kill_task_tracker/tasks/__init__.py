"""
Task subsystem.

Components:
- task_models.py: data structures (TaskDefinition, TaskProgress, ChannelKind)
- errors.py: exception hierarchy
- task_catalog.py: immutable definitions + lookup indices
- progress_store.py: JSON-backed per-character progress snapshots
- classifier.py: maps one chat line to task transitions
"""
