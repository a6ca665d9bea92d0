# src/kill_task_tracker/core/tracker.py

"""
Task tracker (orchestrator).

Owns the canonical progress table (one TaskProgress per definition) and the
ordered active set (task names), applies classifier transitions against live
progress, writes progress snapshots, and reports every state change as a
plain text line through the log sink.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..tasks.classifier import Classification, Transition, TransitionKind, classify
from ..tasks.errors import ProgressLoadError, ProgressSaveError
from ..tasks.task_catalog import TaskCatalog
from ..tasks.task_models import ActiveTask, ChannelKind, TaskProgress
from .ports import LogSink, ProgressRepo

logger = logging.getLogger(__name__)

TASKS_COMMAND = "/tasks"
BANNER = "KillTaskTracker enabled. Type '/tasks' to list each task and its progress."


class TaskTracker:
    def __init__(
        self,
        catalog: TaskCatalog,
        progress_repo: ProgressRepo,
        sink: LogSink,
        *,
        startup_error: str | None = None,
        persist_unmatched_kills: bool = True,
    ) -> None:
        self.catalog = catalog
        self._repo = progress_repo
        self._sink = sink
        self._startup_error = startup_error
        self._persist_unmatched_kills = persist_unmatched_kills

        self._progress: dict[str, TaskProgress] = {t.name: TaskProgress() for t in catalog}
        self._active: list[str] = []
        self._progress_path: Path | None = None

    # ---- session lifecycle ----

    def session_ready(self, character_name: str) -> None:
        """Character is logged in: surface startup errors and restore saved progress."""
        self._emit(BANNER)

        if self._startup_error is not None:
            self._emit(self._startup_error)
            self._startup_error = None

        # A new session never inherits the previous character's active tasks.
        self._clear_active()
        self._progress_path = None

        try:
            self._progress_path = self._repo.path_for(character_name)
            pairs = self._repo.load(self._progress_path)
        except ProgressLoadError as e:
            logger.warning("Progress load failed for %s: %s", character_name, e)
            self._emit(str(e))
            return
        except Exception as e:
            logger.exception("Unexpected error while loading progress for %s", character_name)
            self._emit(f"Failed to load progress: {e!r}")
            return

        self._restore(pairs)
        logger.info(
            "Session ready character=%s active=%d path=%s",
            character_name,
            len(self._active),
            self._progress_path,
        )

    def _restore(self, pairs: list[tuple[str, int]]) -> None:
        for name, count in pairs:
            progress = self._progress.get(name)
            if progress is None:
                logger.info("Skipping saved progress for unknown task %r", name)
                continue
            if progress.in_progress:
                logger.debug("Skipping repeated saved entry for task %r", name)
                continue
            progress.start(count)
            self._active.append(name)

    def shutdown(self) -> None:
        """Forget the active set in memory only; the last snapshot on disk is kept."""
        self._clear_active()
        logger.debug("Tracker shut down, active set cleared.")

    def _clear_active(self) -> None:
        for name in self._active:
            self._progress[name].reset()
        self._active.clear()

    # ---- chat events ----

    def handle_chat_line(self, channel: ChannelKind, text: str) -> list[str]:
        """
        Apply one chat line. Returns the lines emitted while handling it.

        Never raises: a bad line is logged and the next one is handled normally.
        """
        emitted: list[str] = []
        try:
            result = classify(
                self.catalog,
                channel,
                text,
                persist_unmatched_kills=self._persist_unmatched_kills,
            )
            self._apply(result, emitted)
        except Exception as e:
            logger.exception("Chat line handler crashed (channel=%s text=%r)", channel, text)
            self._emit(f"Error while handling chat line: {e!r}", emitted)
        return emitted

    def _apply(self, result: Classification, emitted: list[str]) -> None:
        changed = False
        for transition in result.transitions:
            changed = self._apply_transition(transition, emitted) or changed

        if changed or result.persist:
            self._persist(emitted)

    def _apply_transition(self, transition: Transition, emitted: list[str]) -> bool:
        name = transition.task_name
        progress = self._progress[name]

        if transition.kind == TransitionKind.START:
            if progress.in_progress:
                return False
            progress.start(0)
            self._active.append(name)
            self._emit(f"Started task: {name}", emitted)
            return True

        if transition.kind == TransitionKind.FINISH:
            if not progress.in_progress:
                logger.debug("Finish for inactive task %r ignored", name)
                return False
            progress.reset()
            self._active.remove(name)
            self._emit(f"Finished task: {name}", emitted)
            return True

        if transition.kind == TransitionKind.KILL_COUNT:
            if not progress.in_progress:
                progress.start(transition.count)
                self._active.append(name)
                self._emit(f"Implicitly started task: {name}", emitted)
            else:
                progress.count = transition.count
            return True

        raise ValueError(f"Unknown transition kind: {transition.kind!r}")

    def _persist(self, emitted: list[str]) -> None:
        if self._progress_path is None:
            logger.debug("No character session yet; progress not saved.")
            return
        try:
            self._repo.save(self._progress_path, self.snapshot())
        except ProgressSaveError as e:
            logger.error("%s", e)
            self._emit(str(e), emitted)

    # ---- queries / commands ----

    def snapshot(self) -> list[tuple[str, int]]:
        return [(name, self._progress[name].count) for name in self._active]

    def progress_for(self, name: str) -> TaskProgress | None:
        return self._progress.get(name)

    def list_active_tasks(self) -> list[ActiveTask]:
        out: list[ActiveTask] = []
        for name in self._active:
            definition = self.catalog.get(name)
            num_kills = definition.num_kills if definition is not None else 0
            out.append(ActiveTask(name=name, count=self._progress[name].count, num_kills=num_kills))
        return out

    def handle_command(self, text: str | None) -> bool:
        """Return True when the input was a tracker command and has been consumed."""
        if text is None or text != TASKS_COMMAND:
            return False
        try:
            for task in self.list_active_tasks():
                self._emit(task.describe())
        except Exception as e:
            logger.exception("Command handler crashed (text=%r)", text)
            self._emit(f"Error while handling command: {e!r}")
        return True

    def _emit(self, line: str, emitted: list[str] | None = None) -> None:
        if emitted is not None:
            emitted.append(line)
        try:
            self._sink(line)
        except Exception:
            logger.exception("Log sink failed for line %r", line)
