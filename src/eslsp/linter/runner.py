"""Run controller for the external linter.

Owns the lifecycle of one linter process per document: spawning it,
streaming the document text to its stdin, collecting its report and
handing the parsed diagnostics to a report callback. Starting a new check
for a document supersedes (kills) the previous one, so stale results are
never reported.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

from eslsp.linter.command import build_command, resolve_cwd
from eslsp.linter.config import LinterConfig
from eslsp.linter.discovery import find_executable, find_project_root
from eslsp.linter.report_parser import parse_report
from eslsp.linter.types import DocumentSnapshot, LintDiagnostic, RunState
from eslsp.logging import get_logger

ReportCallback: TypeAlias = Callable[[list[LintDiagnostic]], None]

__all__ = [
    "ReportCallback",
    "Run",
    "RunController",
]


class Run:
    """One invocation of the linter against one document snapshot."""

    def __init__(self, snapshot: DocumentSnapshot) -> None:
        self.snapshot = snapshot
        self.state = RunState.RUNNING
        self.process: asyncio.subprocess.Process | None = None
        self.output: bytes | None = None
        self.returncode: int | None = None
        self.task: asyncio.Task[None] | None = None

    @property
    def uri(self) -> str:
        return self.snapshot.uri

    def done(self) -> bool:
        """Whether the run has left the running state."""
        return self.state is not RunState.RUNNING

    def __repr__(self) -> str:
        return f"Run(uri={self.uri!r}, state={self.state})"


class RunController:
    """Manages at most one live linter run per document URI."""

    def __init__(
        self,
        config: LinterConfig | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        """
        Initialize the controller.

        Args:
            config: Linter configuration. Defaults to ``LinterConfig()``.
            logger: Optional logger instance. If None, uses eslsp.linter.runner.
        """
        if logger is None:
            logger = get_logger("linter.runner")
        self._config = config if config is not None else LinterConfig()
        self._logger = logger
        self._runs: dict[str, Run] = {}

    @property
    def config(self) -> LinterConfig:
        return self._config

    @property
    def live_uris(self) -> list[str]:
        return list(self._runs)

    def current_run(self, uri: str) -> Run | None:
        """Return the live run for ``uri``, if any."""
        return self._runs.get(uri)

    def check_document(
        self,
        snapshot: DocumentSnapshot,
        report: ReportCallback,
        *,
        delay_ms: int = 0,
    ) -> Run | None:
        """
        Start a fresh check of ``snapshot``.

        Any live run for the same document is terminated first and will
        never call its report callback. Must be called from within a
        running event loop.

        Args:
            snapshot: Document text to check.
            report: Called once with the diagnostics when the run completes.
            delay_ms: Wait before spawning the linter; a newer check for the
                same document cancels the wait.

        Returns:
            The new Run, or None when the linter executable is unavailable.
        """
        if self.cancel(snapshot.uri):
            self._logger.debug("Superseded previous run for %s", snapshot.uri)

        executable = self._locate_executable(snapshot)
        if executable is None:
            self._logger.warning(
                "Linter executable %r not found; skipping check for %s",
                self._config.executable,
                snapshot.uri,
            )
            return None

        run = Run(snapshot)
        self._runs[snapshot.uri] = run
        run.task = asyncio.create_task(self._execute(run, executable, report, delay_ms))
        return run

    def cancel(self, uri: str) -> bool:
        """
        Terminate the live run for ``uri``, if any.

        The process is killed without waiting for it; its exit is ignored.

        Returns:
            True if a live run was terminated.
        """
        run = self._runs.pop(uri, None)
        if run is None:
            return False

        run.state = RunState.SUPERSEDED
        run.output = None
        task = run.task
        if task is not None and not task.done() and not task.get_loop().is_closed():
            task.cancel()
        self._kill(run)
        return True

    def cancel_all(self) -> None:
        """Terminate every live run."""
        for uri in list(self._runs):
            self.cancel(uri)
            self._logger.debug("Cancelled run for %s", uri)

    def _locate_executable(self, snapshot: DocumentSnapshot) -> str | None:
        project_root = self._config.project_root
        if project_root is None and snapshot.path:
            project_root = find_project_root(Path(snapshot.path))
        return find_executable(self._config.executable, project_root)

    def _is_current(self, run: Run) -> bool:
        return run.state is RunState.RUNNING and self._runs.get(run.uri) is run

    def _release(self, run: Run, state: RunState) -> None:
        run.state = state
        run.output = None
        run.process = None
        if self._runs.get(run.uri) is run:
            del self._runs[run.uri]

    def _kill(self, run: Run) -> None:
        process = run.process
        if process is not None and process.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                process.kill()

    async def _reap(self, run: Run) -> None:
        process = run.process
        if process is None:
            return
        self._kill(run)
        await process.wait()
        run.returncode = process.returncode
        run.process = None

    async def _execute(
        self,
        run: Run,
        executable: str,
        report: ReportCallback,
        delay_ms: int,
    ) -> None:
        try:
            if delay_ms > 0:
                await asyncio.sleep(delay_ms / 1000)
            output = await self._spawn_and_collect(run, executable)
        except asyncio.CancelledError:
            await self._reap(run)
            raise

        if output is None:
            return

        if not self._is_current(run):
            self._logger.debug("Discarding output of stale run for %s", run.uri)
            run.process = None
            return

        self._deliver(run, output, report)

    async def _spawn_and_collect(self, run: Run, executable: str) -> bytes | None:
        snapshot = run.snapshot
        command = build_command(executable, snapshot, self._config)
        cwd = resolve_cwd(snapshot, self._config)
        self._logger.debug("Spawning linter for %s: %s (cwd=%s)", run.uri, command, cwd)

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
            )
        except OSError as e:
            self._logger.warning("Failed to start linter for %s: %s", run.uri, e)
            self._release(run, RunState.FAILED)
            return None

        run.process = process
        stdout, stderr = await process.communicate(
            snapshot.source.encode(self._config.encoding)
        )
        run.returncode = process.returncode

        if stderr:
            self._logger.debug(
                "Linter stderr for %s: %s",
                run.uri,
                stderr.decode(self._config.encoding, errors="replace").rstrip(),
            )
        # ESLint prints configuration and crash errors to stderr only
        if not stdout.strip() and stderr.strip():
            return stderr
        return stdout

    def _deliver(self, run: Run, output: bytes, report: ReportCallback) -> None:
        run.output = output
        try:
            diagnostics = parse_report(
                output.decode(self._config.encoding, errors="replace"),
                run.snapshot,
                show_rule_name=self._config.show_rule_name,
            )
        except Exception:
            self._logger.exception("Failed to parse linter report for %s", run.uri)
            self._release(run, RunState.FAILED)
            return

        self._release(run, RunState.COMPLETED)
        self._logger.debug(
            "Linter exited with %s for %s: %d diagnostics",
            run.returncode,
            run.uri,
            len(diagnostics),
        )

        try:
            report(diagnostics)
        except Exception:
            self._logger.exception("Error in report callback for %s", run.uri)
