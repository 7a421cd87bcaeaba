"""
Bounded execution of an external command line.

The command runs as a child process, in its own process group on POSIX,
supervised by a watchdog timer. When the timer fires the group gets SIGTERM,
then SIGKILL after a short grace period. The exit code is recorded but never
interpreted here: deciding whether the run produced something usable is the
caller's job.
"""

import os
import shlex
import signal
import subprocess
import threading
import time
from dataclasses import dataclass
from typing import List, Optional

from webarchiver.contexts.capture.logger import _log_debug, _log_warning

# Exit code reported for a process terminated by SIGTERM (128 + 15)
TIMEOUT_EXIT_CODE = 128 + signal.SIGTERM

# Seconds between SIGTERM and SIGKILL once the watchdog fires
KILL_GRACE_S = 5.0


@dataclass
class ExecutionResult:
    """
    Outcome of one bounded run.

    Attributes:
        command_line: The command line as given
        exit_code: Exit code, shell convention (128 + N when killed by signal N).
                   None if the process was never started
        timed_out: Whether the watchdog fired
        launch_error: Exception raised while starting the process, if any
        stdout: Captured standard output
        stderr: Captured standard error
        elapsed_s: Wall-clock duration in seconds
    """

    command_line: str
    exit_code: Optional[int] = None
    timed_out: bool = False
    launch_error: Optional[Exception] = None
    stdout: str = ""
    stderr: str = ""
    elapsed_s: float = 0.0

    @property
    def launched(self) -> bool:
        return self.launch_error is None


def parse_command_line(command_line: str) -> List[str]:
    """Split a command line into an argument vector using shell-word rules."""
    argv = shlex.split(command_line)
    if not argv:
        raise ValueError("Empty command line")
    return argv


def normalize_exit_code(returncode: Optional[int]) -> Optional[int]:
    """Map Python's negative signal return codes to the shell's 128 + N."""
    if returncode is not None and returncode < 0:
        return 128 - returncode
    return returncode


# POSIX: the child leads its own process group so wrapper scripts
# (e.g. xvfb-run) are stopped together with the processes they start
USE_PROCESS_GROUP = hasattr(os, "killpg")


def _signal_process_tree(process: subprocess.Popen, sig: int) -> None:
    """Send ``sig`` to the child's whole process group, or to the child alone."""
    try:
        if USE_PROCESS_GROUP:
            os.killpg(process.pid, sig)
        elif sig == signal.SIGTERM:
            process.terminate()
        else:
            process.kill()
    except (ProcessLookupError, PermissionError):
        # Group already gone (macOS reports EPERM for a group of zombies)
        pass


class Watchdog:
    """Timer that terminates a child process tree once ``timeout_s`` elapses."""

    def __init__(self, process: subprocess.Popen, timeout_s: float, kill_grace_s: float = KILL_GRACE_S):
        self.process = process
        self.timeout_s = timeout_s
        self.kill_grace_s = kill_grace_s
        self.fired = False
        self._cancelled = threading.Event()
        self._timer = threading.Timer(timeout_s, self._on_timeout)
        self._timer.daemon = True

    def start(self) -> None:
        self._timer.start()

    def cancel(self) -> None:
        self._cancelled.set()
        self._timer.cancel()

    def _on_timeout(self) -> None:
        # The direct child may already be gone while its descendants still hold
        # the output pipes, so only a finished run counts as done
        if self._cancelled.is_set():
            return

        self.fired = True
        _log_warning(f"Timeout reached after {self.timeout_s:g}s, terminating pid {self.process.pid}")
        _signal_process_tree(self.process, signal.SIGTERM)

        # cancel() is called as soon as the output pipes close, which ends the wait early
        finished = self._cancelled.wait(self.kill_grace_s)
        if finished and not USE_PROCESS_GROUP:
            return

        # Descendants that outlived the child are killed too
        if not finished:
            _log_warning(f"pid {self.process.pid} ignored SIGTERM, killing")
        _signal_process_tree(self.process, getattr(signal, "SIGKILL", signal.SIGTERM))


def run_bounded(command_line: str, timeout_ms: int, kill_grace_s: float = KILL_GRACE_S) -> ExecutionResult:
    """
    Run ``command_line`` to completion or until the watchdog stops it.

    Launch failures (unparseable line, missing binary, permissions) are
    captured in the result instead of being raised. If waiting for the
    process is interrupted, the process tree is killed before re-raising.

    Args:
        command_line: Full command line, split with shlex
        timeout_ms: Watchdog timeout in milliseconds
        kill_grace_s: Delay between SIGTERM and SIGKILL

    Returns:
        ExecutionResult, whatever happened to the process
    """
    start_time = time.time()

    try:
        argv = parse_command_line(command_line)
        process = subprocess.Popen(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            start_new_session=USE_PROCESS_GROUP,
        )
    except (OSError, ValueError) as e:
        _log_debug(f"Could not launch command line: {e}")
        return ExecutionResult(
            command_line=command_line,
            launch_error=e,
            elapsed_s=time.time() - start_time,
        )

    watchdog = Watchdog(process, timeout_ms / 1000, kill_grace_s)
    watchdog.start()
    try:
        stdout, stderr = process.communicate()
    except BaseException:
        _signal_process_tree(process, getattr(signal, "SIGKILL", signal.SIGTERM))
        process.wait()
        raise
    finally:
        watchdog.cancel()

    return ExecutionResult(
        command_line=command_line,
        exit_code=normalize_exit_code(process.returncode),
        timed_out=watchdog.fired,
        stdout=stdout or "",
        stderr=stderr or "",
        elapsed_s=time.time() - start_time,
    )
