"""Custom exceptions for the capture context."""

from typing import Optional


class CaptureError(Exception):
    """Base class for capture failures."""


class ToolUnavailableError(CaptureError):
    """
    Exception raised when the external renderer is not installed.

    Attributes:
        command_name: Registry name of the missing command
        install_hint: How to install it, if declared
    """

    def __init__(
        self,
        command_name: str,
        reason: Optional[str] = None,
        install_hint: Optional[str] = None,
    ):
        self.command_name = command_name
        self.reason = reason
        self.install_hint = install_hint

        parts = [f"Command line not available: {command_name}"]
        if reason:
            parts.append(f"Reason: {reason}")
        if install_hint:
            parts.append(f"Hint: {install_hint}")

        super().__init__("\n".join(parts))


class ValidationFailedError(CaptureError):
    """
    Exception raised when no valid PDF came out of a renderer run.

    Raised whatever the exit code was. When the process could not be launched
    at all, the launch OSError is chained as ``__cause__``.

    Attributes:
        command_line: The command line that was run
        exit_code: Exit code observed (None if the process never started)
        timed_out: Whether the watchdog terminated the process
        timeout_ms: Timeout that was in force
    """

    def __init__(
        self,
        message: str,
        command_line: str,
        exit_code: Optional[int] = None,
        timed_out: bool = False,
        timeout_ms: Optional[int] = None,
    ):
        self.message = message
        self.command_line = command_line
        self.exit_code = exit_code
        self.timed_out = timed_out
        self.timeout_ms = timeout_ms
        super().__init__(message)

    @property
    def launch_error(self) -> Optional[BaseException]:
        """The process-launch failure this error was chained from, if any."""
        return self.__cause__
