"""
Capture context logger.

Provides logging interface for the capture context with automatic [capture]
prefix. Capture modules import from this module, not from utils.logger.
"""

from pathlib import Path

from loguru import logger

from webarchiver.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[capture]"


def setup_capture_logger(log_dir: Path, renderer: str = "wkhtmltopdf", verbose: bool = False) -> Path:
    """
    Setup logger for the capture context.

    Args:
        log_dir: Directory for this capture session
        renderer: Renderer executable, recorded in the provenance header
        verbose: Show DEBUG messages on the console too

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="capture",
        log_dir=log_dir,
        extra_provenance={"Renderer": renderer},
        console_level="DEBUG" if verbose else "INFO",
    )


def _log_info(message: str) -> None:
    """Log info message with [capture] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [capture] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [capture] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [capture] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [capture] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_run_start(command_line: str, timeout_ms: int) -> None:
    """Log start of a renderer run."""
    _log_info("Running renderer")
    _log_debug(f"  Command: {command_line}")
    _log_debug(f"  Timeout: {timeout_ms}ms")


def log_run_result(
    result,  # ExecutionResult
    is_valid: bool,
    verbose: bool = False,
) -> None:
    """
    Log the outcome of a renderer run.

    The renderer's own output is dumped raw at DEBUG level on failure, or
    always in verbose mode.
    """
    if is_valid:
        _log_success(f"Valid PDF produced (exit code {result.exit_code}, {result.elapsed_s:.2f}s)")
        if result.exit_code not in (0, None):
            _log_warning(f"Renderer exited with {result.exit_code} but its PDF is valid")
    else:
        _log_error(f"No valid PDF produced (exit code {result.exit_code}, {result.elapsed_s:.2f}s)")
        if result.timed_out:
            _log_error("  Renderer was stopped by the watchdog")
        if result.launch_error is not None:
            _log_error(f"  Launch failed: {result.launch_error}")

    if verbose or not is_valid:
        if result.stdout:
            logger.opt(raw=True).debug(
                f"\n{'=' * 80}\nRENDERER STDOUT:\n{'=' * 80}\n{result.stdout}\n"
            )
        if result.stderr:
            logger.opt(raw=True).debug(
                f"\n{'=' * 80}\nRENDERER STDERR:\n{'=' * 80}\n{result.stderr}\n"
            )
