"""
Acceptance of renderer output.

wkhtmltopdf can exit non-zero after writing a complete PDF (a font or an
image failed to load), and can exit 0 after writing nothing useful. The
produced file is therefore the only thing trusted: it is parsed, and the run
is accepted if it holds at least one page.
"""

from webarchiver.contexts.capture.exceptions import ValidationFailedError
from webarchiver.contexts.capture.executor import TIMEOUT_EXIT_CODE, ExecutionResult
from webarchiver.utils.artifact_store import Artifact
from webarchiver.utils.pdf_processing import pdf_looks_valid


def build_failure_message(result: ExecutionResult, timeout_ms: int) -> str:
    """Describe a run that produced no valid PDF."""
    msg = (
        f"Failed to execute the command line [{result.command_line} ]. "
        f"No valid PDF generated. exitValue: {result.exit_code}"
    )
    if result.exit_code == TIMEOUT_EXIT_CODE or result.timed_out:
        msg += f" (time out reached. The timeout was {timeout_ms}ms)"
    return msg


def accept_output(result: ExecutionResult, output: Artifact, timeout_ms: int) -> Artifact:
    """
    Return ``output`` if it holds a valid PDF, whatever the exit code.

    Raises:
        ValidationFailedError: The PDF is missing, empty, corrupt or has no
            pages. A captured launch error is chained as the cause.
    """
    if pdf_looks_valid(output.path):
        return output

    error = ValidationFailedError(
        build_failure_message(result, timeout_ms),
        command_line=result.command_line,
        exit_code=result.exit_code,
        timed_out=result.timed_out,
        timeout_ms=timeout_ms,
    )
    if result.launch_error is None:
        raise error
    raise error from result.launch_error
