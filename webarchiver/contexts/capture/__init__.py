"""
Capture Context

Responsibilities:
- Builds wkhtmltopdf command lines from the declared parameter template
- Runs them under a watchdog timeout
- Accepts output only after parsing the produced PDF
- Logs in to sites and hands back cookie jars for authenticated captures

Owns: renderer invocation, timeout handling, PDF acceptance
Never: Deletes caller-owned artifacts
"""

from webarchiver.contexts.capture.exceptions import (
    CaptureError,
    ToolUnavailableError,
    ValidationFailedError,
)
from webarchiver.contexts.capture.settings import TIMEOUT_DEFAULT_MS, CaptureSettings
from webarchiver.contexts.capture.webpage_to_pdf import ConversionRequest, WebpageToPdf, is_available

__all__ = [
    "CaptureError",
    "CaptureSettings",
    "ConversionRequest",
    "TIMEOUT_DEFAULT_MS",
    "ToolUnavailableError",
    "ValidationFailedError",
    "WebpageToPdf",
    "is_available",
]
