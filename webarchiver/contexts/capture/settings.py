"""
Capture settings context.

Holds the renderer's parameter template, read once from the command registry
and then reused for every capture in the process, even if the declarations
file changes afterwards.
"""

import threading
from typing import Optional

from webarchiver.utils.command_registry import CommandRegistry

WKHTMLTOPDF_COMMAND = "wkhtmlToPdf"

# 30s
TIMEOUT_DEFAULT_MS = 30000
TIMEOUT_MINIMUM_MS = 1000


def effective_timeout(timeout_ms: Optional[int]) -> int:
    """Values under one second (or None) fall back to the 30s default."""
    if timeout_ms is None or timeout_ms < TIMEOUT_MINIMUM_MS:
        return TIMEOUT_DEFAULT_MS
    return timeout_ms


class CaptureSettings:
    """
    Shared configuration for capture runs.

    The parameter template is loaded lazily on first access. Assignment is
    guarded so only the first loader's value is kept.
    """

    def __init__(
        self,
        registry: Optional[CommandRegistry] = None,
        command_name: str = WKHTMLTOPDF_COMMAND,
    ):
        self.registry = registry if registry is not None else CommandRegistry()
        self.command_name = command_name
        self._parameter_template: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def descriptor(self):
        return self.registry.get_descriptor(self.command_name)

    @property
    def executable(self) -> str:
        return self.descriptor.command

    @property
    def parameter_template(self) -> str:
        if self._parameter_template is None:
            template = self.descriptor.parameters
            with self._lock:
                if self._parameter_template is None:
                    self._parameter_template = template
        return self._parameter_template

    @property
    def is_template_loaded(self) -> bool:
        return self._parameter_template is not None


_default_settings: Optional[CaptureSettings] = None
_default_lock = threading.Lock()


def get_default_settings() -> CaptureSettings:
    """Process-wide settings used when a caller does not pass its own."""
    global _default_settings
    if _default_settings is None:
        with _default_lock:
            if _default_settings is None:
                _default_settings = CaptureSettings()
    return _default_settings
