"""
Command Registry

Declarations of the external command lines webarchiver can run, loaded from
YAML, with detection of whether each command is installed on this host.

Declaration file format (see webarchiver/config/command_lines.yaml):

    wkhtmlToPdf:
      command: wkhtmltopdf
      parameters: '"#{url}" "#{targetFilePath}"'
      install_hint: "Install wkhtmltopdf"
"""

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()
DEFAULT_COMMAND_LINES_PATH = Path(__file__).resolve().parent.parent / "config" / "command_lines.yaml"
COMMAND_LINES_PATH = Path(os.getenv("WEBARCHIVER_COMMAND_LINES", str(DEFAULT_COMMAND_LINES_PATH)))


class CommandNotDeclaredError(KeyError):
    """Raised when a command name has no declaration in the registry."""


@dataclass(frozen=True)
class CommandDescriptor:
    """
    Declaration of one external command line.

    Attributes:
        name: Registry key (e.g., 'wkhtmlToPdf')
        command: Executable name or path (e.g., 'wkhtmltopdf')
        parameters: Argument template with placeholders
        install_hint: Shown to users when the command is missing
    """

    name: str
    command: str
    parameters: str = ""
    install_hint: str = ""


@dataclass(frozen=True)
class CommandAvailability:
    """Whether a declared command can be run on this host."""

    is_available: bool
    error_message: Optional[str] = None
    install_hint: Optional[str] = None


class CommandRegistry:
    """
    Registry for loading and caching external command declarations.

    The YAML file is read lazily with OmegaConf on first lookup.
    """

    def __init__(self, config_path: Path = None):
        """
        Initialize the command registry.

        Args:
            config_path: Path to the declarations YAML. Defaults to
                         WEBARCHIVER_COMMAND_LINES from environment
        """
        if config_path is None:
            config_path = COMMAND_LINES_PATH

        self.config_path = Path(config_path)
        self._cache: Optional[Dict[str, CommandDescriptor]] = None

    def _load(self) -> Dict[str, CommandDescriptor]:
        if self._cache is not None:
            return self._cache

        if not self.config_path.exists():
            raise FileNotFoundError(f"Command line declarations not found at {self.config_path}")

        raw = OmegaConf.to_container(OmegaConf.load(self.config_path), resolve=True) or {}

        descriptors = {}
        for name, entry in raw.items():
            descriptors[name] = CommandDescriptor(
                name=name,
                command=entry["command"],
                parameters=entry.get("parameters", "") or "",
                install_hint=entry.get("install_hint", "") or "",
            )

        self._cache = descriptors
        return descriptors

    def get_descriptor(self, name: str) -> CommandDescriptor:
        """
        Get a command declaration by name.

        Raises:
            CommandNotDeclaredError: If no command is declared under ``name``
        """
        descriptors = self._load()
        if name not in descriptors:
            raise CommandNotDeclaredError(f"Command line not declared: '{name}' in {self.config_path}")
        return descriptors[name]

    def is_declared(self, name: str) -> bool:
        try:
            return name in self._load()
        except FileNotFoundError:
            return False

    def get_availability(self, name: str) -> CommandAvailability:
        """
        Check whether a declared command is installed.

        Never raises: undeclared commands and a missing declarations file are
        reported as unavailable.
        """
        try:
            descriptor = self.get_descriptor(name)
        except (CommandNotDeclaredError, FileNotFoundError) as e:
            return CommandAvailability(is_available=False, error_message=str(e))

        if shutil.which(descriptor.command) is None:
            return CommandAvailability(
                is_available=False,
                error_message=f"'{descriptor.command}' not found on PATH",
                install_hint=descriptor.install_hint or None,
            )

        return CommandAvailability(is_available=True)

    def clear_cache(self):
        """Forget loaded declarations; the file is re-read on next lookup."""
        self._cache = None
