"""
Shared utilities for webarchiver.

Common functionality used by the capture context:
- Command-line declarations and availability checks
- Artifact (temporary file) allocation
- PDF inspection
- Logging setup
"""

from webarchiver.utils.artifact_store import Artifact, ArtifactStore
from webarchiver.utils.command_registry import CommandAvailability, CommandRegistry
from webarchiver.utils.timestamp import now

__all__ = ["Artifact", "ArtifactStore", "CommandAvailability", "CommandRegistry", "now"]
