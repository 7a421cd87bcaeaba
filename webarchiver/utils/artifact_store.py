"""
Artifact Store

Allocates writable temporary files (artifacts) for renderer output and cookie
jars. The store only creates files; their lifecycle belongs to the caller.
"""

import mimetypes
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

load_dotenv()
ARTIFACTS_PATH = os.getenv("WEBARCHIVER_ARTIFACTS_PATH")

ARTIFACT_PREFIX = "webarchiver_"


@dataclass
class Artifact:
    """
    A file produced or consumed by a capture.

    Attributes:
        path: Absolute filesystem path
        filename: Display name (defaults to the path's name)
        mime_type: Guessed from the extension when not given
    """

    path: Path
    filename: Optional[str] = None
    mime_type: Optional[str] = None

    def __post_init__(self):
        self.path = Path(self.path).resolve()
        if self.filename is None:
            self.filename = self.path.name
        if self.mime_type is None:
            self.mime_type = mimetypes.guess_type(self.path.name)[0]

    @property
    def exists(self) -> bool:
        return self.path.exists()

    @property
    def size(self) -> int:
        """File length in bytes, 0 if the file is missing."""
        return self.path.stat().st_size if self.path.exists() else 0


class ArtifactStore:
    """
    Allocates empty artifacts with a given extension.

    Files are created with ``tempfile.mkstemp`` in ``base_dir`` (defaults to
    WEBARCHIVER_ARTIFACTS_PATH, then the system temp directory).
    """

    def __init__(self, base_dir: Optional[Union[str, Path]] = None):
        if base_dir is None and ARTIFACTS_PATH:
            base_dir = ARTIFACTS_PATH
        self.base_dir = Path(base_dir) if base_dir is not None else None

    def create_with_extension(self, extension: str) -> Artifact:
        """
        Allocate a new empty file ending with ``extension``.

        Args:
            extension: File extension, with or without the leading dot

        Returns:
            Artifact pointing at the new (0 byte) file
        """
        if not extension.startswith("."):
            extension = f".{extension}"

        if self.base_dir is not None:
            self.base_dir.mkdir(parents=True, exist_ok=True)

        fd, path = tempfile.mkstemp(
            suffix=extension,
            prefix=ARTIFACT_PREFIX,
            dir=str(self.base_dir) if self.base_dir is not None else None,
        )
        os.close(fd)
        return Artifact(path=Path(path))
