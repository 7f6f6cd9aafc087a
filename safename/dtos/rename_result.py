"""Data transfer objects describing planned or applied renames."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class RenameResult:
    """Represent a single path component whose normalized name differs."""

    directory: str
    oldName: str
    newName: str
    isDir: bool
    applied: bool = False
    error: Optional[str] = None

    @property
    def oldPath(self) -> str:
        """Return the full path of the entry before renaming."""

        return os.path.join(self.directory, self.oldName)

    @property
    def newPath(self) -> str:
        """Return the full path the entry is renamed to."""

        return os.path.join(self.directory, self.newName)
