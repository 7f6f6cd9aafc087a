"""Controller that applies the naming service to entries on disk."""

from __future__ import annotations

import logging
import os
from typing import Iterator, List, Tuple

from safename.dtos.rename_result import RenameResult
from safename.services.naming_service import NamingService


logger = logging.getLogger(__name__)


class NamingController:
    """Plan and perform renames of directory entries whose names are not portable."""

    def __init__(self, naming_service: NamingService, use_clean: bool = True) -> None:
        """Persist the naming service dependency and the transform to use."""

        self._naming_service = naming_service
        self._use_clean = use_clean

    def normalize(self, component: str) -> str:
        """Return the normalized form of a single path component."""

        if self._use_clean:
            return self._naming_service.clean(component)
        return self._naming_service.name(component)

    def plan_directory(self, root: str, recursive: bool = False) -> List[RenameResult]:
        """List the entries under ``root`` whose normalized name differs.

        Entries are returned children first, so applying them in order never
        invalidates a path that is still pending.
        """

        results: List[RenameResult] = []
        for directory, entry, is_dir in self._iter_entries(root, recursive):
            new_name = self.normalize(entry)
            if new_name != entry:
                results.append(
                    RenameResult(directory=directory, oldName=entry, newName=new_name, isDir=is_dir)
                )
        return results

    def apply(self, results: List[RenameResult]) -> List[RenameResult]:
        """Rename every planned entry, recording failures instead of stopping."""

        for result in results:
            if os.path.lexists(result.newPath):
                result.error = f"'{result.newName}' ya existe"
                logger.error("No se renombró %s: %s", result.oldPath, result.error)
                continue
            try:
                os.rename(result.oldPath, result.newPath)
            except OSError as exc:
                result.error = str(exc)
                logger.error("No fue posible renombrar %s: %s", result.oldPath, exc)
                continue
            result.applied = True
            logger.info("Renombrado %s -> %s", result.oldPath, result.newName)
        return results

    def rename_directory(
        self,
        root: str,
        recursive: bool = False,
        change: bool = False,
    ) -> List[RenameResult]:
        """Plan the renames under ``root`` and apply them when ``change`` is set."""

        results = self.plan_directory(root, recursive)
        if change:
            self.apply(results)
        return results

    @staticmethod
    def _iter_entries(root: str, recursive: bool) -> Iterator[Tuple[str, str, bool]]:
        """Yield ``(directory, entry, is_dir)`` for the entries to inspect."""

        if not recursive:
            with os.scandir(root) as entries:
                for entry in sorted(entries, key=lambda item: item.name):
                    yield root, entry.name, entry.is_dir(follow_symlinks=False)
            return

        for directory, dir_names, file_names in os.walk(root, topdown=False):
            dir_set = set(dir_names)
            for entry in sorted(dir_names + file_names):
                yield directory, entry, entry in dir_set
