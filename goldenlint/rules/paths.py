"""Path classification predicates shared by the rules."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

__all__ = ["PathClassifier"]


@dataclass(frozen=True)
class PathClassifier:
    server_markers: tuple[str, ...] = ("server",)
    manifest_names: tuple[str, ...] = ("package.json",)

    def is_server_file(self, file: str) -> bool:
        return any(marker in file for marker in self.server_markers)

    def is_manifest(self, file: str) -> bool:
        name = PurePosixPath(file.replace("\\", "/")).name
        return name in self.manifest_names
