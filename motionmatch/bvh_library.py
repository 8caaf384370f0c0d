"""Registry of BVH clip paths found under an asset directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator, Optional

log = logging.getLogger(__name__)

BVH_FOLDER = "bvh"
BVH_MAP_FOLDER = "bvh_map"


class BvhLibrary:
    """Asset paths of all loaded clips and of the optional map clip."""

    def __init__(self) -> None:
        self.map: Optional[Path] = None
        self.paths: set[Path] = set()

    def __contains__(self, path: object) -> bool:
        return path in self.paths

    def __iter__(self) -> Iterator[Path]:
        return iter(sorted(self.paths))

    def __len__(self) -> int:
        return len(self.paths)

    def load(self, file_path: str | os.PathLike[str]) -> bool:
        """Register a clip; warns and returns False if it was already registered."""
        path = Path(file_path)
        if path in self.paths:
            log.warning("Same Bvh asset loaded again: %s", path)
            return False
        self.paths.add(path)
        return True

    def load_map(self, file_path: str | os.PathLike[str]) -> None:
        """Set the map clip; warns if one was already set."""
        path = Path(file_path)
        if self.map is not None:
            log.warning("Same Bvh map asset loaded again: %s", path)
        self.map = path


def _load_recursive(library: BvhLibrary, path: Path, subpath: Path) -> None:
    try:
        entries = sorted(path.iterdir(), key=lambda p: p.name)
    except OSError:
        log.error("Failed to read Bvh directory: %s", path)
        return
    for entry in entries:
        new_subpath = subpath / entry.name
        if entry.is_dir():
            _load_recursive(library, entry, new_subpath)
        elif entry.is_file():
            library.load(new_subpath)


def load_bvh_library(library: BvhLibrary, asset_root: str | os.PathLike[str]) -> None:
    """Register every clip under the bvh folder and the first file of the map folder.

    Registered paths are relative to ``asset_root``.
    """
    root = Path(asset_root)
    _load_recursive(library, root / BVH_FOLDER, Path(BVH_FOLDER))

    map_dir = root / BVH_MAP_FOLDER
    try:
        entries = sorted(map_dir.iterdir(), key=lambda p: p.name)
    except OSError:
        log.error("Unable to read Bvh Map directory: %s", map_dir)
        return

    if entries:
        first = entries[0]
        if first.is_file():
            library.load_map(Path(BVH_MAP_FOLDER) / first.name)
        else:
            log.warning("Only files are supported in the `%s` folder.", BVH_MAP_FOLDER)

    if len(entries) > 1:
        log.warning(
            "More than 1 entries detected in `%s` folder, only the first one is loaded.",
            BVH_MAP_FOLDER,
        )