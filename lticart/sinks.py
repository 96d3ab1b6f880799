#!/usr/bin/env python3
"""
# LtiCart
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

sinks.py

Where generated cartridge files go.

The generator only talks to the Sink interface:
    ensure_directory(path)
    write_file(path, content)
    archive_directory(source_dir, dest_without_extension) -> Path

FileSystemSink writes to disk and zips with maximum compression.
MemorySink keeps everything in a dict (tests, dry runs).
"""

from __future__ import annotations

import logging
import zipfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Union

from lticart.errors import (
    ArchiveError,
    ArchiveWarning,
    archive_failed_error,
    write_failed_error,
)


log = logging.getLogger(__name__)

ARCHIVE_EXTENSION = ".imscc"

PathLike = Union[str, Path]


def archive_path_for(dest_without_extension: PathLike) -> Path:
    dest = Path(dest_without_extension)
    if not dest.name:
        raise ArchiveError(
            message=f"Cannot name an archive after {dest}",
            suggestion="Write the cartridge into its own folder, e.g. -o output/course/imsmanifest.xml",
            context={"destination": str(dest)},
        )
    return dest.with_name(dest.name + ARCHIVE_EXTENSION)


class Sink(ABC):
    """Persistence capability used by the generator."""

    @abstractmethod
    def ensure_directory(self, path: PathLike) -> None:
        """Create path and its parents; no-op when present."""

    @abstractmethod
    def write_file(self, path: PathLike, content: str) -> None:
        """Write UTF-8 text, replacing any existing file."""

    @abstractmethod
    def archive_directory(self, source_dir: PathLike, dest_without_extension: PathLike) -> Path:
        """Zip source_dir into <dest>.imscc and return the archive path."""


class FileSystemSink(Sink):
    """Write cartridge files to the local filesystem."""

    def __init__(self, compresslevel: int = 9):
        self.compresslevel = compresslevel
        self.warnings: List[ArchiveWarning] = []

    def ensure_directory(self, path: PathLike) -> None:
        path = Path(path)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise write_failed_error(path, e) from e

    def write_file(self, path: PathLike, content: str) -> None:
        path = Path(path)
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise write_failed_error(path, e) from e

    def archive_directory(self, source_dir: PathLike, dest_without_extension: PathLike) -> Path:
        source_dir = Path(source_dir)
        archive_path = archive_path_for(dest_without_extension)
        self.warnings = []

        try:
            archive_path.parent.mkdir(parents=True, exist_ok=True)
            # Listing happens before the archive is opened so it never sees itself
            files = sorted(p for p in source_dir.rglob("*") if p.is_file())

            with zipfile.ZipFile(
                archive_path, "w",
                compression=zipfile.ZIP_DEFLATED,
                compresslevel=self.compresslevel,
            ) as zf:
                for file_path in files:
                    arcname = file_path.relative_to(source_dir).as_posix()
                    try:
                        zf.write(file_path, arcname)
                    except FileNotFoundError as e:
                        self._warn(file_path, e)
        except OSError as e:
            raise archive_failed_error(source_dir, archive_path, e) from e

        log.info("Cartridge package created: %s", archive_path)
        log.info("Total bytes: %d", archive_path.stat().st_size)
        return archive_path

    def _warn(self, file_path: Path, cause: Exception) -> None:
        warning = ArchiveWarning(
            message=f"Skipped {file_path.name}: it disappeared before it could be archived",
            context={"file": str(file_path)},
            cause=cause,
        )
        self.warnings.append(warning)
        log.warning("Skipped vanished file while archiving: %s", file_path)


class MemorySink(Sink):
    """Collect writes in memory; archives record the files they would hold."""

    def __init__(self):
        self.directories: List[Path] = []
        self.files: Dict[Path, str] = {}
        self.archives: Dict[Path, List[str]] = {}

    def ensure_directory(self, path: PathLike) -> None:
        path = Path(path)
        if path not in self.directories:
            self.directories.append(path)

    def write_file(self, path: PathLike, content: str) -> None:
        self.files[Path(path)] = content

    def archive_directory(self, source_dir: PathLike, dest_without_extension: PathLike) -> Path:
        source_dir = Path(source_dir)
        archive_path = archive_path_for(dest_without_extension)
        self.archives[archive_path] = sorted(
            p.relative_to(source_dir).as_posix()
            for p in self.files
            if source_dir in p.parents
        )
        return archive_path

    def read(self, path: PathLike) -> Optional[str]:
        return self.files.get(Path(path))
