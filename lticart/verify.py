#!/usr/bin/env python3
"""
# LtiCart
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

verify.py

Check a built cartridge for broken cross references.

Accepts:
- a manifest file (imsmanifest.xml)
- a cartridge folder containing imsmanifest.xml
- an .imscc archive

Checks:
- identifiers are unique across items and resources
- every item identifierref names a resource
- every resource is referenced by exactly one item
- every <file href> exists in the cartridge
"""

from __future__ import annotations

import zipfile
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Set, Tuple, Union

from lxml import etree

from lticart.errors import CourseFileError
from lticart.generator import MANIFEST_FILENAME
from lticart.sinks import ARCHIVE_EXTENSION


@dataclass
class VerificationReport:
    """Result of verifying one cartridge"""
    source: Path
    item_count: int = 0
    resource_count: int = 0
    issues: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues


def _read_cartridge(path: Path) -> Tuple[bytes, Set[str]]:
    """Return manifest bytes and the set of file paths in the cartridge."""
    if path.is_file() and path.suffix.lower() == ARCHIVE_EXTENSION:
        try:
            with zipfile.ZipFile(path) as zf:
                names = set(zf.namelist())
                if MANIFEST_FILENAME not in names:
                    raise CourseFileError(
                        message=f"{path.name} has no {MANIFEST_FILENAME}",
                        context={"archive": str(path)},
                    )
                return zf.read(MANIFEST_FILENAME), names
        except zipfile.BadZipFile as e:
            raise CourseFileError(
                message=f"{path.name} is not a valid .imscc archive",
                suggestion="Rebuild it with 'lticart build' or verify the cartridge folder instead",
                context={"archive": str(path)},
                cause=e,
            ) from e

    root = path if path.is_dir() else path.parent
    manifest = path / MANIFEST_FILENAME if path.is_dir() else path
    if not manifest.is_file():
        raise CourseFileError(
            message=f"Manifest not found: {manifest}",
            suggestion="Point verify at imsmanifest.xml, its folder, or an .imscc file",
            context={"path": str(path)},
        )

    names = {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}
    return manifest.read_bytes(), names


def verify_manifest(manifest_bytes: bytes, available_files: Set[str], source: Path) -> VerificationReport:
    report = VerificationReport(source=source)

    try:
        root = etree.fromstring(manifest_bytes)
    except etree.XMLSyntaxError as e:
        report.issues.append(f"Manifest is not well-formed XML: {e}")
        return report

    items = [i for i in root.iterfind(".//{*}item") if i.get("identifier") != "root"]
    resources = list(root.iterfind(".//{*}resource"))
    report.item_count = len(items)
    report.resource_count = len(resources)

    all_ids = [e.get("identifier") for e in items + resources if e.get("identifier")]
    for identifier, count in sorted(Counter(all_ids).items()):
        if count > 1:
            report.issues.append(f"Duplicate identifier {identifier!r} ({count} times)")

    resource_ids = {r.get("identifier") for r in resources}
    refs = Counter(i.get("identifierref") for i in items if i.get("identifierref"))

    for item in items:
        ref = item.get("identifierref")
        if ref and ref not in resource_ids:
            title = item.findtext("{*}title", default="").strip()
            report.issues.append(f"Item {item.get('identifier')!r} ({title}) references missing resource {ref!r}")

    for resource_id in sorted(resource_ids):
        count = refs.get(resource_id, 0)
        if count != 1:
            report.issues.append(f"Resource {resource_id!r} is referenced by {count} items")

    for file_elem in root.iterfind(".//{*}resource/{*}file"):
        href = file_elem.get("href")
        if href and href not in available_files:
            report.issues.append(f"Missing file {href}")

    return report


def verify_cartridge(path: Union[str, Path]) -> VerificationReport:
    """Verify a manifest, cartridge folder, or .imscc archive."""
    path = Path(path)
    manifest_bytes, names = _read_cartridge(path)
    return verify_manifest(manifest_bytes, names, path)
