#!/usr/bin/env python3
"""
# LtiCart
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

generator.py

Generate an IMS Common Cartridge from a course tree.

Pipeline for one call:
    1. reset identifiers, allocate manifest + organization ids
    2. compile the tree into items and resource records
    3. assemble imsmanifest.xml
    4. write phase: manifest, then one descriptor per resource
    5. archive phase: zip the cartridge folder into <folder>.imscc

The archive phase starts only after every write has returned. A failure in
either phase propagates; files written before it stay on disk.

Usage:
    from lticart.generator import generate_manifest

    xml = generate_manifest(course, "output/chinese1/imsmanifest.xml", create_package=True)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from lticart.assembler import assemble
from lticart.compiler import TreeCompiler
from lticart.descriptors import render_resource
from lticart.identifiers import (
    MANIFEST_PREFIX,
    ORGANIZATION_PREFIX,
    IdentifierAllocator,
    make_allocator,
)
from lticart.models import CourseTree, ResourceRecord, course_from_dict
from lticart.sinks import FileSystemSink, Sink


log = logging.getLogger(__name__)

MANIFEST_FILENAME = "imsmanifest.xml"


@dataclass
class CartridgeResult:
    """Everything one generation call produced"""
    manifest_xml: str
    resources: List[ResourceRecord] = field(default_factory=list)
    manifest_path: Optional[Path] = None
    archive_path: Optional[Path] = None


def archive_base_for(manifest_path: Path) -> Path:
    """output/course/imsmanifest.xml -> output/course (the .imscc goes beside the folder)"""
    cartridge_dir = manifest_path.parent
    if cartridge_dir.name in ("", ".."):
        # relative "." or "..": name the archive after the real folder
        cartridge_dir = cartridge_dir.resolve()
    return cartridge_dir.parent / cartridge_dir.name


def write_cartridge(sink: Sink, manifest_path: Path, manifest_xml: str, resources: List[ResourceRecord]) -> None:
    """Write phase: the manifest, then each resource descriptor in its own folder."""
    cartridge_dir = manifest_path.parent
    sink.ensure_directory(cartridge_dir)
    sink.write_file(manifest_path, manifest_xml)
    log.info("Generated %s", manifest_path.name)

    for record in resources:
        folder = cartridge_dir / record.folder_name
        sink.ensure_directory(folder)
        sink.write_file(folder / record.descriptor_name, render_resource(record))
        log.debug("Generated %s: %s", record.href, record.title)

    log.info("Wrote %d resource descriptors", len(resources))


def package_cartridge(sink: Sink, manifest_path: Path) -> Path:
    """Archive phase: zip the cartridge folder, entries relative to it."""
    return sink.archive_directory(manifest_path.parent, archive_base_for(manifest_path))


def build_cartridge(
    course: Union[CourseTree, Dict[str, Any]],
    output_path: Optional[Union[str, Path]] = None,
    create_package: bool = False,
    *,
    strategy: str = "monotonic",
    split_assessments: bool = True,
    allocator: Optional[IdentifierAllocator] = None,
    sink: Optional[Sink] = None,
) -> CartridgeResult:
    """
    Compile a course and, when output_path is given, write (and optionally
    package) the cartridge.

    Args:
        course: CourseTree or plain mapping with title/description/category/modules
        output_path: where imsmanifest.xml goes; None keeps everything in memory
        create_package: zip the cartridge folder after writing
        strategy: "monotonic" or "random" identifiers (ignored if allocator given)
        split_assessments: emit a separate assessment item after each leaf
        allocator: identifier allocator to use; reset before use
        sink: persistence backend (defaults to FileSystemSink)

    Returns:
        CartridgeResult with the manifest text, resources and output paths

    Raises:
        StructuralError: a node is neither a container nor a leaf
        CartridgeIOError: a directory or file could not be written
        ArchiveError: the .imscc could not be produced
    """
    tree = course_from_dict(course)

    allocator = allocator or make_allocator(strategy)
    allocator.reset()

    manifest_id = allocator.next(MANIFEST_PREFIX)
    organization_id = allocator.next(ORGANIZATION_PREFIX)

    compiled = TreeCompiler(allocator, split_assessments=split_assessments).compile(tree.modules)
    manifest_xml = assemble(tree, organization_id, manifest_id, compiled.items, compiled.resources)

    result = CartridgeResult(manifest_xml=manifest_xml, resources=compiled.resources)
    if not output_path:
        return result

    sink = sink or FileSystemSink()
    manifest_path = Path(output_path)
    result.manifest_path = manifest_path

    write_cartridge(sink, manifest_path, manifest_xml, compiled.resources)

    if create_package:
        result.archive_path = package_cartridge(sink, manifest_path)

    return result


def generate_manifest(
    course: Union[CourseTree, Dict[str, Any]],
    output_path: Optional[Union[str, Path]] = None,
    create_package: bool = False,
    **options: Any,
) -> str:
    """Generate the cartridge and return the manifest XML text."""
    return build_cartridge(course, output_path, create_package, **options).manifest_xml
