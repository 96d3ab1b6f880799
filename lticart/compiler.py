#!/usr/bin/env python3
"""
# LtiCart
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

compiler.py

Walk a course tree and produce the two things the manifest needs:

- the nested <item> elements of the organization section
- the flat list of ResourceRecords, one per descriptor file

The walk is depth-first and pre-order; siblings keep their input order.
A leaf with an assessment becomes two sibling items, content first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List

from lxml import etree

from lticart.identifiers import (
    ITEM_PREFIX,
    IdentifierAllocator,
    folder_name_for,
    resource_id_for,
)
from lticart.models import (
    ContainerNode,
    LeafNode,
    Node,
    ResourceRecord,
    node_from_dict,
)
from lticart.xml_utils import (
    CC_NS,
    add_text_element,
    qname,
    serialize_fragment,
    without_namespaces,
)


log = logging.getLogger(__name__)


@dataclass
class CompiledTree:
    """Organization items plus the resources they reference"""
    items: List[etree._Element] = field(default_factory=list)
    resources: List[ResourceRecord] = field(default_factory=list)

    @property
    def items_xml(self) -> str:
        """Bare <item> markup, as it reads inside the organization element."""
        return "".join(serialize_fragment(without_namespaces(item)) for item in self.items)


def assessment_title_for(leaf: LeafNode) -> str:
    """Explicit title, else '<title> Exam' for exams and '<title> Quiz' otherwise."""
    if leaf.assessment_title:
        return leaf.assessment_title
    kind = leaf.assessment_metadata.type if leaf.assessment_metadata else None
    return f"{leaf.title} {'Exam' if kind == 'exam' else 'Quiz'}"


def _new_item(identifier: str, title: str, identifierref: str = None) -> etree._Element:
    item = etree.Element(qname(CC_NS, "item"), nsmap={None: CC_NS})
    item.set("identifier", identifier)
    if identifierref:
        item.set("identifierref", identifierref)
    add_text_element(item, qname(CC_NS, "title"), title)
    return item


class TreeCompiler:
    """
    Compile course nodes into organization items and resource records.

    Args:
        allocator: identifier source, owned by the current generation call
        split_assessments: emit an assessment item after each leaf that has
            an assessmentUrl; when False assessments are left out
    """

    def __init__(self, allocator: IdentifierAllocator, split_assessments: bool = True):
        self.allocator = allocator
        self.split_assessments = split_assessments

    def compile(self, modules: Iterable[Any]) -> CompiledTree:
        nodes = [node_from_dict(m, f"modules[{i}]") for i, m in enumerate(modules)]
        resources: List[ResourceRecord] = []
        items = self.compile_nodes(nodes, resources)
        log.debug("Compiled %d items, %d resources", len(items), len(resources))
        return CompiledTree(items=items, resources=resources)

    def compile_nodes(self, nodes: List[Node], resources: List[ResourceRecord]) -> List[etree._Element]:
        """Compile siblings in order, appending their resources to `resources`."""
        items: List[etree._Element] = []
        for node in nodes:
            if isinstance(node, LeafNode):
                items.extend(self.compile_leaf(node, resources))
            else:
                items.append(self.compile_container(node, resources))
        return items

    def compile_container(self, node: ContainerNode, resources: List[ResourceRecord]) -> etree._Element:
        item = _new_item(self.allocator.next(ITEM_PREFIX), node.title)
        for child in self.compile_nodes(node.children, resources):
            item.append(child)
        return item

    def compile_leaf(self, node: LeafNode, resources: List[ResourceRecord]) -> List[etree._Element]:
        items = [self._launch_item(node.title, node.launch_url, resources)]

        if node.has_assessment and self.split_assessments:
            items.append(self._launch_item(
                assessment_title_for(node),
                node.assessment_url,
                resources,
                is_assessment=True,
                metadata=node.assessment_metadata,
            ))
        return items

    def _launch_item(self, title, launch_url, resources, is_assessment=False, metadata=None):
        item_id = self.allocator.next(ITEM_PREFIX)
        record = ResourceRecord(
            id=resource_id_for(item_id),
            folder_name=folder_name_for(item_id),
            launch_url=launch_url,
            title=title,
            is_assessment=is_assessment,
            metadata=metadata,
        )
        resources.append(record)
        return _new_item(item_id, title, record.id)
