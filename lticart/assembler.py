#!/usr/bin/env python3
"""
# LtiCart
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

assembler.py

Build imsmanifest.xml from course metadata, the compiled organization items
and the resource records.
"""

from __future__ import annotations

from typing import Iterable, List

from lxml import etree

from lticart.models import CourseTree, DEFAULT_CATEGORY, ResourceRecord
from lticart.xml_utils import (
    CC_NS,
    LOMIMSCC_NS,
    XSI_NS,
    add_text_element,
    qname,
    to_document,
)


RESOURCE_TYPE = "imsbasiclti_xmlv1p0"
SCHEMA_NAME = "IMS Common Cartridge"
SCHEMA_VERSION = "1.1.0"
LANGUAGE = "en"

NSMAP = {
    None: CC_NS,
    "lomimscc": LOMIMSCC_NS,
    "xsi": XSI_NS,
}

SCHEMA_LOCATION = " ".join([
    CC_NS, "http://www.imsglobal.org/profile/cc/ccv1p1/ccv1p1_imscp_v1p2_v1p0.xsd",
    LOMIMSCC_NS, "http://www.imsglobal.org/profile/cc/ccv1p1/LOM/ccv1p1_lommanifest_v1p0.xsd",
    "http://ltsc.ieee.org/xsd/imsccv1p1/LOM/resource",
    "http://www.imsglobal.org/profile/cc/ccv1p1/LOM/ccv1p1_lomresource_v1p0.xsd",
])


def _cc(tag: str) -> str:
    return qname(CC_NS, tag)


def _lom(tag: str) -> str:
    return qname(LOMIMSCC_NS, tag)


def _add_lom_string(parent: etree._Element, tag: str, text: str) -> None:
    wrapper = etree.SubElement(parent, _lom(tag))
    add_text_element(wrapper, _lom("string"), text, language=LANGUAGE)


def add_metadata(manifest: etree._Element, course: CourseTree) -> None:
    """Schema block plus LOM general title/description/category."""
    metadata = etree.SubElement(manifest, _cc("metadata"))
    add_text_element(metadata, _cc("schema"), SCHEMA_NAME)
    add_text_element(metadata, _cc("schemaversion"), SCHEMA_VERSION)

    lom = etree.SubElement(metadata, _lom("lom"))
    general = etree.SubElement(lom, _lom("general"))
    _add_lom_string(general, "title", course.title)
    add_text_element(general, _lom("language"), LANGUAGE)
    _add_lom_string(general, "description", course.description or "")

    identifier = etree.SubElement(general, _lom("identifier"))
    add_text_element(identifier, _lom("catalog"), "category")
    add_text_element(identifier, _lom("entry"), course.category or DEFAULT_CATEGORY)


def add_organization(manifest: etree._Element, organization_id: str, items: Iterable[etree._Element]) -> None:
    organizations = etree.SubElement(manifest, _cc("organizations"))
    organization = etree.SubElement(organizations, _cc("organization"))
    organization.set("identifier", organization_id)
    organization.set("structure", "rooted-hierarchy")

    root_item = etree.SubElement(organization, _cc("item"))
    root_item.set("identifier", "root")
    for item in items:
        root_item.append(item)


def add_resources(manifest: etree._Element, resources: List[ResourceRecord]) -> None:
    """One resource per record, in traversal order."""
    section = etree.SubElement(manifest, _cc("resources"))
    for record in resources:
        resource = etree.SubElement(section, _cc("resource"))
        resource.set("identifier", record.id)
        resource.set("type", RESOURCE_TYPE)
        etree.SubElement(resource, _cc("file"), href=record.href)


def assemble(
    course: CourseTree,
    organization_id: str,
    manifest_id: str,
    items: Iterable[etree._Element],
    resources: List[ResourceRecord],
) -> str:
    """Return the complete imsmanifest.xml text."""
    manifest = etree.Element(_cc("manifest"), nsmap=NSMAP)
    manifest.set("identifier", manifest_id)
    manifest.set(qname(XSI_NS, "schemaLocation"), SCHEMA_LOCATION)

    add_metadata(manifest, course)
    add_organization(manifest, organization_id, items)
    add_resources(manifest, resources)

    return to_document(manifest)
