#!/usr/bin/env python3
"""
# LtiCart
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

descriptors.py

Render the per-resource LTI descriptor files of a Common Cartridge.

Two flavors:
- basiclti.xml      LTI 1.0/1.1 launch link for ordinary content
- lti_advantage.xml LTI 1.3 launch link with Canvas assignment extensions,
                    used for assessments

Both renderers are pure: same inputs, same bytes.
"""

from __future__ import annotations

import re
from typing import Optional

from lxml import etree

from lticart.models import AssessmentMetadata, DEFAULT_POINTS, ResourceRecord
from lticart.xml_utils import XSI_NS, add_text_element, qname, to_document


# ============================================================================
# Constants
# ============================================================================

LTICC_NS = "http://www.imsglobal.org/xsd/imslticc_v1p0"
BLTI_NS = "http://www.imsglobal.org/xsd/imsbasiclti_v1p0"
LTICM_NS = "http://www.imsglobal.org/xsd/imslticm_v1p0"
LTICP_NS = "http://www.imsglobal.org/xsd/imslticp_v1p0"

NSMAP = {
    None: LTICC_NS,
    "blti": BLTI_NS,
    "lticm": LTICM_NS,
    "lticp": LTICP_NS,
    "xsi": XSI_NS,
}

SCHEMA_LOCATION = " ".join([
    LTICC_NS, "http://www.imsglobal.org/xsd/lti/ltiv1p0/imslticc_v1p0.xsd",
    BLTI_NS, "http://www.imsglobal.org/xsd/lti/ltiv1p0/imsbasiclti_v1p0.xsd",
    LTICM_NS, "http://www.imsglobal.org/xsd/lti/ltiv1p0/imslticm_v1p0.xsd",
    LTICP_NS, "http://www.imsglobal.org/xsd/lti/ltiv1p0/imslticp_v1p0.xsd",
])

BASIC_DEFAULT_TITLE = "External Tool"
ADVANTAGE_DEFAULT_TITLE = "Assessment"

VENDOR_CODE = "external_tool"
VENDOR_NAME = "External Tool Provider"
EXTENSION_PLATFORM = "canvas.instructure.com"

_LAST_SEGMENT_RE = re.compile(r"/[^/]*$")


# ============================================================================
# URL helpers
# ============================================================================

def secure_url(launch_url: str) -> str:
    """Swap a leading http:// for https://; anything else passes through."""
    if launch_url.startswith("http://"):
        return "https://" + launch_url[len("http://"):]
    return launch_url


def sibling_url(launch_url: str, segment: str) -> str:
    """Replace the final path segment: https://t/a/launch -> https://t/a/jwks"""
    return _LAST_SEGMENT_RE.sub(f"/{segment}", launch_url, count=1)


# ============================================================================
# Shared structure
# ============================================================================

def _base_link(launch_url: str, title: str, description: str) -> etree._Element:
    root = etree.Element(qname(LTICC_NS, "cartridge_basiclti_link"), nsmap=NSMAP)
    root.set(qname(XSI_NS, "schemaLocation"), SCHEMA_LOCATION)

    add_text_element(root, qname(BLTI_NS, "title"), title)
    add_text_element(root, qname(BLTI_NS, "description"), description)
    add_text_element(root, qname(BLTI_NS, "launch_url"), launch_url)
    add_text_element(root, qname(BLTI_NS, "secure_launch_url"), secure_url(launch_url))

    vendor = etree.SubElement(root, qname(BLTI_NS, "vendor"))
    add_text_element(vendor, qname(LTICP_NS, "code"), VENDOR_CODE)
    add_text_element(vendor, qname(LTICP_NS, "name"), VENDOR_NAME)
    return root


def _close_link(root: etree._Element) -> None:
    etree.SubElement(root, qname(LTICC_NS, "cartridge_bundle"), identifierref="BLTI001_Bundle")
    etree.SubElement(root, qname(LTICC_NS, "cartridge_icon"), identifierref="BLTI001_Icon")


def _add_property(parent: etree._Element, name: str, value) -> etree._Element:
    return add_text_element(parent, qname(LTICM_NS, "property"), value, name=name)


# ============================================================================
# Renderers
# ============================================================================

def render_basic_lti(launch_url: str, title: Optional[str] = None) -> str:
    """Render basiclti.xml for a content launch."""
    root = _base_link(launch_url, title or BASIC_DEFAULT_TITLE, "Basic LTI Launch")
    _close_link(root)
    return to_document(root)


def render_lti_advantage(
    launch_url: str,
    title: Optional[str] = None,
    metadata: Optional[AssessmentMetadata] = None,
) -> str:
    """
    Render lti_advantage.xml for an assessment launch.

    Optional grading properties appear only when set, always in the order
    time_limit, allowed_attempts, proctoring_enabled, passing_score. The
    OIDC initiation URL is always the last property.
    """
    metadata = metadata or AssessmentMetadata()
    root = _base_link(
        launch_url,
        title or ADVANTAGE_DEFAULT_TITLE,
        "Assessment Launch via LTI Advantage",
    )

    extensions = etree.SubElement(root, qname(BLTI_NS, "extensions"), platform=EXTENSION_PLATFORM)
    _add_property(extensions, "tool_id", "lti_advantage_tool")
    _add_property(extensions, "privacy_level", "public")
    _add_property(extensions, "lti_1_3_enabled", "true")
    _add_property(extensions, "public_jwk_url", sibling_url(launch_url, "jwks"))
    _add_property(extensions, "assignment_enabled", "true")
    _add_property(extensions, "assignment_points_possible", metadata.points or DEFAULT_POINTS)

    if metadata.time_limit:
        _add_property(extensions, "time_limit", metadata.time_limit)
    if metadata.attempts:
        _add_property(extensions, "allowed_attempts", metadata.attempts)
    if metadata.proctored:
        _add_property(extensions, "proctoring_enabled", "true")
    if metadata.passing_score:
        _add_property(extensions, "passing_score", metadata.passing_score)

    settings = _add_property(extensions, "settings", None)
    _add_property(settings, "oidc_initiation_url", sibling_url(launch_url, "init"))

    _close_link(root)
    return to_document(root)


def render_resource(resource: ResourceRecord) -> str:
    """Pick the descriptor flavor for a resource record."""
    if resource.is_assessment:
        return render_lti_advantage(resource.launch_url, resource.title, resource.metadata)
    return render_basic_lti(resource.launch_url, resource.title)
