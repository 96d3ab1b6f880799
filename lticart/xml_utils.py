"""
xml_utils.py - Shared XML helpers

Every document LtiCart writes starts with the same double-quoted XML
declaration and is pretty-printed with two-space indentation.
"""

import copy
from typing import Optional

from lxml import etree


XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"

# Common Cartridge 1.1 manifest namespaces
CC_NS = "http://www.imsglobal.org/xsd/imsccv1p1/imscp_v1p1"
LOMIMSCC_NS = "http://ltsc.ieee.org/xsd/imsccv1p1/LOM/manifest"


def qname(namespace: str, tag: str) -> str:
    """Clark notation: {namespace}tag"""
    return f"{{{namespace}}}{tag}"


def add_text_element(parent: etree._Element, tag: str, text: Optional[str], **attribs) -> etree._Element:
    """Add a text element to parent."""
    elem = etree.SubElement(parent, tag, **attribs)
    if text is not None:
        elem.text = str(text)
    return elem


def without_namespaces(elem: etree._Element) -> etree._Element:
    """Deep copy of elem with every tag reduced to its local name."""
    clone = copy.deepcopy(elem)
    for node in clone.iter():
        if isinstance(node.tag, str):
            node.tag = etree.QName(node).localname
    etree.cleanup_namespaces(clone)
    return clone


def serialize_fragment(elem: etree._Element) -> str:
    """Serialize one element without a declaration."""
    return etree.tostring(elem, encoding="unicode", pretty_print=True)


def to_document(root: etree._Element) -> str:
    """Return the full document text, declaration first."""
    body = etree.tostring(root, encoding="unicode", pretty_print=True)
    return f"{XML_DECLARATION}\n{body}"
