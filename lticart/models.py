"""
models.py - Course tree and resource data classes

A course description arrives as plain mappings (from YAML, JSON or Python
code). course_from_dict() turns it into the dataclasses below and rejects
nodes that are neither containers nor leaves before anything is compiled.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from lticart.errors import StructuralError, invalid_node_error


DEFAULT_CATEGORY = "Hybrid Hosting"
DEFAULT_POINTS = 10


@dataclass
class AssessmentMetadata:
    """Grading settings carried into the LTI Advantage descriptor"""
    type: Optional[str] = None  # exam, quiz
    points: Any = DEFAULT_POINTS
    time_limit: Any = None
    attempts: Any = None
    proctored: bool = False
    passing_score: Any = None


@dataclass
class LeafNode:
    """A launchable item, optionally followed by an assessment"""
    title: str
    launch_url: str
    assessment_url: Optional[str] = None
    assessment_title: Optional[str] = None
    assessment_metadata: Optional[AssessmentMetadata] = None

    @property
    def has_assessment(self) -> bool:
        return bool(self.assessment_url)


@dataclass
class ContainerNode:
    """A module or folder holding other nodes"""
    title: str
    children: List["Node"] = field(default_factory=list)


Node = Union[ContainerNode, LeafNode]


@dataclass
class CourseTree:
    """Root of a course description"""
    title: str
    description: str = ""
    category: str = DEFAULT_CATEGORY
    modules: List[Node] = field(default_factory=list)


@dataclass
class ResourceRecord:
    """One descriptor file and its entry in the resources section"""
    id: str
    folder_name: str
    launch_url: str
    title: str
    is_assessment: bool = False
    metadata: Optional[AssessmentMetadata] = None

    @property
    def descriptor_name(self) -> str:
        return "lti_advantage.xml" if self.is_assessment else "basiclti.xml"

    @property
    def href(self) -> str:
        return f"{self.folder_name}/{self.descriptor_name}"


# ============================================================================
# Parsing
# ============================================================================

def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key; camelCase and snake_case both accepted."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def metadata_from_dict(data: Optional[Dict[str, Any]]) -> AssessmentMetadata:
    data = data or {}
    return AssessmentMetadata(
        type=_pick(data, "type"),
        points=_pick(data, "points") or DEFAULT_POINTS,
        time_limit=_pick(data, "timeLimit", "time_limit"),
        attempts=_pick(data, "attempts"),
        proctored=bool(_pick(data, "proctored", default=False)),
        passing_score=_pick(data, "passingScore", "passing_score"),
    )


def node_from_dict(data: Any, path: str = "node") -> Node:
    """Build a ContainerNode or LeafNode, raising StructuralError otherwise."""
    if isinstance(data, (LeafNode, ContainerNode)):
        return data
    if not isinstance(data, dict):
        raise invalid_node_error(data, path)

    title = str(_pick(data, "title", default=""))
    launch_url = _pick(data, "launchUrl", "launch_url")

    if launch_url:
        assessment_url = _pick(data, "assessmentUrl", "assessment_url")
        raw_meta = _pick(data, "assessmentMetadata", "assessment_metadata")
        return LeafNode(
            title=title,
            launch_url=str(launch_url),
            assessment_url=str(assessment_url) if assessment_url else None,
            assessment_title=_pick(data, "assessmentTitle", "assessment_title"),
            assessment_metadata=metadata_from_dict(raw_meta) if assessment_url else None,
        )

    children = data.get("children")
    if not isinstance(children, list):
        raise invalid_node_error(data, path)

    return ContainerNode(
        title=title,
        children=[
            node_from_dict(child, f"{path}.children[{i}]")
            for i, child in enumerate(children)
        ],
    )


def course_from_dict(data: Union[Dict[str, Any], CourseTree]) -> CourseTree:
    """Convert a plain course mapping into a CourseTree."""
    if isinstance(data, CourseTree):
        return data
    if not isinstance(data, dict):
        raise StructuralError(
            message="Course description must be a mapping",
            context={"found": type(data).__name__},
        )

    modules = data.get("modules") or []
    if not isinstance(modules, list):
        raise StructuralError(
            message="Course 'modules' must be a list",
            context={"found": type(modules).__name__},
        )

    return CourseTree(
        title=str(data.get("title") or ""),
        description=data.get("description") or "",
        category=data.get("category") or DEFAULT_CATEGORY,
        modules=[node_from_dict(m, f"modules[{i}]") for i, m in enumerate(modules)],
    )
