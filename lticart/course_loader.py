"""
course_loader.py - Read course descriptions from YAML or JSON files

    title: Chinese I
    category: Hybrid Hosting
    modules:
      - title: Welcome
        children:
          - title: Course Information
            launchUrl: https://example.com/chinese1/course-info
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from lticart.errors import course_file_error
from lticart.models import CourseTree, course_from_dict


YAML_SUFFIXES = {".yaml", ".yml"}
JSON_SUFFIXES = {".json"}


def read_course_data(path: Union[str, Path]) -> Dict[str, Any]:
    """Load the raw course mapping from disk."""
    path = Path(path)
    if not path.is_file():
        raise course_file_error(path, "file not found")

    suffix = path.suffix.lower()
    if suffix not in YAML_SUFFIXES | JSON_SUFFIXES:
        raise course_file_error(path, f"unsupported file type '{suffix or path.name}'")

    try:
        text = path.read_text(encoding="utf-8")
        if suffix in JSON_SUFFIXES:
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise course_file_error(path, "could not parse file", cause=e) from e

    if not isinstance(data, dict):
        raise course_file_error(path, "top level must be a mapping")
    return data


def load_course(path: Union[str, Path]) -> CourseTree:
    """Load and validate a course file."""
    return course_from_dict(read_course_data(path))
