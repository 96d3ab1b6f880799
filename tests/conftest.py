# tests/conftest.py
"""
Pytest configuration and shared fixtures for LtiCart tests
"""
import logging
from pathlib import Path
from typing import Any, Dict

import pytest
from lxml import etree

from lticart.xml_utils import CC_NS


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch):
    """Keep user config and LTICART_* variables out of every test"""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for name in ("LTICART_ID_STRATEGY", "LTICART_PACKAGE",
                 "LTICART_SPLIT_ASSESSMENTS", "LTICART_OUTPUT_DIR"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_logging():
    """CLI commands reconfigure the root logger; put it back afterwards"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def simple_course() -> Dict[str, Any]:
    """One module holding one launch link"""
    return {
        "title": "C",
        "modules": [
            {
                "title": "M",
                "children": [
                    {"title": "L", "launchUrl": "https://x/a"},
                ],
            }
        ],
    }


@pytest.fixture
def assessment_course() -> Dict[str, Any]:
    """Course mixing plain links, a quiz and an exam"""
    return {
        "title": "Chinese I",
        "description": "First year Mandarin",
        "category": "Hybrid Hosting",
        "modules": [
            {
                "title": "Welcome",
                "children": [
                    {"title": "Course Information", "launchUrl": "http://example.com/c1/info"},
                ],
            },
            {
                "title": "Module 01",
                "children": [
                    {
                        "title": "Greetings",
                        "launchUrl": "https://example.com/c1/greetings",
                        "assessmentUrl": "https://example.com/c1/greetings/quiz/launch",
                        "assessmentMetadata": {"type": "quiz", "points": 15},
                    },
                    {
                        "title": "Unit Review",
                        "launchUrl": "https://example.com/c1/review",
                        "assessmentUrl": "https://example.com/c1/exam/launch",
                        "assessmentMetadata": {
                            "type": "exam",
                            "points": 100,
                            "timeLimit": 60,
                            "attempts": 1,
                            "proctored": True,
                            "passingScore": 70,
                        },
                    },
                ],
            },
        ],
    }


def parse_xml(text: str) -> etree._Element:
    """Parse generated XML text (lxml wants bytes when a declaration is present)"""
    return etree.fromstring(text.encode("utf-8"))


def cc(tag: str) -> str:
    return f"{{{CC_NS}}}{tag}"
