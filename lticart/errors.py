# errors.py
"""
Custom exception classes with improved error messages for LtiCart

All exceptions include:
- Clear error description
- Actionable suggestions
- Relevant context
"""
from pathlib import Path
from typing import Optional, Dict, Any


class LtiCartError(Exception):
    """Base exception for all LtiCart errors"""

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        self.cause = cause
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error with all details"""
        lines = [
            "",
            "=" * 70,
            f"❌ {self.__class__.__name__}",
            "=" * 70,
            "",
            self.message,
        ]

        if self.context:
            lines.append("")
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestion:
            lines.append("")
            lines.append("💡 Suggestion:")
            lines.append(f"  {self.suggestion}")

        if self.cause:
            lines.append("")
            lines.append(f"Caused by: {type(self.cause).__name__}: {self.cause}")

        lines.append("")
        lines.append("=" * 70)
        lines.append("")

        return "\n".join(lines)


class ConfigurationError(LtiCartError):
    """Configuration is missing or invalid"""
    pass


class CourseFileError(LtiCartError):
    """Course description file could not be read"""
    pass


class StructuralError(LtiCartError):
    """A course node is neither a container nor a leaf"""
    pass


class CartridgeIOError(LtiCartError):
    """Writing the manifest or a descriptor failed"""
    pass


class ArchiveError(LtiCartError):
    """Packaging the cartridge directory failed"""
    pass


class ArchiveWarning(LtiCartError):
    """Recoverable problem while packaging; logged, never raised"""
    pass


# Specific error factory functions

def invalid_node_error(node: Any, path: str) -> StructuralError:
    """Create error for a node that has neither launchUrl nor children"""
    title = node.get("title") if isinstance(node, dict) else None
    return StructuralError(
        message=f"Course node at {path} is neither a container nor a leaf",
        suggestion=(
            "Give the node one of:\n"
            "  launchUrl: https://tool.example.com/launch   (leaf)\n"
            "  children: [...]                              (container)"
        ),
        context={
            "path": path,
            "title": title,
            "keys": sorted(node.keys()) if isinstance(node, dict) else type(node).__name__,
        }
    )


def write_failed_error(path: Path, cause: Exception) -> CartridgeIOError:
    """Create error when a cartridge file or folder cannot be written"""
    return CartridgeIOError(
        message=f"Could not write {path}",
        suggestion=(
            "Check that the output location is writable and not a file.\n"
            "Files written before the failure are left in place; rerun the build."
        ),
        context={"path": str(path)},
        cause=cause
    )


def archive_failed_error(source_dir: Path, archive_path: Path, cause: Exception) -> ArchiveError:
    """Create error when the .imscc archive cannot be produced"""
    return ArchiveError(
        message=f"Failed to package {source_dir} into {archive_path.name}",
        suggestion=(
            "The manifest and descriptor files are still on disk.\n"
            "Fix the problem and rerun with --package, or zip the folder manually."
        ),
        context={
            "source_dir": str(source_dir),
            "archive": str(archive_path),
        },
        cause=cause
    )


def unknown_strategy_error(name: str, valid: list[str]) -> ConfigurationError:
    """Create error for an unknown identifier strategy"""
    return ConfigurationError(
        message=f"Unknown identifier strategy: {name}",
        suggestion=(
            "Use one of:\n" +
            "\n".join(f"  - {v}" for v in valid)
        ),
        context={
            "found": name,
            "valid_strategies": valid,
        }
    )


def course_file_error(path: Path, problem: str, cause: Optional[Exception] = None) -> CourseFileError:
    """Create error for an unreadable course description"""
    return CourseFileError(
        message=f"Cannot load course from {path.name}: {problem}",
        suggestion=(
            "A course file is a YAML or JSON mapping:\n"
            "  title: My Course\n"
            "  modules:\n"
            "    - title: Week 1\n"
            "      children:\n"
            "        - title: Intro\n"
            "          launchUrl: https://tool.example.com/intro"
        ),
        context={"file": str(path)},
        cause=cause
    )
