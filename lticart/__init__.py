"""
LtiCart - IMS Common Cartridge builder for LTI course outlines

Compiles a course outline (modules containing launchable items, each with
an optional assessment) into imsmanifest.xml plus one LTI descriptor per
launch, optionally packaged as an .imscc archive.
"""

__version__ = "1.0.0"
__author__ = "Dale Chapman"
__license__ = "MIT"

# Make key entry points easily importable
from .errors import LtiCartError, StructuralError
from .generator import build_cartridge, generate_manifest

__all__ = [
    "__version__",
    "build_cartridge",
    "generate_manifest",
    "LtiCartError",
    "StructuralError",
]
