"""
Dart binding generator module.

Generates Dart classes, enums, sealed hierarchies and interface classes
from a resolved WIT package graph.
"""

from .generator import DartEmitter, DartGenerator, FunctionMode, create_dart_generator
from .naming import create_dart_sanitizer
from .types import DartType, DartTypeMapper, SCALAR_DART_TYPES, SCALAR_FFI_NAMES

__all__ = [
    "DartEmitter",
    "DartGenerator",
    "DartType",
    "DartTypeMapper",
    "FunctionMode",
    "SCALAR_DART_TYPES",
    "SCALAR_FFI_NAMES",
    "create_dart_generator",
    "create_dart_sanitizer",
    "create_call_site_generator",
    "create_undocumented_generator",
]


def create_call_site_generator():
    """
    Create generator whose interface classes call into the component.

    Features:
    - Interface members resolve their symbol lazily through ``lookup``
    - Docs included
    """
    return create_dart_generator({"interface_mode": "call"})


def create_undocumented_generator():
    """Create generator that drops all doc comments."""
    return create_dart_generator({"generate_docs": False})
