"""
Language-specific binding generators.
"""

from .dart import DartGenerator, FunctionMode, create_dart_generator

__all__ = ["DartGenerator", "FunctionMode", "create_dart_generator"]
