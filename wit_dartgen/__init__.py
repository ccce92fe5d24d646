"""
wit_dartgen: Dart binding generation for compiled WIT components.

Turns a resolved WIT package graph into Dart data types, interface
classes and function signatures.
"""

__version__ = "0.1.0"

from .codegen import (
    GenerationResult,
    GeneratorConfig,
    GeneratorError,
    generate_code,
    generate_from_document,
    get_generator,
    load_package,
    quick_generate,
)

__all__ = [
    "__version__",
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorError",
    "generate_code",
    "generate_from_document",
    "get_generator",
    "load_package",
    "quick_generate",
]
