"""
WIT binding generation module.

Generates host-language bindings from a resolved WIT package graph.
"""

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    is_language_supported,
    list_supported_languages,
)
from .core.generator import (
    CodeGenerator,
    GenerationResult,
    GeneratorError,
    SchemaIntegrityError,
    DanglingTypeReferenceError,
    UnknownTypeKindError,
    AliasDepthError,
    generate_code,
)
from .core.schema import Package, PackageLoadError, load_package
from .core.config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .languages.dart import DartGenerator, FunctionMode


def generate_from_document(document, language="dart", config=None):
    """
    Generate bindings from a serialized package graph.

    Args:
        document: Parsed JSON document describing the package
        language: Target language name
        config: Generator configuration dict, GeneratorConfig or path

    Returns:
        GenerationResult with generated code
    """
    package = load_package(document)
    generator = get_generator(language, config)
    return generate_code(generator, package)


def quick_generate(document, language="dart", **options):
    """
    Quick binding generation from a package document.

    Args:
        document: Package document (dict or JSON string)
        language: Target language
        **options: Generator options

    Returns:
        Generated code string
    """
    if isinstance(document, str):
        import json

        document = json.loads(document)

    result = generate_from_document(document, language, options or None)

    if result.success:
        return result.code
    raise GeneratorError(result.error_message)


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "SchemaIntegrityError",
    "DanglingTypeReferenceError",
    "UnknownTypeKindError",
    "AliasDepthError",
    "Package",
    "PackageLoadError",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "DartGenerator",
    "FunctionMode",
    "generate_code",
    "generate_from_document",
    "quick_generate",
    "get_generator",
    "get_language_info",
    "is_language_supported",
    "list_supported_languages",
    "load_config",
    "load_package",
]
