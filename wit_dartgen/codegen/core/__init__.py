"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .generator import (
    CodeGenerator,
    GeneratorError,
    SchemaIntegrityError,
    DanglingTypeReferenceError,
    UnknownTypeKindError,
    AliasDepthError,
    GenerationResult,
    generate_code,
)
from .schema import (
    Package,
    TypeDef,
    TypeId,
    ScalarType,
    Function,
    Interface,
    World,
    PackageLoadError,
    load_package,
)
from .resolver import TypeResolver
from .naming import NameSanitizer, NamingCase, to_camel_case, to_pascal_case
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "SchemaIntegrityError",
    "DanglingTypeReferenceError",
    "UnknownTypeKindError",
    "AliasDepthError",
    "GenerationResult",
    "generate_code",
    # Package graph
    "Package",
    "TypeDef",
    "TypeId",
    "ScalarType",
    "Function",
    "Interface",
    "World",
    "PackageLoadError",
    "load_package",
    "TypeResolver",
    # Naming utilities - language-agnostic
    "NameSanitizer",
    "NamingCase",
    "to_camel_case",
    "to_pascal_case",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
