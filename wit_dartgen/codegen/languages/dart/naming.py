"""
Dart-specific naming utilities and sanitization.

Handles Dart reserved words, core library types and naming conventions.
"""

from ...core.naming import NameSanitizer, NamingCase


# Dart reserved words and built-in identifiers
DART_RESERVED_WORDS = {
    "abstract",
    "as",
    "assert",
    "async",
    "await",
    "base",
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "covariant",
    "default",
    "deferred",
    "do",
    "dynamic",
    "else",
    "enum",
    "export",
    "extends",
    "extension",
    "external",
    "factory",
    "false",
    "final",
    "finally",
    "for",
    "get",
    "if",
    "implements",
    "import",
    "in",
    "interface",
    "is",
    "late",
    "library",
    "mixin",
    "new",
    "null",
    "operator",
    "part",
    "required",
    "rethrow",
    "return",
    "sealed",
    "set",
    "static",
    "super",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typedef",
    "var",
    "void",
    "when",
    "while",
    "with",
    "yield",
}

# Core library types a generated class must not shadow
DART_BUILTIN_TYPES = {
    "bool",
    "double",
    "int",
    "num",
    "BigInt",
    "Enum",
    "Function",
    "Future",
    "Iterable",
    "List",
    "Map",
    "Never",
    "Null",
    "Object",
    "Option",
    "Record",
    "Result",
    "Set",
    "Stream",
    "String",
    "Symbol",
    "Type",
}


def create_dart_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Dart."""
    return NameSanitizer(DART_RESERVED_WORDS, DART_BUILTIN_TYPES)


def validate_dart_identifier(name: str) -> list[str]:
    """
    Validate a Dart identifier.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not name:
        errors.append("Identifier cannot be empty")
        return errors

    if not name.replace("$", "_").isidentifier() or not name.isascii():
        errors.append(f"'{name}' is not a valid Dart identifier")

    if name in DART_RESERVED_WORDS:
        errors.append(f"'{name}' is a Dart reserved word")

    return errors


def type_name(sanitizer: NameSanitizer, name: str) -> str:
    """Dart class/enum/typedef name for a WIT identifier."""
    return sanitizer.sanitize_name(name, NamingCase.PASCAL_CASE)


def member_name(sanitizer: NameSanitizer, name: str) -> str:
    """Dart member, parameter or enum case name for a WIT identifier."""
    return sanitizer.sanitize_name(name, NamingCase.CAMEL_CASE)
