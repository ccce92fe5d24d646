"""
Naming utilities for safe code generation.

Handles name sanitization, case conversions and keyword conflicts
for WIT identifiers (kebab-case) rendered into a target language.
"""

import re
from typing import Set, Dict
from enum import Enum


class NamingCase(Enum):
    """Different naming case styles."""
    SNAKE_CASE = "snake"      # user_name
    CAMEL_CASE = "camel"      # userName
    PASCAL_CASE = "pascal"    # UserName
    KEBAB_CASE = "kebab"      # user-name
    SCREAMING_SNAKE = "screaming_snake"  # USER_NAME


class NameSanitizer:
    """
    Handles name sanitization and case conversion.

    Conversion is a pure function of the input: identical names always map
    to identical results, so repeated generation runs agree.
    """

    def __init__(self, reserved_words: Set[str] = None, builtin_types: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            builtin_types: Set of builtin type names that might conflict
        """
        self.reserved_words = reserved_words or set()
        self.builtin_types = builtin_types or set()
        self._name_cache: Dict[str, str] = {}

    def sanitize_name(self, name: str, target_case: NamingCase = NamingCase.SNAKE_CASE,
                      suffix_on_conflict: str = "_") -> str:
        """
        Sanitize a name for safe use in target language.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Suffix to add for keyword conflicts

        Returns:
            Sanitized name safe for use
        """
        cache_key = f"{name}_{target_case.value}_{suffix_on_conflict}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        cleaned = self._clean_basic(name)
        converted = self._convert_case(cleaned, target_case)
        final_name = self._resolve_conflicts(converted, suffix_on_conflict)

        self._name_cache[cache_key] = final_name
        return final_name

    def convert(self, name: str, target_case: NamingCase) -> str:
        """Case-convert without keyword handling (for name fragments)."""
        return self._convert_case(self._clean_basic(name), target_case)

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        cleaned = re.sub(r'[^a-zA-Z0-9_-]', '_', name)
        cleaned = cleaned.strip('_-')

        if not cleaned:
            cleaned = "field"

        return cleaned

    def _convert_case(self, name: str, target_case: NamingCase) -> str:
        """Convert name to target case style."""
        if target_case == NamingCase.SNAKE_CASE:
            converted = self._to_snake_case(name)
        elif target_case == NamingCase.CAMEL_CASE:
            converted = self._to_camel_case(name)
        elif target_case == NamingCase.PASCAL_CASE:
            converted = self._to_pascal_case(name)
        elif target_case == NamingCase.KEBAB_CASE:
            converted = self._to_kebab_case(name)
        elif target_case == NamingCase.SCREAMING_SNAKE:
            converted = self._to_snake_case(name).upper()
        else:
            converted = name

        # Identifiers cannot start with a digit
        if converted and converted[0].isdigit():
            converted = f"_{converted}"
        return converted

    def _to_snake_case(self, name: str) -> str:
        """Convert to snake_case."""
        name = name.replace('-', '_')

        # Word boundaries: fooBar, HTTPServer
        name = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', name)
        name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)

        name = name.lower()
        name = re.sub(r'_+', '_', name)

        return name.strip('_')

    def _to_camel_case(self, name: str) -> str:
        """Convert to camelCase."""
        parts = [part for part in self._to_snake_case(name).split('_') if part]

        if not parts:
            return name

        return parts[0].lower() + ''.join(part.capitalize() for part in parts[1:])

    def _to_pascal_case(self, name: str) -> str:
        """Convert to PascalCase."""
        snake = self._to_snake_case(name)
        return ''.join(part.capitalize() for part in snake.split('_') if part)

    def _to_kebab_case(self, name: str) -> str:
        """Convert to kebab-case."""
        return self._to_snake_case(name).replace('_', '-')

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Resolve naming conflicts with reserved words and builtin types."""
        if name in self.reserved_words or name in self.builtin_types:
            return f"{name}{suffix}"
        return name

    def clear_cache(self):
        """Forget previously converted names."""
        self._name_cache.clear()


def to_pascal_case(name: str) -> str:
    """PascalCase a WIT identifier: ``my-type`` -> ``MyType``."""
    return NameSanitizer().convert(name, NamingCase.PASCAL_CASE)


def to_camel_case(name: str) -> str:
    """lowerCamelCase a WIT identifier: ``my-case`` -> ``myCase``."""
    return NameSanitizer().convert(name, NamingCase.CAMEL_CASE)
