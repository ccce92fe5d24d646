"""
Unit tests for composite type definitions.
"""

import pytest

from wit_dartgen.codegen.core.generator import SchemaIntegrityError
from wit_dartgen.codegen.core.schema import ScalarType, TypeId, load_package
from wit_dartgen.codegen.languages.dart import create_dart_generator

from conftest import (
    COUNTER_ID,
    LIST_ID,
    LOCATION_ID,
    OPTION_ID,
    POINT_ID,
    TUPLE_ID,
    make_emitter,
)

POINT_CLASS = """\
class Point {
  final int /* U32 */ count;
  final String label;

  const Point({
    required this.count,
    required this.label,
  });
}"""


class TestRecordDefinition:
    """Test record rendering."""

    def test_record(self, emitter):
        assert emitter.type_definition(TypeId(POINT_ID)).strip() == POINT_CLASS

    def test_empty_record(self):
        package = load_package({"types": [{"name": "unit", "kind": "record"}]})
        emitter = create_dart_generator().emitter(package)

        assert emitter.type_definition(TypeId(0)).strip() == (
            "class Unit {\n  const Unit();\n}"
        )

    def test_field_names_are_verbatim(self):
        package = load_package(
            {
                "types": [
                    {
                        "name": "entry",
                        "kind": "record",
                        "fields": [{"name": "created-at", "type": "u64"}],
                    }
                ]
            }
        )
        emitter = create_dart_generator().emitter(package)

        assert "final int /* U64 */ created-at;" in emitter.type_definition(TypeId(0))

    def test_field_docs(self):
        package = load_package(
            {
                "types": [
                    {
                        "name": "point",
                        "kind": "record",
                        "docs": "A point.",
                        "fields": [{"name": "x", "type": "s32", "docs": "Abscissa."}],
                    }
                ]
            }
        )
        emitter = create_dart_generator().emitter(package)

        assert emitter.type_definition(TypeId(0)).strip() == (
            "/// A point.\n"
            "class Point {\n"
            "  /// Abscissa.\n"
            "  final int /* S32 */ x;\n"
            "\n"
            "  const Point({\n"
            "    required this.x,\n"
            "  });\n"
            "}"
        )


class TestEnumDefinition:
    """Test enum rendering."""

    def test_enum(self, emitter):
        assert emitter.type_definition(TypeId(1)).strip() == (
            "enum Color {\n  red,\n  lightBlue,\n}"
        )

    def test_keyword_case_gets_suffix(self):
        package = load_package(
            {"types": [{"name": "mode", "kind": "enum", "cases": [{"name": "default"}]}]}
        )
        emitter = create_dart_generator().emitter(package)

        assert "  default_," in emitter.type_definition(TypeId(0))


class TestSealedDefinitions:
    """Test union and variant rendering."""

    def test_union_subtypes_named_after_payload(self, emitter):
        assert emitter.type_definition(TypeId(2)).strip() == (
            "sealed class Shape {}\n"
            "\n"
            "class ShapeIntU32 implements Shape {\n"
            "  final int /* U32 */ value;\n"
            "  const ShapeIntU32(this.value);\n"
            "}\n"
            "\n"
            "class ShapeString implements Shape {\n"
            "  final String value;\n"
            "  const ShapeString(this.value);\n"
            "}"
        )

    def test_variant_with_payloadless_case(self, emitter):
        assert emitter.type_definition(TypeId(3)).strip() == (
            "sealed class Event {}\n"
            "\n"
            "class EventTick implements Event {\n"
            "  const EventTick();\n"
            "}\n"
            "\n"
            "class EventMoved implements Event {\n"
            "  final Point value;\n"
            "  const EventMoved(this.value);\n"
            "}"
        )

    def test_union_generic_payloads_keep_widths_in_subtype_names(self):
        package = load_package(
            {
                "types": [
                    {"kind": "list", "type": "u8"},
                    {"kind": "list", "type": "s16"},
                    {
                        "name": "blob",
                        "kind": "union",
                        "cases": [
                            {"name": "bytes", "type": 0},
                            {"name": "samples", "type": 1},
                        ],
                    },
                ]
            }
        )
        emitter = create_dart_generator().emitter(package)

        assert emitter.type_definition(TypeId(2)).strip() == (
            "sealed class Blob {}\n"
            "\n"
            "class BlobListIntU8 implements Blob {\n"
            "  final List<int> value;\n"
            "  const BlobListIntU8(this.value);\n"
            "}\n"
            "\n"
            "class BlobListIntS16 implements Blob {\n"
            "  final List<int> value;\n"
            "  const BlobListIntS16(this.value);\n"
            "}"
        )

    def test_union_option_and_tuple_payloads_are_distinct(self):
        package = load_package(
            {
                "types": [
                    {"kind": "option", "type": "u32"},
                    {"kind": "option", "type": "s32"},
                    {"kind": "tuple", "types": ["u8", "bool"]},
                    {"kind": "tuple", "types": ["s8", "bool"]},
                    {
                        "name": "mixed",
                        "kind": "union",
                        "cases": [
                            {"name": "a", "type": 0},
                            {"name": "b", "type": 1},
                            {"name": "c", "type": 2},
                            {"name": "d", "type": 3},
                        ],
                    },
                ]
            }
        )
        emitter = create_dart_generator().emitter(package)

        definition = emitter.type_definition(TypeId(4))
        for class_name in [
            "MixedOptionIntU32",
            "MixedOptionIntS32",
            "MixedIntU8Bool",
            "MixedIntS8Bool",
        ]:
            assert definition.count(f"class {class_name} implements Mixed") == 1

    def test_union_case_without_payload_is_fatal(self):
        package = load_package(
            {"types": [{"name": "bad", "kind": "union", "cases": [{"name": "a"}]}]}
        )
        emitter = create_dart_generator().emitter(package)

        with pytest.raises(SchemaIntegrityError):
            emitter.type_definition(TypeId(0))


class TestFlagsDefinition:
    """Test flags rendering."""

    def test_flags(self, emitter):
        assert emitter.type_definition(TypeId(4)).strip() == (
            "typedef Perms = int;\n"
            "\n"
            "class PermsFlag {\n"
            "  static const read = 0;\n"
            "  static const write = 1;\n"
            "}"
        )


class TestStructuralDefinitions:
    """Structural kinds and scalars have no definition of their own."""

    @pytest.mark.parametrize("type_id", [TUPLE_ID, OPTION_ID, LIST_ID, COUNTER_ID])
    def test_no_definition(self, emitter, type_id):
        assert emitter.type_definition(TypeId(type_id)) == ""

    def test_scalar_has_no_definition(self, emitter):
        assert emitter.type_definition(ScalarType.STRING) == ""

    def test_alias_carries_target_definition_with_own_docs(self, emitter):
        definition = emitter.type_definition(TypeId(LOCATION_ID)).strip()

        assert definition == "/// Where something is.\n" + POINT_CLASS

    def test_alias_docs_dropped_without_generate_docs(self, package):
        emitter = make_emitter(package, generate_docs=False)

        assert emitter.type_definition(TypeId(LOCATION_ID)).strip() == POINT_CLASS


class TestIndentation:
    """Test configured indentation."""

    def test_tabs(self, package):
        emitter = make_emitter(package, use_tabs=True)

        assert "\tfinal String label;" in emitter.type_definition(TypeId(POINT_ID))

    def test_indent_size(self, package):
        emitter = make_emitter(package, indent_size=4)

        assert "    final String label;" in emitter.type_definition(TypeId(POINT_ID))
