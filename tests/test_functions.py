"""
Unit tests for function, interface and world rendering.
"""

import pytest

from wit_dartgen.codegen.core.generator import SchemaIntegrityError
from wit_dartgen.codegen.core.schema import load_package
from wit_dartgen.codegen.languages.dart import FunctionMode, create_dart_generator

from conftest import make_emitter

ADD_PARAMS = "int /* U32 */ a, int /* U32 */ b"


@pytest.fixture
def add(package):
    return package.interfaces["math"].functions[0]


def load_function(node):
    """Load a single function through an interface."""
    package = load_package({"interfaces": {"api": {"functions": [node]}}})
    return package, package.interfaces["api"].functions[0]


class TestFunctionModes:
    """Test the three member renderings of a function."""

    def test_field_mode(self, package, add):
        emitter = make_emitter(package, generate_docs=False)

        assert emitter.function_definition(add, FunctionMode.FIELD) == (
            f"final int /* U32 */ Function({ADD_PARAMS}) add;"
        )

    def test_declaration_mode(self, package, add):
        emitter = make_emitter(package, generate_docs=False)

        assert emitter.function_definition(add, FunctionMode.DECLARATION) == (
            f"int /* U32 */ add({ADD_PARAMS});"
        )

    def test_call_mode(self, package, add):
        emitter = make_emitter(package, generate_docs=False)

        assert emitter.function_definition(add, FunctionMode.CALL) == (
            "late final _add = lookup('add');\n"
            f"int /* U32 */ add({ADD_PARAMS}) {{\n"
            "  return _add(a, b);\n"
            "}"
        )

    def test_docs_precede_declaration(self, emitter, add):
        assert emitter.function_definition(add, FunctionMode.DECLARATION) == (
            "/// Adds two numbers.\n" f"int /* U32 */ add({ADD_PARAMS});"
        )

    def test_docs_follow_lookup_in_call_mode(self, emitter, add):
        lines = emitter.function_definition(add, FunctionMode.CALL).split("\n")

        assert lines[0] == "late final _add = lookup('add');"
        assert lines[1] == "/// Adds two numbers."

    def test_custom_lookup_function(self, package, add):
        emitter = make_emitter(package, lookup_function="resolve")

        rendered = emitter.function_definition(add, FunctionMode.CALL)
        assert rendered.startswith("late final _add = resolve('add');")

    def test_lookup_key_is_source_name(self):
        package, function = load_function(
            {"name": "get-value", "params": [{"name": "the-key", "type": "string"}]}
        )
        emitter = create_dart_generator().emitter(package)

        assert emitter.function_definition(function, FunctionMode.CALL) == (
            "late final _getValue = lookup('get-value');\n"
            "void getValue(String theKey) {\n"
            "  return _getValue(theKey);\n"
            "}"
        )

    def test_function_named_like_lookup_gets_suffix(self):
        package, function = load_function(
            {"name": "lookup", "params": [{"name": "k", "type": "string"}]}
        )
        emitter = create_dart_generator().emitter(package)

        assert emitter.function_definition(function, FunctionMode.CALL) == (
            "late final _lookup_ = lookup('lookup');\n"
            "void lookup_(String k) {\n"
            "  return _lookup_(k);\n"
            "}"
        )

    def test_lookup_clash_follows_configured_name(self):
        package, function = load_function({"name": "resolve"})
        emitter = make_emitter(package, lookup_function="resolve")

        rendered = emitter.function_definition(function, FunctionMode.CALL)
        assert rendered.startswith("late final _resolve_ = resolve('resolve');")
        assert "void resolve_() {" in rendered

    def test_lookup_name_kept_outside_call_mode(self):
        package, function = load_function({"name": "lookup"})
        emitter = create_dart_generator().emitter(package)

        assert emitter.function_definition(function, FunctionMode.DECLARATION) == (
            "void lookup();"
        )
        assert emitter.function_definition(function, FunctionMode.FIELD) == (
            "final void Function() lookup;"
        )


class TestResults:
    """Test return type rendering."""

    def test_no_results_is_void(self):
        package, function = load_function({"name": "ping"})
        emitter = create_dart_generator().emitter(package)

        assert emitter.render_results(function) == "void"
        assert emitter.function_definition(function, FunctionMode.DECLARATION) == (
            "void ping();"
        )

    def test_single_named_result(self):
        package, function = load_function(
            {"name": "size", "results": [{"name": "n", "type": "u64"}]}
        )
        emitter = create_dart_generator().emitter(package)

        assert emitter.render_results(function) == "int /* U64 */"

    def test_multiple_named_results_form_a_record(self):
        package, function = load_function(
            {
                "name": "split",
                "results": [
                    {"name": "lo", "type": "u32"},
                    {"name": "hi", "type": "u32"},
                ],
            }
        )
        emitter = create_dart_generator().emitter(package)

        assert emitter.render_results(function) == (
            "(int /* U32 */ lo, int /* U32 */ hi)"
        )

    def test_params_keep_declaration_order(self):
        package, function = load_function(
            {
                "name": "f",
                "params": [
                    {"name": "z", "type": "bool"},
                    {"name": "a", "type": "char"},
                ],
            }
        )
        emitter = create_dart_generator().emitter(package)

        assert emitter.render_params(function) == "bool z, int /* Char */ a"


class TestInterfaceDefinition:
    """Test interface class rendering."""

    def test_declaration_mode(self, emitter, package):
        assert emitter.interface_definition("math", package.interfaces["math"]) == (
            "abstract class Math {\n"
            "  /// Adds two numbers.\n"
            f"  int /* U32 */ add({ADD_PARAMS});\n"
            "}"
        )

    def test_call_mode(self, package):
        emitter = make_emitter(package, interface_mode="call", generate_docs=False)

        assert emitter.interface_definition("math", package.interfaces["math"]) == (
            "class Math {\n"
            "  final Function Function(String name) lookup;\n"
            "\n"
            "  Math(this.lookup);\n"
            "\n"
            "  late final _add = lookup('add');\n"
            f"  int /* U32 */ add({ADD_PARAMS}) {{\n"
            "    return _add(a, b);\n"
            "  }\n"
            "}"
        )

    def test_field_mode(self, package):
        emitter = make_emitter(package, generate_docs=False)
        rendered = emitter.interface_definition(
            "math", package.interfaces["math"], FunctionMode.FIELD
        )

        assert rendered == (
            "class Math {\n"
            f"  final int /* U32 */ Function({ADD_PARAMS}) add;\n"
            "\n"
            "  const Math({\n"
            "    required this.add,\n"
            "  });\n"
            "}"
        )

    def test_members_separated_by_blank_line(self):
        package = load_package(
            {
                "interfaces": {
                    "clock": {
                        "functions": [
                            {"name": "now", "results": "u64"},
                            {"name": "reset"},
                        ]
                    }
                }
            }
        )
        emitter = create_dart_generator().emitter(package)

        assert emitter.interface_definition("clock", package.interfaces["clock"]) == (
            "abstract class Clock {\n"
            "  int /* U64 */ now();\n"
            "\n"
            "  void reset();\n"
            "}"
        )

    def test_interface_docs(self):
        package = load_package(
            {"interfaces": {"empty": {"docs": "Nothing here.", "functions": []}}}
        )
        emitter = create_dart_generator().emitter(package)

        assert emitter.interface_definition("empty", package.interfaces["empty"]) == (
            "/// Nothing here.\nabstract class Empty {\n}"
        )


class TestWorldDefinition:
    """Test world rendering."""

    def test_imports_and_exports_classes(self, package):
        emitter = make_emitter(package)

        assert emitter.world_definition(package.worlds["app"]) == (
            "class AppWorldImports {\n"
            "  final void Function(String msg) log;\n"
            "\n"
            "  final Math math;\n"
            "\n"
            "  const AppWorldImports({\n"
            "    required this.log,\n"
            "    required this.math,\n"
            "  });\n"
            "}\n"
            "\n"
            "class AppWorld {\n"
            "  final Function Function(String name) lookup;\n"
            "\n"
            "  AppWorld(this.lookup);\n"
            "\n"
            "  late final _run = lookup('run');\n"
            "  int /* U32 */ run() {\n"
            "    return _run();\n"
            "  }\n"
            "}"
        )

    def test_import_members_follow_declaration_order(self, document):
        document["worlds"]["app"]["imports"].reverse()
        package = load_package(document)
        emitter = make_emitter(package)

        assert emitter.world_definition(package.worlds["app"]).startswith(
            "class AppWorldImports {\n"
            "  final Math math;\n"
            "\n"
            "  final void Function(String msg) log;\n"
            "\n"
            "  const AppWorldImports({\n"
            "    required this.math,\n"
            "    required this.log,\n"
            "  });\n"
            "}"
        )

    def test_call_mode_interface_with_lookup_function(self):
        package = load_package(
            {
                "interfaces": {
                    "api": {
                        "functions": [
                            {"name": "lookup", "params": [{"name": "k", "type": "string"}]}
                        ]
                    }
                }
            }
        )
        emitter = make_emitter(package, interface_mode="call")

        rendered = emitter.interface_definition("api", package.interfaces["api"])
        assert "  final Function Function(String name) lookup;" in rendered
        assert "  void lookup_(String k) {" in rendered
        assert "void lookup(" not in rendered

    def test_undefined_interface_is_fatal(self):
        package = load_package(
            {"worlds": {"app": {"exports": [{"name": "missing"}]}}}
        )
        emitter = create_dart_generator().emitter(package)

        with pytest.raises(SchemaIntegrityError):
            emitter.world_definition(package.worlds["app"])
