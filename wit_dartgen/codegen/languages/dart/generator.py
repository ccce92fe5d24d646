"""
Dart binding generator implementation.

Renders data types, interface classes and function signatures for a
compiled WIT component from a resolved package graph.
"""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ....logging_config import get_logger
from ...core.config import GeneratorConfig, load_config
from ...core.generator import CodeGenerator, SchemaIntegrityError, UnknownTypeKindError
from ...core.naming import NamingCase
from ...core.resolver import TypeResolver
from ...core.schema import (
    AliasType,
    EnumType,
    FlagsType,
    FutureType,
    Function,
    Interface,
    ListType,
    OptionType,
    Package,
    RecordType,
    ResultType,
    ScalarType,
    StreamType,
    TupleType,
    TypeDef,
    TypeId,
    TypeRef,
    UnionType,
    UnknownType,
    VariantType,
    World,
)
from .naming import create_dart_sanitizer, member_name, type_name, validate_dart_identifier
from .types import VOID, DartTypeMapper

logger = get_logger(__name__)

LOOKUP_TYPE = "Function Function(String name)"
STRUCTURAL_KINDS = (TupleType, OptionType, ResultType, ListType, FutureType, StreamType)


class FunctionMode(Enum):
    """How a function is rendered inside its enclosing class."""

    FIELD = "field"  # final field holding a callable
    DECLARATION = "declaration"  # bare signature
    CALL = "call"  # memoized symbol lookup plus forwarding body


class DartEmitter:
    """
    Emits Dart source fragments for one package.

    Exposes, per type and per interface, a name-resolution entry point and a
    definition entry point. Emission is a pure function of the package and
    the configuration.
    """

    def __init__(self, generator: "DartGenerator", package: Package):
        self.generator = generator
        self.package = package
        self.config = generator.config
        self.pad = self.config.indent
        self.lookup = self.config.custom.get("lookup_function", "lookup")

        self.resolver = TypeResolver(package, self.config.max_alias_depth)
        self.sanitizer = create_dart_sanitizer()
        self.type_mapper = DartTypeMapper(self.resolver, self.sanitizer)

    # Documentation

    def render_docs(self, docs: Optional[str]) -> List[str]:
        """Doc comment lines for attached documentation."""
        if not docs or not self.config.generate_docs:
            return []
        return [f"/// {line}".rstrip() for line in docs.strip("\n").split("\n")]

    # Names

    def type_name(self, ref: TypeRef) -> str:
        """Idiomatic Dart type for a reference."""
        return self.type_mapper.type_name(ref)

    def ffi_type_name(self, ref: TypeRef) -> str:
        """Marshalling (dart:ffi) type name for a reference."""
        return self.type_mapper.ffi_name(ref)

    def interface_name(self, name: str) -> str:
        """Dart class name for an interface."""
        return type_name(self.sanitizer, name)

    # Type definitions

    def type_definition(self, ref: TypeRef) -> str:
        """Definition text for a reference; empty for scalars and structural kinds."""
        if isinstance(ref, ScalarType):
            return ""
        return self.type_def_definition(self.resolver.lookup(ref), ref)

    def type_def_definition(self, type_def: TypeDef, ref: Optional[TypeId] = None) -> str:
        """Definition text for a type definition."""
        kind = type_def.kind

        if isinstance(kind, RecordType):
            return self._record_definition(type_def, ref)
        elif isinstance(kind, EnumType):
            return self._enum_definition(type_def, ref)
        elif isinstance(kind, UnionType):
            return self._union_definition(type_def, ref)
        elif isinstance(kind, VariantType):
            return self._variant_definition(type_def, ref)
        elif isinstance(kind, FlagsType):
            return self._flags_definition(type_def, ref)
        elif isinstance(kind, STRUCTURAL_KINDS):
            return ""
        elif isinstance(kind, AliasType):
            target = self.resolver.resolve(ref if ref is not None else kind.type)
            if isinstance(target, ScalarType):
                return ""
            definition = self.type_def_definition(target)
            if not definition:
                return ""
            return "\n".join(self.render_docs(type_def.docs) + [definition])
        elif isinstance(kind, UnknownType):
            raise UnknownTypeKindError(kind.tag, type_def.name)

        raise UnknownTypeKindError(type(kind).__name__, type_def.name)

    def _base_context(self, type_def: TypeDef, ref: Optional[TypeId]) -> Dict[str, Any]:
        return {
            "name": self.type_mapper.definition_name(type_def, ref),
            "docs": self.render_docs(type_def.docs),
            "pad": self.pad,
        }

    def _record_definition(self, type_def: TypeDef, ref: Optional[TypeId]) -> str:
        context = self._base_context(type_def, ref)
        context["fields"] = [
            {
                "name": field.name,
                "type": self.type_name(field.type),
                "docs": self.render_docs(field.docs),
            }
            for field in type_def.kind.fields
        ]
        return self.generator.render_template("record.dart.j2", context)

    def _enum_definition(self, type_def: TypeDef, ref: Optional[TypeId]) -> str:
        context = self._base_context(type_def, ref)
        context["cases"] = [
            {
                "name": member_name(self.sanitizer, case.name),
                "docs": self.render_docs(case.docs),
            }
            for case in type_def.kind.cases
        ]
        return self.generator.render_template("enum.dart.j2", context)

    def _union_definition(self, type_def: TypeDef, ref: Optional[TypeId]) -> str:
        context = self._base_context(type_def, ref)
        cases = []
        for case in type_def.kind.cases:
            if case.type is None:
                raise SchemaIntegrityError(
                    f"Union case '{case.name}' of '{type_def.name}' has no payload"
                )
            # Subtype names keep nested widths: list<u8> and list<s16> differ
            suffix = self.type_mapper.descriptive_name(case.type)
            cases.append(
                {
                    "class_name": context["name"]
                    + self.sanitizer.convert(suffix, NamingCase.PASCAL_CASE),
                    "type": self.type_name(case.type),
                    "docs": self.render_docs(case.docs),
                }
            )
        context["cases"] = cases
        return self.generator.render_template("sealed.dart.j2", context)

    def _variant_definition(self, type_def: TypeDef, ref: Optional[TypeId]) -> str:
        context = self._base_context(type_def, ref)
        context["cases"] = [
            {
                "class_name": context["name"]
                + self.sanitizer.convert(case.name, NamingCase.PASCAL_CASE),
                "type": None if case.type is None else self.type_name(case.type),
                "docs": self.render_docs(case.docs),
            }
            for case in type_def.kind.cases
        ]
        return self.generator.render_template("sealed.dart.j2", context)

    def _flags_definition(self, type_def: TypeDef, ref: Optional[TypeId]) -> str:
        context = self._base_context(type_def, ref)
        context["holder"] = f"{context['name']}Flag"
        # Sequential indices, not bit positions; see collect_warnings()
        context["flags"] = [
            {
                "name": member_name(self.sanitizer, flag.name),
                "value": index,
                "docs": self.render_docs(flag.docs),
            }
            for index, flag in enumerate(type_def.kind.flags)
        ]
        return self.generator.render_template("flags.dart.j2", context)

    # Functions

    def render_params(self, function: Function) -> str:
        """Parameters as ``Type name`` in declaration order."""
        return ", ".join(
            f"{self.type_name(param.type)} {member_name(self.sanitizer, param.name)}"
            for param in function.params
        )

    def render_results(self, function: Function) -> str:
        """Return type of a function; ``void`` when there are no results."""
        results = function.results
        if results.anon is not None:
            return self.type_name(results.anon)
        if not results.named:
            return VOID
        if len(results.named) == 1:
            return self.type_name(results.named[0].type)
        return "({})".format(
            ", ".join(
                f"{self.type_name(result.type)} {member_name(self.sanitizer, result.name)}"
                for result in results.named
            )
        )

    def function_definition(self, function: Function, mode: FunctionMode) -> str:
        """
        Render a function as a class member.

        Args:
            function: Function to render
            mode: FIELD, DECLARATION or CALL

        Returns:
            Member source text, preceded by its doc comment
        """
        params = self.render_params(function)
        results = self.render_results(function)
        name = self._function_member_name(function, mode)
        docs = self.render_docs(function.docs)

        if mode == FunctionMode.FIELD:
            lines = docs + [f"final {results} Function({params}) {name};"]
        elif mode == FunctionMode.DECLARATION:
            lines = docs + [f"{results} {name}({params});"]
        elif mode == FunctionMode.CALL:
            args = ", ".join(
                member_name(self.sanitizer, param.name) for param in function.params
            )
            lines = [f"late final _{name} = {self.lookup}('{function.name}');"]
            lines += docs
            lines += [
                f"{results} {name}({params}) {{",
                f"{self.pad}return _{name}({args});",
                "}",
            ]
        else:
            raise ValueError(f"Unknown function mode: {mode}")

        return "\n".join(lines)

    def _function_member_name(self, function: Function, mode: FunctionMode) -> str:
        name = member_name(self.sanitizer, function.name)
        # CALL classes already own a field named after the lookup callable
        if mode == FunctionMode.CALL and name == self.lookup:
            return f"{name}_"
        return name

    # Interfaces and worlds

    def interface_definition(
        self, name: str, interface: Interface, mode: Optional[FunctionMode] = None
    ) -> str:
        """
        Render one class for an interface.

        Args:
            name: Interface name (PascalCased for the class)
            interface: Interface to render
            mode: Member rendering; defaults to the configured interface_mode

        Returns:
            Class source text
        """
        if mode is None:
            mode = FunctionMode(self.config.interface_mode)
        return self._class_definition(
            self.interface_name(name), list(interface.functions), mode, interface.docs
        )

    def _class_definition(
        self,
        class_name: str,
        entries: List[Union[Function, Dict[str, str]]],
        mode: FunctionMode,
        docs: Optional[str],
    ) -> str:
        """
        Render a class from functions and plain fields, in the given order.

        A plain field is a ``{"type": ..., "name": ...}`` dict; FIELD-mode
        functions and plain fields become required constructor parameters.
        """
        members = []
        field_params = []

        for entry in entries:
            if isinstance(entry, Function):
                members.append(self.function_definition(entry, mode))
                if mode == FunctionMode.FIELD:
                    field_params.append(self._function_member_name(entry, mode))
            else:
                members.append(f"final {entry['type']} {entry['name']};")
                field_params.append(entry["name"])

        context = {
            "keyword": "abstract class" if mode == FunctionMode.DECLARATION else "class",
            "name": class_name,
            "docs": self.render_docs(docs),
            "pad": self.pad,
            "members": members,
            "field_params": field_params,
            "lookup": self.lookup if mode == FunctionMode.CALL else None,
            "lookup_type": LOOKUP_TYPE,
        }
        return self.generator.render_template("interface.dart.j2", context)

    def _world_interface(self, world: World, interface_name: str) -> Interface:
        interface = self.package.interfaces.get(interface_name)
        if interface is None:
            raise SchemaIntegrityError(
                f"World '{world.name}' references undefined interface '{interface_name}'"
            )
        return interface

    def world_definition(self, world: World) -> str:
        """
        Render the two classes of a world.

        Imports become ``<World>WorldImports``: host-provided callables
        (FIELD mode) and interface implementations. Exports become
        ``<World>World``: functions resolved by name through the lookup
        callable (CALL mode).
        """
        import_entries: List[Union[Function, Dict[str, str]]] = []
        for item in world.imports:
            if item.function is not None:
                import_entries.append(item.function)
            else:
                interface = self._world_interface(world, item.interface)
                import_entries.append(
                    {
                        "type": self.interface_name(interface.name),
                        "name": member_name(self.sanitizer, item.name),
                    }
                )

        export_functions = []
        for item in world.exports:
            if item.function is not None:
                export_functions.append(item.function)
            else:
                self._world_interface(world, item.interface)

        imports_class = self._class_definition(
            type_name(self.sanitizer, f"{world.name}-world-imports"),
            import_entries,
            FunctionMode.FIELD,
            world.docs,
        )
        exports_class = self._class_definition(
            type_name(self.sanitizer, f"{world.name}-world"),
            export_functions,
            FunctionMode.CALL,
            world.docs,
        )
        return f"{imports_class}\n\n{exports_class}"

    # Whole package

    def emit_package(self) -> str:
        """Render the header, every type, interface and world in package order."""
        parts: List[str] = []

        if self.config.file_header:
            parts.append(
                self.generator.render_template(
                    "header.dart.j2",
                    {"header_lines": self.config.file_header.strip("\n").split("\n")},
                )
            )

        # Aliases are skipped: their definitions are those of their targets
        for index, type_def in self.package.types.items():
            if isinstance(type_def.kind, AliasType):
                continue
            if isinstance(type_def.kind, UnknownType):
                raise UnknownTypeKindError(type_def.kind.tag, type_def.name)
            if type_def.name is None:
                continue
            definition = self.type_def_definition(type_def, TypeId(index))
            if definition:
                parts.append(definition)

        for name, interface in self.package.interfaces.items():
            parts.append(self.interface_definition(name, interface))

        for world in self.package.worlds.values():
            parts.append(self.world_definition(world))

        logger.debug(
            "Rendered %d fragments for package '%s'", len(parts), self.package.name
        )
        return "\n\n".join(parts)


class DartGenerator(CodeGenerator):
    """Binding generator targeting Dart."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Dart generator with configuration."""
        super().__init__(config)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "dart"

    @property
    def file_extension(self) -> str:
        """Return Dart file extension."""
        return ".dart"

    def get_template_directory(self) -> Optional[Path]:
        """Return the Dart templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    def emitter(self, package: Package) -> DartEmitter:
        """Fresh emitter bound to one package."""
        return DartEmitter(self, package)

    def generate(self, package: Package) -> str:
        """Generate Dart bindings for a whole package."""
        return self.emitter(package).emit_package()

    def collect_warnings(self, package: Package) -> List[str]:
        """Base warnings plus record fields that are not Dart identifiers."""
        warnings = super().collect_warnings(package)

        for type_def in package.types.values():
            if isinstance(type_def.kind, RecordType):
                for field in type_def.kind.fields:
                    if validate_dart_identifier(field.name):
                        warnings.append(
                            f"Record field {type_def.name}.{field.name} is emitted "
                            f"verbatim and is not a valid Dart identifier"
                        )

        return warnings


def create_dart_generator(config: Optional[Dict[str, Any]] = None) -> DartGenerator:
    """Create a Dart generator, merging overrides into the Dart defaults."""
    return DartGenerator(load_config("dart", custom_config=config))
