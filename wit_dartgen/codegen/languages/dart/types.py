"""
Dart-specific type system for binding generation.

Maps WIT types to two renderings: the idiomatic Dart type used at
hand-written call sites, and the dart:ffi native type name used at the
marshalling layer.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from ...core.generator import SchemaIntegrityError, UnknownTypeKindError
from ...core.naming import NameSanitizer
from ...core.resolver import TypeResolver
from ...core.schema import (
    AliasType,
    EnumType,
    FlagsType,
    FutureType,
    ListType,
    OptionType,
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
)
from .naming import create_dart_sanitizer, type_name

VOID = "void"


@dataclass(frozen=True)
class DartType:
    """
    A Dart type name plus an optional annotation.

    Dart has neither fixed-width integers nor a code point type, so scalar
    widths survive only as a trailing comment: ``int /* U32 */``.
    """

    name: str
    annotation: Optional[str] = None

    def render(self) -> str:
        if self.annotation:
            return f"{self.name} /* {self.annotation} */"
        return self.name

    def __str__(self) -> str:
        return self.render()


# dart:ffi native type names
SCALAR_FFI_NAMES: Dict[ScalarType, str] = {
    ScalarType.BOOL: "Bool",
    ScalarType.STRING: "String",
    ScalarType.CHAR: "Uint32",
    ScalarType.FLOAT32: "Float",
    ScalarType.FLOAT64: "Double",
    ScalarType.S8: "Int8",
    ScalarType.S16: "Int16",
    ScalarType.S32: "Int32",
    ScalarType.S64: "Int64",
    ScalarType.U8: "Uint8",
    ScalarType.U16: "Uint16",
    ScalarType.U32: "Uint32",
    ScalarType.U64: "Uint64",
}

SCALAR_DART_TYPES: Dict[ScalarType, DartType] = {
    ScalarType.BOOL: DartType("bool"),
    ScalarType.STRING: DartType("String"),
    ScalarType.CHAR: DartType("int", "Char"),
    ScalarType.FLOAT32: DartType("double", "Float32"),
    ScalarType.FLOAT64: DartType("double", "Float64"),
    ScalarType.S8: DartType("int", "S8"),
    ScalarType.S16: DartType("int", "S16"),
    ScalarType.S32: DartType("int", "S32"),
    ScalarType.S64: DartType("int", "S64"),
    ScalarType.U8: DartType("int", "U8"),
    ScalarType.U16: DartType("int", "U16"),
    ScalarType.U32: DartType("int", "U32"),
    ScalarType.U64: DartType("int", "U64"),
}

NOMINAL_KINDS = (RecordType, EnumType, UnionType, VariantType, FlagsType)


class DartTypeMapper:
    """
    Central engine for mapping WIT type references to Dart types.

    Nominal kinds (record, enum, union, variant, flags) map to their
    PascalCase name; structural kinds map to a generic or record type
    built from their arguments' bare names.
    """

    def __init__(
        self,
        resolver: TypeResolver,
        sanitizer: Optional[NameSanitizer] = None,
    ):
        self.resolver = resolver
        self.sanitizer = sanitizer or create_dart_sanitizer()

    def ffi_name(self, ref: TypeRef) -> str:
        """Marshalling (dart:ffi) type name for a reference."""
        if isinstance(ref, ScalarType):
            return SCALAR_FFI_NAMES[ref]

        type_def = self.resolver.lookup(ref)
        if isinstance(type_def.kind, TupleType):
            return "({})".format(", ".join(self.ffi_name(t) for t in type_def.kind.types))
        if type_def.name is None:
            raise SchemaIntegrityError(
                f"Unnamed {type(type_def.kind).__name__} (type id {ref.index}) "
                f"has no marshalling name"
            )
        return type_def.name

    def map_type(self, ref: TypeRef, annotate_args: bool = False) -> DartType:
        """
        Idiomatic Dart type for a reference.

        Generic and tuple arguments use their bare names unless
        ``annotate_args`` is set, which keeps every nested scalar width.
        """
        if isinstance(ref, ScalarType):
            return SCALAR_DART_TYPES[ref]
        return self.map_type_def(self.resolver.lookup(ref), ref, annotate_args)

    def type_name(self, ref: TypeRef) -> str:
        """Idiomatic Dart type for a reference, rendered with its annotation."""
        return self.map_type(ref).render()

    def descriptive_name(self, ref: TypeRef) -> str:
        """Fully annotated rendering, distinct for distinct payload types."""
        return self.map_type(ref, annotate_args=True).render()

    def map_type_def(
        self,
        type_def: TypeDef,
        ref: Optional[TypeId] = None,
        annotate_args: bool = False,
    ) -> DartType:
        """Idiomatic Dart type for a definition."""
        kind = type_def.kind
        arg = self.descriptive_name if annotate_args else self._bare

        def arg_or_void(value: Optional[TypeRef]) -> str:
            return VOID if value is None else arg(value)

        if isinstance(kind, NOMINAL_KINDS):
            return DartType(self.definition_name(type_def, ref))

        elif isinstance(kind, TupleType):
            return DartType("({})".format(", ".join(arg(t) for t in kind.types)))

        elif isinstance(kind, OptionType):
            return DartType(f"Option<{arg(kind.type)}>")

        elif isinstance(kind, ResultType):
            return DartType(
                f"Result<{arg_or_void(kind.ok)}, {arg_or_void(kind.err)}>"
            )

        elif isinstance(kind, ListType):
            return DartType(f"List<{arg(kind.type)}>")

        elif isinstance(kind, FutureType):
            return DartType(f"Future<{arg_or_void(kind.type)}>")

        elif isinstance(kind, StreamType):
            # TODO: represent the end-of-stream payload once the stream contract is settled
            return DartType(f"Stream<{arg_or_void(kind.element)}>")

        elif isinstance(kind, AliasType):
            target = self.resolver.resolve(ref if ref is not None else kind.type)
            if isinstance(target, ScalarType):
                return SCALAR_DART_TYPES[target]
            return self.map_type_def(target, annotate_args=annotate_args)

        elif isinstance(kind, UnknownType):
            raise UnknownTypeKindError(kind.tag, type_def.name)

        raise UnknownTypeKindError(type(kind).__name__, type_def.name)

    def definition_name(self, type_def: TypeDef, ref: Optional[TypeId] = None) -> str:
        """PascalCase Dart name of a named definition."""
        if type_def.name is None:
            where = f" (type id {ref.index})" if ref is not None else ""
            raise SchemaIntegrityError(
                f"{type(type_def.kind).__name__}{where} must be named"
            )
        return type_name(self.sanitizer, type_def.name)

    def _bare(self, ref: TypeRef) -> str:
        return self.map_type(ref).name
