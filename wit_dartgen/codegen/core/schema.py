"""
Core schema representation for binding generation.

The package graph handed over by the upstream WIT parser, in a normalized
form that generators can walk. Types live in an arena keyed by id; every
type reference is an id lookup, so recursive type graphs need no cyclic
values.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union, Any
from enum import Enum


class PackageLoadError(Exception):
    """Raised when a serialized package graph cannot be converted."""

    pass


class ScalarType(Enum):
    """Primitive WIT types."""

    BOOL = "bool"
    STRING = "string"
    CHAR = "char"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    S8 = "s8"
    S16 = "s16"
    S32 = "s32"
    S64 = "s64"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"


@dataclass(frozen=True)
class TypeId:
    """Reference to a type definition in the package arena."""

    index: int


TypeRef = Union[ScalarType, TypeId]


@dataclass(frozen=True)
class Field:
    """A record field."""

    name: str
    type: TypeRef
    docs: Optional[str] = None


@dataclass(frozen=True)
class Case:
    """An enum, union or variant case. Enum cases never carry a payload."""

    name: str
    type: Optional[TypeRef] = None
    docs: Optional[str] = None


@dataclass(frozen=True)
class Flag:
    """A single named bit of a flags type."""

    name: str
    docs: Optional[str] = None


# Kind payloads. A TypeDef carries exactly one of these.


@dataclass(frozen=True)
class RecordType:
    fields: Tuple[Field, ...] = ()


@dataclass(frozen=True)
class EnumType:
    cases: Tuple[Case, ...] = ()


@dataclass(frozen=True)
class UnionType:
    cases: Tuple[Case, ...] = ()


@dataclass(frozen=True)
class VariantType:
    cases: Tuple[Case, ...] = ()


@dataclass(frozen=True)
class FlagsType:
    flags: Tuple[Flag, ...] = ()


@dataclass(frozen=True)
class TupleType:
    types: Tuple[TypeRef, ...] = ()


@dataclass(frozen=True)
class OptionType:
    type: TypeRef


@dataclass(frozen=True)
class ResultType:
    ok: Optional[TypeRef] = None
    err: Optional[TypeRef] = None


@dataclass(frozen=True)
class ListType:
    type: TypeRef


@dataclass(frozen=True)
class FutureType:
    type: Optional[TypeRef] = None


@dataclass(frozen=True)
class StreamType:
    element: Optional[TypeRef] = None
    end: Optional[TypeRef] = None


@dataclass(frozen=True)
class AliasType:
    """A named alias (`type foo = bar`)."""

    type: TypeRef


@dataclass(frozen=True)
class UnknownType:
    """A kind tag this version of the generator does not know."""

    tag: str


TypeKind = Union[
    RecordType,
    EnumType,
    UnionType,
    VariantType,
    FlagsType,
    TupleType,
    OptionType,
    ResultType,
    ListType,
    FutureType,
    StreamType,
    AliasType,
    UnknownType,
]


@dataclass(frozen=True)
class TypeDef:
    """A type definition: optional name, one kind, optional docs."""

    kind: TypeKind
    name: Optional[str] = None
    docs: Optional[str] = None


@dataclass(frozen=True)
class Param:
    """A named function parameter or named result."""

    name: str
    type: TypeRef


@dataclass(frozen=True)
class Results:
    """Function results: one anonymous type or an ordered named list."""

    anon: Optional[TypeRef] = None
    named: Tuple[Param, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.anon is None and not self.named


@dataclass(frozen=True)
class Function:
    """A function signature. Parameter and result order is significant."""

    name: str
    params: Tuple[Param, ...] = ()
    results: Results = field(default_factory=Results)
    docs: Optional[str] = None


@dataclass(frozen=True)
class Interface:
    """A named, ordered set of functions."""

    name: str
    functions: Tuple[Function, ...] = ()
    docs: Optional[str] = None


@dataclass(frozen=True)
class WorldItem:
    """An import or export of a world: an interface name or a bare function."""

    name: str
    interface: Optional[str] = None
    function: Optional[Function] = None


@dataclass(frozen=True)
class World:
    """A world groups the imports a component needs and the exports it offers."""

    name: str
    imports: Tuple[WorldItem, ...] = ()
    exports: Tuple[WorldItem, ...] = ()
    docs: Optional[str] = None


@dataclass
class Package:
    """Root of the package graph. Not mutated during generation."""

    name: str
    types: Dict[int, TypeDef] = field(default_factory=dict)
    interfaces: Dict[str, Interface] = field(default_factory=dict)
    worlds: Dict[str, World] = field(default_factory=dict)

    def get_type(self, type_id: TypeId) -> Optional[TypeDef]:
        """Get a type definition by id, or None when absent."""
        return self.types.get(type_id.index)

    def named_types(self) -> List[Tuple[TypeId, TypeDef]]:
        """All named type definitions in arena order."""
        return [
            (TypeId(index), type_def)
            for index, type_def in self.types.items()
            if type_def.name is not None
        ]


def load_package(data: Dict[str, Any]) -> Package:
    """
    Convert a serialized package graph (JSON document) to a Package.

    Type references are scalar names (``"u32"``) or integer type ids; type
    ids are positions in the ``types`` list unless an entry carries an
    explicit ``"id"``. Kind tags this module does not know load as
    UnknownType so that generation, not loading, reports them.

    Args:
        data: Parsed JSON document

    Returns:
        Package: The normalized package graph
    """

    def convert_ref(value: Any, where: str) -> TypeRef:
        """Map a serialized type reference to a TypeRef."""
        if isinstance(value, bool):
            raise PackageLoadError(f"Invalid type reference in {where}: {value!r}")
        if isinstance(value, int):
            return TypeId(value)
        if isinstance(value, dict) and "id" in value:
            return TypeId(int(value["id"]))
        if isinstance(value, str):
            try:
                return ScalarType(value)
            except ValueError:
                raise PackageLoadError(
                    f"Unknown scalar type in {where}: {value!r}"
                ) from None
        raise PackageLoadError(f"Invalid type reference in {where}: {value!r}")

    def convert_optional_ref(value: Any, where: str) -> Optional[TypeRef]:
        return None if value is None else convert_ref(value, where)

    def convert_cases(node: Dict[str, Any], where: str) -> Tuple[Case, ...]:
        return tuple(
            Case(
                name=case["name"],
                type=convert_optional_ref(case.get("type"), f"{where}.{case['name']}"),
                docs=case.get("docs"),
            )
            for case in node.get("cases", [])
        )

    def convert_kind(node: Dict[str, Any], where: str) -> TypeKind:
        """Map a serialized kind to its payload dataclass."""
        tag = node.get("kind")

        if tag == "record":
            return RecordType(
                tuple(
                    Field(
                        name=f["name"],
                        type=convert_ref(f["type"], f"{where}.{f['name']}"),
                        docs=f.get("docs"),
                    )
                    for f in node.get("fields", [])
                )
            )
        elif tag == "enum":
            return EnumType(
                tuple(
                    Case(name=c["name"], docs=c.get("docs"))
                    for c in node.get("cases", [])
                )
            )
        elif tag == "union":
            return UnionType(convert_cases(node, where))
        elif tag == "variant":
            return VariantType(convert_cases(node, where))
        elif tag == "flags":
            return FlagsType(
                tuple(
                    Flag(name=f["name"], docs=f.get("docs"))
                    for f in node.get("flags", [])
                )
            )
        elif tag == "tuple":
            return TupleType(
                tuple(convert_ref(t, where) for t in node.get("types", []))
            )
        elif tag == "option":
            return OptionType(convert_ref(node["type"], where))
        elif tag == "result":
            return ResultType(
                ok=convert_optional_ref(node.get("ok"), where),
                err=convert_optional_ref(node.get("err"), where),
            )
        elif tag == "list":
            return ListType(convert_ref(node["type"], where))
        elif tag == "future":
            return FutureType(convert_optional_ref(node.get("type"), where))
        elif tag == "stream":
            return StreamType(
                element=convert_optional_ref(node.get("element"), where),
                end=convert_optional_ref(node.get("end"), where),
            )
        elif tag == "type":
            return AliasType(convert_ref(node["type"], where))
        else:
            return UnknownType(str(tag))

    def convert_function(node: Dict[str, Any]) -> Function:
        name = node["name"]
        params = tuple(
            Param(name=p["name"], type=convert_ref(p["type"], f"{name}({p['name']})"))
            for p in node.get("params", [])
        )

        raw_results = node.get("results")
        if raw_results is None:
            results = Results()
        elif isinstance(raw_results, list):
            results = Results(
                named=tuple(
                    Param(name=r["name"], type=convert_ref(r["type"], f"{name} -> {r['name']}"))
                    for r in raw_results
                )
            )
        else:
            results = Results(anon=convert_ref(raw_results, f"{name} ->"))

        return Function(name=name, params=params, results=results, docs=node.get("docs"))

    def convert_world_item(node: Dict[str, Any]) -> WorldItem:
        if "function" in node:
            return WorldItem(name=node["name"], function=convert_function(node["function"]))
        return WorldItem(name=node["name"], interface=node.get("interface", node["name"]))

    if not isinstance(data, dict):
        raise PackageLoadError("Package document must be a JSON object")

    try:
        package = Package(name=data.get("name", "package"))

        for position, node in enumerate(data.get("types", [])):
            index = int(node.get("id", position))
            where = node.get("name") or f"type #{index}"
            package.types[index] = TypeDef(
                kind=convert_kind(node, where),
                name=node.get("name"),
                docs=node.get("docs"),
            )

        for name, node in data.get("interfaces", {}).items():
            package.interfaces[name] = Interface(
                name=name,
                functions=tuple(convert_function(f) for f in node.get("functions", [])),
                docs=node.get("docs"),
            )

        for name, node in data.get("worlds", {}).items():
            package.worlds[name] = World(
                name=name,
                imports=tuple(convert_world_item(i) for i in node.get("imports", [])),
                exports=tuple(convert_world_item(e) for e in node.get("exports", [])),
                docs=node.get("docs"),
            )
    except (KeyError, TypeError, AttributeError) as e:
        raise PackageLoadError(f"Malformed package document: {e!r}") from e

    return package
