"""
Type reference resolution against a package's type arena.
"""

from typing import Union

from .generator import AliasDepthError, DanglingTypeReferenceError
from .schema import AliasType, Package, ScalarType, TypeDef, TypeId, TypeRef

DEFAULT_MAX_ALIAS_DEPTH = 32


class TypeResolver:
    """Looks up type ids and unwraps alias chains."""

    def __init__(self, package: Package, max_alias_depth: int = DEFAULT_MAX_ALIAS_DEPTH):
        self.package = package
        self.max_alias_depth = max_alias_depth

    def lookup(self, type_id: TypeId) -> TypeDef:
        """Get the definition behind an id. A missing id is fatal."""
        type_def = self.package.get_type(type_id)
        if type_def is None:
            raise DanglingTypeReferenceError(type_id.index)
        return type_def

    def resolve(self, ref: TypeRef) -> Union[ScalarType, TypeDef]:
        """
        Resolve a reference to a scalar or a non-alias definition.

        Args:
            ref: Scalar or type id

        Returns:
            The scalar itself, or the first non-alias definition on the chain
        """
        hops = 0
        current = ref
        while isinstance(current, TypeId):
            type_def = self.lookup(current)
            if not isinstance(type_def.kind, AliasType):
                return type_def
            hops += 1
            if hops > self.max_alias_depth:
                raise AliasDepthError(ref.index, self.max_alias_depth)
            current = type_def.kind.type
        return current
