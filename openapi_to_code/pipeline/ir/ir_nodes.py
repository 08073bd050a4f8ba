"""
IR (Intermediate Representation) node definitions.

The IR is the closed vocabulary shared by the schema converter and the code
generation backends. It is plain data: construction helpers exist for the
common shapes but nothing is validated when a node is built.

- Every Type has exactly one structural kind (see ``TypeKind``).
- Optionality is the generic instantiation ``Option<T>``, not a flag.
- Cross-cutting metadata (HTTP method, wire names, format hints, ...) is
  carried by annotations whose kinds are listed in ``annotation_kinds.py``.
- Field, variant and argument order is significant and preserved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from . import annotation_kinds as ak

# A literal used for defaults and constants: None, bool, int, float, str,
# list of values or an insertion-ordered dict of str -> value.
Value = Any


class VariantShape(Enum):
    """How a list of fields is laid out in a declaration."""

    UNIT = "unit"  # no fields
    TUPLE = "tuple"  # only positional fields
    STRUCT = "struct"  # named fields


def fields_shape(fields: list[Field]) -> VariantShape:
    """Classify a field list as unit, tuple or struct shaped.

    A list mixing named and positional fields is not supported; it is
    classified as STRUCT and positional entries are treated as unnamed.
    """
    if not fields:
        return VariantShape.UNIT
    if all(f.name is None for f in fields):
        return VariantShape.TUPLE
    return VariantShape.STRUCT


@dataclass
class SourceLocation:
    """Location in the input document, for diagnostics."""

    file: str = ""
    line: int | None = None
    column: int | None = None


@dataclass
class Metadata:
    """Documentation and provenance attached to types, functions and modules."""

    docs: str | None = None
    source: SourceLocation | None = None

    # Confidence score for assisted generation (0.0 - 1.0)
    confidence: float | None = None

    # Anything not otherwise modeled (x-* extensions, servers, ...)
    extra: dict[str, Any] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return self.docs is None and self.source is None and self.confidence is None and not self.extra


@dataclass
class Annotation:
    """An open (kind, value) pair, the only extension point of the IR.

    ``value`` is one of: Type, str, float, bool or a list of those.
    """

    kind: str = ""
    value: AnnotationValue | None = None

    @classmethod
    def flag(cls, kind: str) -> Annotation:
        return cls(kind=kind)

    @classmethod
    def with_type(cls, kind: str, type_: Type) -> Annotation:
        return cls(kind=kind, value=type_)

    @classmethod
    def with_string(cls, kind: str, value: str) -> Annotation:
        return cls(kind=kind, value=value)

    @classmethod
    def with_number(cls, kind: str, value: float) -> Annotation:
        return cls(kind=kind, value=float(value))

    @classmethod
    def with_bool(cls, kind: str, value: bool) -> Annotation:
        return cls(kind=kind, value=value)

    @classmethod
    def with_list(cls, kind: str, values: list[AnnotationValue]) -> Annotation:
        return cls(kind=kind, value=list(values))


def find_annotation(annotations: list[Annotation], kind: str) -> Annotation | None:
    """Return the first annotation of the given kind, if any."""
    for annotation in annotations:
        if annotation.kind == kind:
            return annotation
    return None


def annotation_string(annotations: list[Annotation], kind: str) -> str | None:
    """Return the string value of the first annotation of the given kind.

    Annotations of that kind holding a non-string value are ignored.
    """
    for annotation in annotations:
        if annotation.kind == kind and isinstance(annotation.value, str):
            return annotation.value
    return None


def has_flag(annotations: list[Annotation], kind: str) -> bool:
    return find_annotation(annotations, kind) is not None


# Type kinds. Each carries a ``tag`` used by the serializer.


@dataclass
class RefKind:
    """Reference to a named type, generic when the owning Type has args."""

    tag: ClassVar[str] = "ref"

    name: str = ak.ANY


@dataclass
class StructKind:
    """Product type."""

    tag: ClassVar[str] = "struct"

    fields: list[Field] = field(default_factory=list)


@dataclass
class EnumKind:
    """Sum type with named variants."""

    tag: ClassVar[str] = "enum"

    variants: list[Variant] = field(default_factory=list)


@dataclass
class FunctionKind:
    """Function / callback type."""

    tag: ClassVar[str] = "function"

    params: list[Param] = field(default_factory=list)
    ret: Type | None = None


@dataclass
class UnionKind:
    """Untagged sum of types: A | B."""

    tag: ClassVar[str] = "union"

    members: list[Type] = field(default_factory=list)


@dataclass
class IntersectionKind:
    """Structural combination of types: A & B."""

    tag: ClassVar[str] = "intersection"

    members: list[Type] = field(default_factory=list)


TypeKind = RefKind | StructKind | EnumKind | FunctionKind | UnionKind | IntersectionKind

AnnotationValue = Any


@dataclass
class TypeParam:
    """A generic parameter with optional bounds and default."""

    name: str = ""
    bounds: list[Annotation] = field(default_factory=list)
    default: Type | None = None


@dataclass
class Type:
    """A type: one structural kind plus naming, generics and annotations."""

    kind: TypeKind = field(default_factory=RefKind)

    # Declared name; None for anonymous types
    name: str | None = None

    # Generic declaration parameters: <T, U>
    params: list[TypeParam] = field(default_factory=list)

    # Generic instantiation arguments: <i64, String>
    args: list[Type] = field(default_factory=list)

    annotations: list[Annotation] = field(default_factory=list)
    metadata: Metadata = field(default_factory=Metadata)

    @classmethod
    def reference(cls, name: str) -> Type:
        """Create a reference to a named type."""
        return cls(kind=RefKind(name=name))

    @classmethod
    def generic(cls, base: str, args: list[Type]) -> Type:
        """Create a generic instantiation: base<args>."""
        return cls(kind=RefKind(name=base), args=list(args))

    @classmethod
    def optional(cls, inner: Type) -> Type:
        """Wrap a type in the Option convention."""
        return cls.generic(ak.OPTION, [inner])

    @property
    def ref_name(self) -> str | None:
        """Referenced name for Ref kinds, None for every other kind."""
        if isinstance(self.kind, RefKind):
            return self.kind.name
        return None

    def is_optional(self) -> bool:
        return self.ref_name == ak.OPTION and len(self.args) == 1

    def is_reference_to(self, name: str) -> bool:
        return self.ref_name == name


@dataclass
class Field:
    """A struct or variant field; ``name`` is None for positional fields."""

    name: str | None = None
    type_ref: Type = field(default_factory=Type)
    annotations: list[Annotation] = field(default_factory=list)


@dataclass
class Variant:
    """An enum variant (unit, tuple or struct shaped, see ``shape``)."""

    name: str = ""
    fields: list[Field] = field(default_factory=list)
    annotations: list[Annotation] = field(default_factory=list)

    @property
    def shape(self) -> VariantShape:
        return fields_shape(self.fields)


@dataclass
class Param:
    """A function parameter."""

    name: str | None = None
    type_ref: Type = field(default_factory=Type)
    default: Value = None
    annotations: list[Annotation] = field(default_factory=list)


@dataclass
class Function:
    """A function declaration (an API operation, for instance)."""

    name: str = ""
    params: list[TypeParam] = field(default_factory=list)
    args: list[Param] = field(default_factory=list)
    ret: Type = field(default_factory=lambda: Type.reference(ak.UNIT))
    annotations: list[Annotation] = field(default_factory=list)
    metadata: Metadata = field(default_factory=Metadata)


@dataclass
class Const:
    """A named, typed constant."""

    name: str = ""
    type_ref: Type = field(default_factory=Type)
    value: Value = None


Item = Type | Function | Const


@dataclass
class Module:
    """The unit of output of the converter and input of a backend."""

    name: str = ""
    items: list[Item] = field(default_factory=list)
    submodules: list[Module] = field(default_factory=list)
    annotations: list[Annotation] = field(default_factory=list)
    metadata: Metadata = field(default_factory=Metadata)

    @property
    def types(self) -> list[Type]:
        return [item for item in self.items if isinstance(item, Type)]

    @property
    def functions(self) -> list[Function]:
        return [item for item in self.items if isinstance(item, Function)]

    @property
    def consts(self) -> list[Const]:
        return [item for item in self.items if isinstance(item, Const)]

    def find_type(self, name: str) -> Type | None:
        """Return the declared type with the given name, if any."""
        for type_ in self.types:
            if type_.name == name:
                return type_
        return None
