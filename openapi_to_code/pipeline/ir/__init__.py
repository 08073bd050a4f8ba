"""
IR module.

Contains the intermediate representation shared by the converter and the
code generation backends, the annotation registry and the IR serializer.
"""

from __future__ import annotations

from . import annotation_kinds
from .ir_nodes import (
    Annotation,
    Const,
    EnumKind,
    Field,
    Function,
    FunctionKind,
    IntersectionKind,
    Item,
    Metadata,
    Module,
    Param,
    RefKind,
    SourceLocation,
    StructKind,
    Type,
    TypeKind,
    TypeParam,
    UnionKind,
    Variant,
    VariantShape,
    annotation_string,
    fields_shape,
    find_annotation,
    has_flag,
)

__all__ = [
    "annotation_kinds",
    "Annotation",
    "Const",
    "EnumKind",
    "Field",
    "Function",
    "FunctionKind",
    "IntersectionKind",
    "Item",
    "Metadata",
    "Module",
    "Param",
    "RefKind",
    "SourceLocation",
    "StructKind",
    "Type",
    "TypeKind",
    "TypeParam",
    "UnionKind",
    "Variant",
    "VariantShape",
    "annotation_string",
    "fields_shape",
    "find_annotation",
    "has_flag",
]
