"""
IR serialization for debugging dumps.

Type kinds and module items are written as internally tagged mappings
(``{"kind": "struct", "fields": [...]}``, ``{"item": "function", ...}``);
values and annotation values are written untagged. Empty lists, absent
optionals and empty metadata are omitted.
"""

from __future__ import annotations

import json
from typing import Any

import yaml

from ...errors import UnknownFormatError
from ..config import DumpFormat
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
    StructKind,
    Type,
    TypeKind,
    TypeParam,
    UnionKind,
    Variant,
)


def module_to_dict(module: Module) -> dict[str, Any]:
    """Convert a module to plain data."""
    result: dict[str, Any] = {"name": module.name}
    if module.items:
        result["items"] = [item_to_dict(item) for item in module.items]
    if module.submodules:
        result["submodules"] = [module_to_dict(sub) for sub in module.submodules]
    _put_annotations(result, "annotations", module.annotations)
    _put_metadata(result, module.metadata)
    return result


def item_to_dict(item: Item) -> dict[str, Any]:
    if isinstance(item, Type):
        return {"item": "type", **type_to_dict(item)}
    if isinstance(item, Function):
        return {"item": "function", **function_to_dict(item)}
    if isinstance(item, Const):
        return {
            "item": "const",
            "name": item.name,
            "type": type_to_dict(item.type_ref),
            "value": item.value,
        }
    raise TypeError(f"Not a module item: {item!r}")


def type_to_dict(type_: Type) -> dict[str, Any]:
    result: dict[str, Any] = {"kind": kind_to_dict(type_.kind)}
    if type_.name is not None:
        result["name"] = type_.name
    if type_.params:
        result["params"] = [type_param_to_dict(p) for p in type_.params]
    if type_.args:
        result["args"] = [type_to_dict(a) for a in type_.args]
    _put_annotations(result, "annotations", type_.annotations)
    _put_metadata(result, type_.metadata)
    return result


def kind_to_dict(kind: TypeKind) -> dict[str, Any]:
    result: dict[str, Any] = {"kind": kind.tag}
    if isinstance(kind, RefKind):
        result["name"] = kind.name
    elif isinstance(kind, StructKind):
        result["fields"] = [field_to_dict(f) for f in kind.fields]
    elif isinstance(kind, EnumKind):
        result["variants"] = [variant_to_dict(v) for v in kind.variants]
    elif isinstance(kind, FunctionKind):
        result["params"] = [param_to_dict(p) for p in kind.params]
        result["ret"] = type_to_dict(kind.ret) if kind.ret is not None else None
    elif isinstance(kind, (UnionKind, IntersectionKind)):
        result["members"] = [type_to_dict(m) for m in kind.members]
    return result


def field_to_dict(field: Field) -> dict[str, Any]:
    result: dict[str, Any] = {}
    if field.name is not None:
        result["name"] = field.name
    result["type"] = type_to_dict(field.type_ref)
    _put_annotations(result, "annotations", field.annotations)
    return result


def variant_to_dict(variant: Variant) -> dict[str, Any]:
    result: dict[str, Any] = {"name": variant.name}
    if variant.fields:
        result["fields"] = [field_to_dict(f) for f in variant.fields]
    _put_annotations(result, "annotations", variant.annotations)
    return result


def param_to_dict(param: Param) -> dict[str, Any]:
    result: dict[str, Any] = {}
    if param.name is not None:
        result["name"] = param.name
    result["type"] = type_to_dict(param.type_ref)
    if param.default is not None:
        result["default"] = param.default
    _put_annotations(result, "annotations", param.annotations)
    return result


def type_param_to_dict(param: TypeParam) -> dict[str, Any]:
    result: dict[str, Any] = {"name": param.name}
    _put_annotations(result, "bounds", param.bounds)
    if param.default is not None:
        result["default"] = type_to_dict(param.default)
    return result


def function_to_dict(function: Function) -> dict[str, Any]:
    result: dict[str, Any] = {"name": function.name}
    if function.params:
        result["params"] = [type_param_to_dict(p) for p in function.params]
    if function.args:
        result["args"] = [param_to_dict(a) for a in function.args]
    result["return"] = type_to_dict(function.ret)
    _put_annotations(result, "annotations", function.annotations)
    _put_metadata(result, function.metadata)
    return result


def annotation_to_dict(annotation: Annotation) -> dict[str, Any]:
    result: dict[str, Any] = {"kind": annotation.kind}
    if annotation.value is not None:
        result["value"] = _annotation_value(annotation.value)
    return result


def metadata_to_dict(metadata: Metadata) -> dict[str, Any]:
    result: dict[str, Any] = {}
    if metadata.docs is not None:
        result["docs"] = metadata.docs
    if metadata.source is not None:
        source: dict[str, Any] = {"file": metadata.source.file}
        if metadata.source.line is not None:
            source["line"] = metadata.source.line
        if metadata.source.column is not None:
            source["column"] = metadata.source.column
        result["source"] = source
    if metadata.confidence is not None:
        result["confidence"] = metadata.confidence
    if metadata.extra:
        result["extra"] = dict(metadata.extra)
    return result


def dump_module(module: Module, format_name: str | DumpFormat = DumpFormat.JSON) -> str:
    """Serialize a module as pretty JSON or YAML text."""
    try:
        dump_format = DumpFormat(format_name)
    except ValueError:
        raise UnknownFormatError(str(format_name), [f.value for f in DumpFormat]) from None

    data = module_to_dict(module)
    if dump_format == DumpFormat.YAML:
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _annotation_value(value: Any) -> Any:
    if isinstance(value, Type):
        return type_to_dict(value)
    if isinstance(value, list):
        return [_annotation_value(v) for v in value]
    return value


def _put_annotations(target: dict[str, Any], key: str, annotations: list[Annotation]) -> None:
    if annotations:
        target[key] = [annotation_to_dict(a) for a in annotations]


def _put_metadata(target: dict[str, Any], metadata: Metadata) -> None:
    if not metadata.is_empty():
        target["metadata"] = metadata_to_dict(metadata)
