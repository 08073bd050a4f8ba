"""
Rust code generation backend.

Generates serde-annotated Rust declarations and operation stubs from IR.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import replace
from typing import Any

from ...naming import to_const_name, to_field_name, to_module_name, to_type_name
from ..config import CodeGeneratorConfig
from ..ir import annotation_kinds as ak
from ..ir.ir_nodes import (
    Annotation,
    Const,
    EnumKind,
    Field,
    Function,
    FunctionKind,
    IntersectionKind,
    Item,
    Module,
    RefKind,
    StructKind,
    Type,
    TypeParam,
    UnionKind,
    VariantShape,
    annotation_string,
    fields_shape,
    has_flag,
)
from .base import CodeBackend

logger = logging.getLogger(__name__)

GENERATION_COMMENT = "Generated by openapi_to_code. Do not edit by hand."


class RustBackend(CodeBackend):
    """Rust code generation backend."""

    TEMPLATE_LANG = "rust"
    FILE_EXTENSION = "rs"
    TEMPLATE_NAMES = ("prefix", "struct", "enum", "union", "alias", "intersection", "function", "const", "module")

    TYPE_MAP = {
        ak.STRING: "String",
        ak.INTEGER: "i64",
        ak.NUMBER: "f64",
        ak.BOOLEAN: "bool",
        ak.ANY: "serde_json::Value",
        ak.UNIT: "()",
        ak.NEVER: "!",
        ak.MAP: "HashMap",
    }

    # Names the generated file already uses for other items
    RESERVED_TYPE_NAMES = frozenset({ak.API_ERROR, "Option", "Result", "Vec", "String", "HashMap", "Box", "Serialize", "Deserialize"})

    # use declarations required by mapped names
    TYPE_USES = {
        ak.MAP: "std::collections::HashMap",
    }

    def __init__(self, config: CodeGeneratorConfig):
        super().__init__(config)
        self.rust_uses: set[str] = set()
        self._declared: dict[str, str] = {}
        self._used_names: set[str] = set()
        self._pending: list[Type] = []

    def generate(self, module: Module) -> str:
        """Generate Rust code from IR."""
        # Reset per-module state
        self.rust_uses = set()
        self._declared = {}
        self._used_names = set(self.RESERVED_TYPE_NAMES)
        self._pending = []
        self._collect_declared_names(module)

        body = self._render_module_body(module)

        prefix = self.render(
            "prefix",
            generation_comment=GENERATION_COMMENT if self.config.add_generation_comment else "",
            docs=self.doc_lines(module.metadata.docs),
            uses=sorted(self.rust_uses),
            derives=self._derives(),
        )
        return prefix + body

    def _collect_declared_names(self, module: Module) -> None:
        for type_ in module.types:
            if type_.name is None or type_.name in self._declared:
                continue
            base = to_type_name(type_.name)
            name = self._unique(base, self._used_names, separator="")
            if name != base:
                logger.warning("Type %s collides with another declaration, emitted as %s", type_.name, name)
            self._declared[type_.name] = name
        for submodule in module.submodules:
            self._collect_declared_names(submodule)

    def _render_module_body(self, module: Module) -> str:
        declarations = []
        for item in module.items:
            declarations.append(self._render_item(item))
            # Hoisted inline types follow their owner
            while self._pending:
                declarations.append(self._render_type(self._pending.pop(0)))

        for submodule in module.submodules:
            declarations.append(self._render_submodule(submodule))

        return "".join(d for d in declarations if d)

    def _render_item(self, item: Item) -> str:
        if isinstance(item, Type):
            return self._render_type(item)
        if isinstance(item, Function):
            return self._render_function(item)
        if isinstance(item, Const):
            return self._render_const(item)
        raise TypeError(f"Not a module item: {item!r}")

    def _render_submodule(self, module: Module) -> str:
        return self.render(
            "module",
            name=to_field_name(to_module_name(module.name) or module.name),
            docs=self.doc_lines(module.metadata.docs),
            body=self._render_module_body(module),
        )

    # Declarations

    def _render_type(self, type_: Type) -> str:
        # Anonymous top-level types have nothing to declare
        if type_.name is None:
            return ""

        name = self._declared.get(type_.name) or to_type_name(type_.name)
        kind = type_.kind

        if isinstance(kind, StructKind):
            return self.render("struct", **self._prepare_struct_context(name, type_, kind))
        if isinstance(kind, EnumKind):
            return self.render("enum", **self._prepare_enum_context(name, type_, kind))
        if isinstance(kind, UnionKind):
            return self.render("union", **self._prepare_union_context(name, type_, kind))
        if isinstance(kind, IntersectionKind):
            logger.warning("Intersection type %s cannot be represented, emitting a placeholder", type_.name)
            return self.render(
                "intersection",
                name=name,
                members=[self.translate_type(m) for m in kind.members],
            )

        # Ref and Function kinds become type aliases
        anonymous = replace(type_, name=None, params=[])
        return self.render(
            "alias",
            docs=self.doc_lines(type_.metadata.docs),
            name=name,
            generics=self._format_generics(type_.params),
            target=self.translate_type(anonymous, name, "target"),
        )

    def _common_context(self, name: str, type_: Type) -> dict[str, Any]:
        return {
            "name": name,
            "docs": self.doc_lines(type_.metadata.docs),
            "deprecated": has_flag(type_.annotations, ak.DEPRECATED),
            "derives": self._derives(),
            "generics": self._format_generics(type_.params),
        }

    def _prepare_struct_context(self, name: str, type_: Type, kind: StructKind) -> dict[str, Any]:
        context = self._common_context(name, type_)
        context["shape"] = fields_shape(kind.fields).value
        seen: set[str] = set()
        context["fields"] = [self._prepare_field_context(name, f, i, seen) for i, f in enumerate(kind.fields)]
        return context

    def _prepare_field_context(self, owner: str, field: Field, position: int, seen: set[str]) -> dict[str, Any]:
        """
        Prepare the template context for a field.

        Names are made unique within ``seen``. A rename directive carrying
        the original name is attached whenever the emitted name differs.
        """
        original = field.name if field.name is not None else f"field_{position}"
        field_name = self._unique(to_field_name(original), seen)
        return {
            "name": field_name,
            "rename": original if field.name is not None and field_name != original else None,
            "type": self.translate_type(field.type_ref, owner, original),
            "docs": self.doc_lines(self._field_docs(field.type_ref)),
        }

    @staticmethod
    def _field_docs(type_: Type) -> str | None:
        if type_.metadata.docs is None and type_.is_optional():
            return type_.args[0].metadata.docs
        return type_.metadata.docs

    def _prepare_enum_context(self, name: str, type_: Type, kind: EnumKind) -> dict[str, Any]:
        context = self._common_context(name, type_)
        variants = []
        seen: set[str] = set()
        for variant in kind.variants:
            base = to_type_name(variant.name)
            variant_name = self._unique(base, seen, separator="")
            original = annotation_string(variant.annotations, ak.SERDE_RENAME)
            if original is None and variant_name != base:
                original = variant.name
            shape = variant.shape
            field_names: set[str] = set()
            variants.append(
                {
                    "name": variant_name,
                    "rename": original if original is not None and original != variant_name else None,
                    "shape": shape.value,
                    "types": [self.translate_type(f.type_ref, name, variant.name) for f in variant.fields] if shape == VariantShape.TUPLE else [],
                    "fields": [self._prepare_field_context(f"{name}_{variant_name}", f, i, field_names) for i, f in enumerate(variant.fields)] if shape == VariantShape.STRUCT else [],
                }
            )
        context["variants"] = variants
        return context

    def _prepare_union_context(self, name: str, type_: Type, kind: UnionKind) -> dict[str, Any]:
        context = self._common_context(name, type_)
        arms = []
        seen: set[str] = set()
        for i, member in enumerate(kind.members):
            label = member.name or member.ref_name
            arm_name = self._unique(to_type_name(label) if label else f"Variant{i}", seen, separator="")
            arms.append({"name": arm_name, "type": self.translate_type(member, name, arm_name)})
        context["arms"] = arms
        return context

    def _render_function(self, function: Function) -> str:
        owner = to_type_name(function.name)
        args = []
        seen: set[str] = set()
        for i, param in enumerate(function.args):
            original = param.name if param.name is not None else f"arg_{i}"
            arg_name = self._unique(to_field_name(original) if param.name is not None else "_", seen)
            args.append(f"{arg_name}: {self.translate_type(param.type_ref, owner, original)}")

        method = annotation_string(function.annotations, ak.HTTP_METHOD)
        path = annotation_string(function.annotations, ak.HTTP_PATH)
        return self.render(
            "function",
            docs=self.doc_lines(function.metadata.docs),
            http=f"{method} {path}" if method is not None and path is not None else None,
            deprecated=has_flag(function.annotations, ak.DEPRECATED),
            is_async=self.config.async_functions,
            name=to_field_name(function.name),
            generics=self._format_generics(function.params),
            args=", ".join(args),
            ret=self.translate_type(function.ret, owner, "response"),
        )

    @staticmethod
    def _unique(name: str, seen: set[str], separator: str = "_") -> str:
        # Several `_` patterns may coexist
        if name == "_":
            return name
        candidate = name
        counter = 2
        while candidate in seen:
            candidate = f"{name}{separator}{counter}"
            counter += 1
        seen.add(candidate)
        return candidate

    def _render_const(self, const: Const) -> str:
        if const.type_ref.is_reference_to(ak.STRING) and not const.type_ref.args:
            type_str = "&str"
        else:
            type_str = self.translate_type(const.type_ref)
        return self.render(
            "const",
            name=to_const_name(const.name),
            type=type_str,
            value=self.format_value(const.value, const.type_ref),
        )

    # Types

    def translate_type(self, type_: Type, owner: str | None = None, hint: str | None = None) -> str:
        """
        Translate IR type to Rust type string.

        Args:
            type_: The type to translate
            owner: Name of the enclosing declaration, used to name hoisted inline types
            hint: Field, argument or arm name of this position

        Returns:
            Rust type expression
        """
        kind = type_.kind

        if isinstance(kind, RefKind):
            base = self._resolve_name(kind.name)
            if not type_.args:
                return base
            args = [self.translate_type(arg, owner, hint) for arg in type_.args]
            return f"{base}<{', '.join(args)}>"

        if isinstance(kind, FunctionKind):
            params = [self.translate_type(p.type_ref, owner, hint) for p in kind.params]
            ret = self.translate_type(kind.ret, owner, hint) if kind.ret is not None else "()"
            return f"fn({', '.join(params)}) -> {ret}"

        if type_.name is not None:
            return self._declared.get(type_.name) or to_type_name(type_.name)

        if isinstance(kind, IntersectionKind):
            if len(kind.members) == 1:
                return self.translate_type(kind.members[0], owner, hint)
            logger.warning("Inline intersection in %s.%s cannot be represented, using Any", owner, hint)
            return self.TYPE_MAP[ak.ANY]

        if self.config.hoist_inline_types and owner is not None and hint is not None:
            return self._hoist(type_, owner, hint)

        # No declaration to attach to
        if isinstance(kind, EnumKind):
            return self.TYPE_MAP[ak.STRING]
        if isinstance(kind, UnionKind) and kind.members:
            return self.translate_type(kind.members[0])
        return self.TYPE_MAP[ak.ANY]

    def _resolve_name(self, name: str) -> str:
        if name == ak.API_ERROR:
            return name
        if name in self.TYPE_MAP:
            if name in self.TYPE_USES:
                self.rust_uses.add(self.TYPE_USES[name])
            return self.TYPE_MAP[name]
        return self._declared.get(name, name)

    def _hoist(self, type_: Type, owner: str, hint: str) -> str:
        """Declare an anonymous struct, enum or union under a synthetic name."""
        base = to_type_name(f"{owner}_{hint}")
        name = base
        counter = 2
        while name in self._used_names:
            name = f"{base}{counter}"
            counter += 1
        self._used_names.add(name)
        self._declared[name] = name
        self._pending.append(replace(type_, name=name))
        return name

    def _format_generics(self, params: list[TypeParam]) -> str:
        if not params:
            return ""
        rendered = []
        for param in params:
            text = param.name
            bounds = [self._format_bound(b) for b in param.bounds]
            if bounds:
                text += ": " + " + ".join(bounds)
            if param.default is not None:
                text += " = " + self.translate_type(param.default)
            rendered.append(text)
        return f"<{', '.join(rendered)}>"

    def _format_bound(self, bound: Annotation) -> str:
        if isinstance(bound.value, Type):
            return self.translate_type(bound.value)
        if isinstance(bound.value, str):
            return bound.value
        return bound.kind

    def _derives(self) -> str:
        return ", ".join(self.config.derives)

    # Values

    def format_value(self, value: Any, type_: Type) -> str:
        """Format a literal value for Rust."""
        if value is None:
            return "None"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            if type_.is_reference_to(ak.INTEGER) and value.is_integer():
                return str(int(value))
            if math.isnan(value):
                return "f64::NAN"
            if math.isinf(value):
                return "f64::INFINITY" if value > 0 else "f64::NEG_INFINITY"
            return repr(value)
        if isinstance(value, str):
            return self.format_string(value)
        if isinstance(value, list):
            item_type = type_.args[0] if type_.args else Type.reference(ak.ANY)
            return "[" + ", ".join(self.format_value(v, item_type) for v in value) + "]"
        if isinstance(value, dict):
            return f"serde_json::json!({json.dumps(value, ensure_ascii=False)})"
        return self.format_string(str(value))

    def format_string(self, value: str) -> str:
        escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
        return f'"{escaped}"'
