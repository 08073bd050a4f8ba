"""
OpenAPI document to IR converter.

Maps schema definitions and path operations into a single IR Module. The
converter never aborts on a construct it cannot represent: it substitutes a
documented fallback (usually ``Any``), logs a warning and carries on.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ...naming import to_module_name, to_pascal_case
from ..ir import annotation_kinds as ak
from ..ir.ir_nodes import (
    Annotation,
    EnumKind,
    Field,
    Function,
    IntersectionKind,
    Item,
    Metadata,
    Module,
    Param,
    RefKind,
    SourceLocation,
    StructKind,
    Type,
    UnionKind,
    Variant,
)
from .reference_resolver import SCHEMA_PREFIX, ReferenceResolver

logger = logging.getLogger(__name__)

# Recognized operation methods, in output order
HTTP_METHODS = ("get", "post", "put", "delete", "patch", "head", "options", "trace")

PARAMETER_LOCATIONS = ("query", "header", "path", "cookie")

JSON_MEDIA_TYPE = "application/json"

PRIMITIVE_TYPES = {
    "string": ak.STRING,
    "integer": ak.INTEGER,
    "number": ak.NUMBER,
    "boolean": ak.BOOLEAN,
}

DEFAULT_MODULE_NAME = "api"


class ModuleBuilder:
    """Accumulates module items during one conversion.

    A builder produces exactly one Module; it cannot be reused afterwards.
    """

    def __init__(self) -> None:
        self._items: list[Item] = []
        self._built = False

    def add(self, item: Item) -> None:
        if self._built:
            raise RuntimeError("ModuleBuilder has already been built")
        self._items.append(item)

    def __len__(self) -> int:
        return len(self._items)

    def build(self, name: str, metadata: Metadata | None = None) -> Module:
        if self._built:
            raise RuntimeError("ModuleBuilder has already been built")
        self._built = True
        return Module(name=name, items=self._items, metadata=metadata or Metadata())


class OpenAPIConverter:
    """Converts one parsed OpenAPI document into an IR Module."""

    def __init__(self, document: dict[str, Any], source: str | None = None):
        """
        Initialize the converter.

        Args:
            document: The parsed OpenAPI document
            source: Path of the input file, recorded in the module metadata
        """
        self.document = document
        self.source = source
        self.resolver = ReferenceResolver(document)
        self._type_names = self._component_type_names()

    def convert(self) -> Module:
        """Convert the document. Safe to call more than once."""
        builder = ModuleBuilder()

        for key, schema in _mapping(_mapping(self.document.get("components")).get("schemas")).items():
            name = str(key)
            path = f"{SCHEMA_PREFIX}{name}"
            if not isinstance(schema, (dict, bool)):
                logger.warning("%s: schema is not an object, skipped", path)
                continue
            logger.debug("Converting schema %s", name)
            builder.add(self.convert_schema(schema, path, name=self._type_names[name]))

        for key, path_item in _mapping(self.document.get("paths")).items():
            for function in self.convert_path_item(str(key), path_item):
                builder.add(function)

        return builder.build(self._module_name(), self._module_metadata())

    def _component_type_names(self) -> dict[str, str]:
        """Map schema component names to IR type names.

        A component named like a builtin (``Any``, ``Map``, ``ApiError``...)
        would be indistinguishable from it in a reference, so it gets a
        numeric suffix. Other names are kept as they are.
        """
        components = [str(key) for key in _mapping(_mapping(self.document.get("components")).get("schemas"))]
        taken = set(components) | set(ak.BUILTIN_NAMES)
        names = {}
        for component in components:
            name = component
            if component in ak.BUILTIN_NAMES:
                counter = 2
                while name in taken:
                    name = f"{component}{counter}"
                    counter += 1
                taken.add(name)
                logger.warning("%s%s: name is reserved, declared as %s", SCHEMA_PREFIX, component, name)
            names[component] = name
        return names

    def _module_name(self) -> str:
        title = _mapping(self.document.get("info")).get("title")
        name = to_module_name(title) if isinstance(title, str) else ""
        return name or DEFAULT_MODULE_NAME

    def _module_metadata(self) -> Metadata:
        info = _mapping(self.document.get("info"))
        metadata = Metadata(docs=_string(info.get("description")))
        if self.source:
            metadata.source = SourceLocation(file=self.source)
        if info.get("version") is not None:
            metadata.extra["version"] = str(info["version"])
        servers = [s["url"] for s in _list(self.document.get("servers")) if isinstance(s, dict) and isinstance(s.get("url"), str)]
        if servers:
            metadata.extra["servers"] = servers
        return metadata

    # Schemas

    def convert_schema(self, schema: Any, path: str, name: str | None = None) -> Type:
        """
        Convert a schema (or $ref object) to a Type.

        Args:
            schema: The schema object
            path: Location of the schema in the document (for log messages)
            name: Declared name for component schemas, None for inline schemas

        Returns:
            The converted Type; never raises on malformed input
        """
        if not isinstance(schema, dict):
            if not isinstance(schema, bool):
                logger.warning("%s: schema is not an object, using Any", path)
            type_ = Type.reference(ak.ANY)
            type_.name = name
            return type_

        if "$ref" in schema:
            type_ = self._convert_ref(schema["$ref"], path)
        elif "oneOf" in schema:
            type_ = Type(kind=UnionKind(members=self._convert_branches(schema["oneOf"], f"{path}/oneOf")))
        elif "allOf" in schema:
            type_ = Type(kind=IntersectionKind(members=self._convert_branches(schema["allOf"], f"{path}/allOf")))
        elif "anyOf" in schema:
            type_ = Type(kind=UnionKind(members=self._convert_branches(schema["anyOf"], f"{path}/anyOf")))
        elif "not" in schema:
            logger.debug("%s: negation schema degraded to Any", path)
            type_ = Type.reference(ak.ANY)
        else:
            type_ = self._convert_typed(schema, path)

        type_.name = name
        type_.annotations.extend(self._schema_annotations(schema))
        type_.metadata = self._schema_metadata(schema)
        return type_

    def _convert_ref(self, ref: Any, path: str) -> Type:
        target = self.resolver.schema_name(ref)
        if target is None:
            logger.warning("%s: unresolvable reference %r, using Any", path, ref)
            return Type.reference(ak.ANY)
        return Type.reference(self._type_names.get(target, target))

    def _convert_branches(self, branches: Any, path: str) -> list[Type]:
        """Convert composition branches, dropping the unresolvable ones."""
        members = []
        for i, branch in enumerate(_list(branches)):
            branch_path = f"{path}/{i}"
            if not isinstance(branch, dict):
                logger.warning("%s: branch is not a schema, dropped", branch_path)
                continue
            if "$ref" in branch and self.resolver.schema_name(branch["$ref"]) is None:
                logger.warning("%s: unresolvable reference %r, dropped", branch_path, branch["$ref"])
                continue
            members.append(self.convert_schema(branch, branch_path))
        return members

    def _convert_typed(self, schema: dict[str, Any], path: str) -> Type:
        type_name = schema.get("type")

        # OpenAPI 3.1 type arrays: use the first non-null entry
        if isinstance(type_name, list):
            candidates = [t for t in type_name if t != "null"]
            type_name = candidates[0] if candidates else None

        if type_name is None:
            if "properties" in schema:
                return self._convert_object(schema, path)
            if _string_literals(schema.get("enum")):
                return self._convert_string(schema)
            return Type.reference(ak.ANY)

        if type_name == "string":
            return self._convert_string(schema)
        if type_name in PRIMITIVE_TYPES:
            return Type.reference(PRIMITIVE_TYPES[type_name])
        if type_name == "object":
            return self._convert_object(schema, path)
        if type_name == "array":
            return self._convert_array(schema, path)

        logger.warning("%s: unknown type %r, using Any", path, type_name)
        return Type.reference(ak.ANY)

    def _convert_string(self, schema: dict[str, Any]) -> Type:
        values = [v for v in _list(schema.get("enum")) if v is not None]
        if not values:
            return Type.reference(ak.STRING)

        variants = []
        for value in values:
            literal = value if isinstance(value, str) else json.dumps(value)
            variants.append(
                Variant(
                    name=to_pascal_case(literal),
                    annotations=[Annotation.with_string(ak.SERDE_RENAME, literal)],
                )
            )
        return Type(kind=EnumKind(variants=variants))

    def _convert_object(self, schema: dict[str, Any], path: str) -> Type:
        properties = _mapping(schema.get("properties"))
        additional = schema.get("additionalProperties")

        # Free-form dictionaries: {type: object, additionalProperties: V}
        if not properties and (additional is True or isinstance(additional, dict)):
            value_type = self.convert_schema(additional, f"{path}/additionalProperties") if isinstance(additional, dict) else Type.reference(ak.ANY)
            return Type.generic(ak.MAP, [Type.reference(ak.STRING), value_type])

        # Unquoted YAML keys may load as numbers or booleans
        required = {_key(r) for r in _list(schema.get("required")) if isinstance(r, (str, int, float))}
        fields = []
        for key, prop_schema in properties.items():
            prop_name = _key(key)
            prop_type = self.convert_schema(prop_schema, f"{path}/properties/{prop_name}")
            if prop_name not in required:
                prop_type = Type.optional(prop_type)
            fields.append(Field(name=prop_name, type_ref=prop_type))
        return Type(kind=StructKind(fields=fields))

    def _convert_array(self, schema: dict[str, Any], path: str) -> Type:
        items = schema.get("items")
        if isinstance(items, dict):
            item_type = self.convert_schema(items, f"{path}/items")
        else:
            logger.warning("%s: array without an item schema, using Any", path)
            item_type = Type.reference(ak.ANY)
        return Type.generic(ak.VEC, [item_type])

    def _schema_annotations(self, schema: dict[str, Any]) -> list[Annotation]:
        annotations = []
        if _is_string_schema(schema) and isinstance(schema.get("format"), str):
            annotations.append(Annotation.with_string(ak.FORMAT, schema["format"]))
        if schema.get("deprecated") is True:
            annotations.append(Annotation.flag(ak.DEPRECATED))
        return annotations

    def _schema_metadata(self, schema: dict[str, Any]) -> Metadata:
        extra = {key: value for key, value in schema.items() if isinstance(key, str) and key.startswith("x-")}
        return Metadata(docs=_string(schema.get("description")), extra=extra)

    # Operations

    def convert_path_item(self, path: str, path_item: Any) -> list[Function]:
        """Convert every recognized operation of a path item to a Function."""
        if not isinstance(path_item, dict):
            logger.warning("%s: path item is not an object, skipped", path)
            return []
        if "$ref" in path_item:
            logger.warning("%s: path item references are not supported, skipped", path)
            return []

        shared_parameters = _list(path_item.get("parameters"))
        functions = []
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if operation is None:
                continue
            if not isinstance(operation, dict):
                logger.warning("%s %s: operation is not an object, skipped", method.upper(), path)
                continue
            logger.debug("Converting operation %s %s", method.upper(), path)
            functions.append(self.convert_operation(path, method, operation, shared_parameters))
        return functions

    def convert_operation(
        self,
        path: str,
        method: str,
        operation: dict[str, Any],
        shared_parameters: list[Any] | None = None,
    ) -> Function:
        """
        Convert one operation to a Function.

        Args:
            path: The path template, e.g. "/pets/{petId}"
            method: Lowercase HTTP method
            operation: The operation object
            shared_parameters: Parameters declared on the path item

        Returns:
            Function annotated with its HTTP method and path
        """
        location = f"{method.upper()} {path}"
        name = _string(operation.get("operationId")) or operation_fallback_name(method, path)

        args = [self._convert_parameter(p, location) for p in self._merge_parameters(shared_parameters or [], operation.get("parameters"), location)]

        body = self._convert_request_body(operation.get("requestBody"), location)
        if body is not None:
            args.append(body)

        ret = Type.generic(ak.RESULT, [self._convert_response(operation.get("responses"), location), Type.reference(ak.API_ERROR)])

        annotations = [
            Annotation.with_string(ak.HTTP_METHOD, method.upper()),
            Annotation.with_string(ak.HTTP_PATH, path),
        ]
        if operation.get("deprecated") is True:
            annotations.append(Annotation.flag(ak.DEPRECATED))

        return Function(
            name=name,
            args=args,
            ret=ret,
            annotations=annotations,
            metadata=Metadata(docs=_string(operation.get("description")) or _string(operation.get("summary"))),
        )

    def _merge_parameters(self, shared: list[Any], own: Any, location: str) -> list[dict[str, Any]]:
        """Resolve parameters; operation parameters override path item ones."""
        merged: list[dict[str, Any]] = []
        index: dict[tuple[str, str], int] = {}

        for raw in [*shared, *_list(own)]:
            param = self.resolver.deref(raw, "parameters")
            if param is None or not isinstance(param.get("name"), (str, int, float)):
                logger.warning("%s: unresolvable parameter %r, skipped", location, raw)
                continue
            param = {**param, "name": _key(param["name"])}
            key = (param["name"], str(param.get("in", "")))
            if key in index:
                merged[index[key]] = param
            else:
                index[key] = len(merged)
                merged.append(param)
        return merged

    def _convert_parameter(self, param: dict[str, Any], location: str) -> Param:
        param_path = f"{location} parameter {param['name']}"
        if "schema" in param:
            type_ = self.convert_schema(param["schema"], param_path)
        else:
            if "content" in param:
                logger.warning("%s: content-style parameters are not supported, using String", param_path)
            type_ = Type.reference(ak.STRING)

        if param.get("required") is not True:
            type_ = Type.optional(type_)

        annotations = []
        if param.get("in") in PARAMETER_LOCATIONS:
            annotations.append(Annotation.with_string(ak.PARAM_LOCATION, param["in"]))
        return Param(name=param["name"], type_ref=type_, annotations=annotations)

    def _convert_request_body(self, request_body: Any, location: str) -> Param | None:
        if request_body is None:
            return None
        body = self.resolver.deref(request_body, "requestBodies")
        if body is None:
            logger.warning("%s: unresolvable request body, skipped", location)
            return None

        media = _json_media(body.get("content"))
        if media is None or "schema" not in media:
            logger.warning("%s: request body has no JSON schema, skipped", location)
            return None
        return Param(name="body", type_ref=self.convert_schema(media["schema"], f"{location} requestBody"))

    def _convert_response(self, responses: Any, location: str) -> Type:
        responses = _mapping(responses)
        response = responses.get("default")
        if response is None:
            response = responses.get("200", responses.get(200))
        if response is None:
            return Type.reference(ak.UNIT)

        resolved = self.resolver.deref(response, "responses")
        if resolved is None:
            logger.warning("%s: unresolvable response, using Unit", location)
            return Type.reference(ak.UNIT)

        media = _json_media(resolved.get("content"))
        if media is None or "schema" not in media:
            return Type.reference(ak.UNIT)
        return self.convert_schema(media["schema"], f"{location} response")


def convert(document: dict[str, Any], source: str | None = None) -> Module:
    """Convert a parsed OpenAPI document to an IR Module."""
    return OpenAPIConverter(document, source).convert()


def operation_fallback_name(method: str, path: str) -> str:
    """Name for operations without an operationId: ``get__pets_petId``."""
    return f"{method}_{path.replace('/', '_').replace('{', '').replace('}', '')}"


def _json_media(content: Any) -> dict[str, Any] | None:
    """Return the JSON media type object of a content map, if any."""
    content = _mapping(content)
    media = content.get(JSON_MEDIA_TYPE)
    if media is None:
        for media_type, candidate in content.items():
            if isinstance(media_type, str) and media_type.split(";")[0].strip().lower() == JSON_MEDIA_TYPE:
                media = candidate
                break
    return media if isinstance(media, dict) else None


def _is_string_schema(schema: dict[str, Any]) -> bool:
    type_name = schema.get("type")
    if isinstance(type_name, list):
        return "string" in type_name
    return type_name == "string"


def _string_literals(values: Any) -> bool:
    literals = [v for v in _list(values) if v is not None]
    return bool(literals) and all(isinstance(v, str) for v in literals)


def _mapping(value: Any) -> dict[Any, Any]:
    return value if isinstance(value, dict) else {}


def _list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _string(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _key(value: Any) -> str:
    """Mapping key as text; YAML loads ``on`` / ``200`` keys as bool / int."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
