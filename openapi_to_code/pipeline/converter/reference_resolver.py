"""
Reference resolver for $ref resolution.

Only local references into ``components`` are resolved. Anything else
(external files, URLs, pointers outside ``components``) is reported as
unresolvable and left to the caller's fallback.
"""

from __future__ import annotations

from typing import Any

COMPONENTS_PREFIX = "#/components/"
SCHEMA_PREFIX = "#/components/schemas/"

# Maximum number of $ref hops followed for a single component
MAX_REF_DEPTH = 32


def decode_pointer_token(token: str) -> str:
    """Decode a JSON pointer token (``~1`` -> ``/``, ``~0`` -> ``~``)."""
    return token.replace("~1", "/").replace("~0", "~")


class ReferenceResolver:
    """Resolves $ref pointers against one OpenAPI document."""

    def __init__(self, document: dict[str, Any]):
        """
        Initialize the resolver.

        Args:
            document: The parsed OpenAPI document
        """
        self.document = document
        components = document.get("components")
        self._components: dict[str, Any] = components if isinstance(components, dict) else {}

    def _section(self, section: str) -> dict[str, Any]:
        entries = self._components.get(section)
        if not isinstance(entries, dict):
            return {}
        # YAML may load numeric component names as int keys
        return {str(key): value for key, value in entries.items()}

    def schema_name(self, ref: Any) -> str | None:
        """
        Resolve a schema $ref to the name of the component it points to.

        Args:
            ref: The $ref value, e.g. "#/components/schemas/Pet"

        Returns:
            The component name, or None if the reference is foreign or dangling
        """
        if not isinstance(ref, str) or not ref.startswith(SCHEMA_PREFIX):
            return None

        name = decode_pointer_token(ref[len(SCHEMA_PREFIX) :].split("/")[-1])
        if name not in self._section("schemas"):
            return None
        return name

    def resolve_component(self, ref: Any, section: str) -> dict[str, Any] | None:
        """
        Resolve a $ref into a components section, following chained refs.

        Args:
            ref: The $ref value, e.g. "#/components/parameters/Limit"
            section: Expected components section ("parameters", "responses", ...)

        Returns:
            The referenced object, or None if it cannot be resolved
        """
        prefix = f"{COMPONENTS_PREFIX}{section}/"
        seen: set[str] = set()

        while isinstance(ref, str) and len(seen) < MAX_REF_DEPTH:
            if ref in seen or not ref.startswith(prefix):
                return None
            seen.add(ref)

            target = self._section(section).get(decode_pointer_token(ref[len(prefix) :]))
            if not isinstance(target, dict):
                return None
            if "$ref" not in target:
                return target
            ref = target["$ref"]

        return None

    def deref(self, obj: Any, section: str) -> dict[str, Any] | None:
        """Return ``obj`` itself, or its target when it is a $ref object."""
        if not isinstance(obj, dict):
            return None
        if "$ref" in obj:
            return self.resolve_component(obj["$ref"], section)
        return obj
