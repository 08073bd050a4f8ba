"""
Identifier normalization shared by the converter and the backends.

Every function here is a pure string transform. Applying a transform to
its own output returns the output unchanged.
"""

from __future__ import annotations

import re

# Rust strict and reserved keywords (2021 edition)
RUST_RESERVED_KEYWORDS = {
    "abstract",
    "as",
    "async",
    "await",
    "become",
    "box",
    "break",
    "const",
    "continue",
    "crate",
    "do",
    "dyn",
    "else",
    "enum",
    "extern",
    "false",
    "final",
    "fn",
    "for",
    "if",
    "impl",
    "in",
    "let",
    "loop",
    "macro",
    "match",
    "mod",
    "move",
    "mut",
    "override",
    "priv",
    "pub",
    "ref",
    "return",
    "self",
    "Self",
    "static",
    "struct",
    "super",
    "trait",
    "true",
    "try",
    "type",
    "typeof",
    "unsafe",
    "unsized",
    "use",
    "virtual",
    "where",
    "while",
    "yield",
}

# Keywords that cannot be written as raw identifiers
NON_RAW_KEYWORDS = {"self", "Self", "super", "crate"}

WORD_SEPARATORS = ("_", "-", " ")

RAW_PREFIX = "r#"

_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_]")


def to_pascal_case(text: str) -> str:
    """Capitalize each `_`/`-`/space delimited word and concatenate.

    Characters inside a word are kept as they are, so ``petStore`` becomes
    ``PetStore`` and ``in_progress`` becomes ``InProgress``.
    """
    result = []
    capitalize_next = True
    for char in text:
        if char in WORD_SEPARATORS:
            capitalize_next = True
        elif capitalize_next:
            result.append(char.upper())
            capitalize_next = False
        else:
            result.append(char)
    return "".join(result)


def to_snake_case(text: str) -> str:
    """Convert camelCase, kebab-case or space separated text to snake_case."""
    result = []
    prev_lower = False
    for char in text:
        if char.isupper():
            if prev_lower:
                result.append("_")
            result.append(char.lower())
            prev_lower = False
        elif char in ("-", " "):
            result.append("_")
            prev_lower = False
        else:
            result.append(char)
            prev_lower = char.islower()
    return "".join(result)


def sanitize_identifier(text: str) -> str:
    """Replace characters that cannot appear in an identifier with `_`."""
    if text.startswith(RAW_PREFIX):
        return RAW_PREFIX + sanitize_identifier(text[len(RAW_PREFIX) :])
    cleaned = _INVALID_CHARS.sub("_", text)
    if not cleaned:
        return "_"
    if cleaned[0].isdigit():
        cleaned = "_" + cleaned
    return cleaned


def escape_keyword(name: str) -> str:
    """Escape identifiers that collide with Rust keywords."""
    if name in NON_RAW_KEYWORDS:
        return f"{name}_"
    if name in RUST_RESERVED_KEYWORDS:
        return f"{RAW_PREFIX}{name}"
    return name


def to_field_name(name: str) -> str:
    """Normalize a field, argument or function name (snake_case)."""
    if name.startswith(RAW_PREFIX) and name[len(RAW_PREFIX) :] in RUST_RESERVED_KEYWORDS:
        return name
    return escape_keyword(sanitize_identifier(to_snake_case(name)))


def to_type_name(name: str) -> str:
    """Normalize a declared type or enum variant name (PascalCase)."""
    pascal = to_pascal_case(_INVALID_CHARS.sub("_", name))
    if not pascal:
        return "Empty"
    return escape_keyword(sanitize_identifier(pascal))


def to_module_name(title: str) -> str:
    """Derive a module name from a free-form API title."""
    lowered = "".join(char if char.isalnum() else "_" for char in title.lower())
    return lowered.strip("_")


def to_const_name(name: str) -> str:
    """Normalize a constant name (SCREAMING_SNAKE_CASE)."""
    return sanitize_identifier(_INVALID_CHARS.sub("_", to_snake_case(name))).upper()
