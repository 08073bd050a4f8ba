"""
Well-known annotation kinds and type names.

Annotation kinds are plain strings shared by the converter and the backends.
Both sides import them from here so that a rename cannot silently break the
contract between them.
"""

from __future__ import annotations

# HTTP method of an operation, uppercased ("GET", "POST", ...)
HTTP_METHOD = "http_method"

# Original path template of an operation ("/pets/{petId}")
HTTP_PATH = "http_path"

# Original wire literal of an enum variant
SERDE_RENAME = "serde_rename"

# String format hint ("date-time", "uuid", ...)
FORMAT = "format"

# Flag set on deprecated schemas and operations
DEPRECATED = "deprecated"

# Where an operation parameter is sent ("query", "header", "path", "cookie")
PARAM_LOCATION = "param_location"

# Bound of a generic type parameter
BOUND = "bound"

KNOWN_ANNOTATIONS = (
    HTTP_METHOD,
    HTTP_PATH,
    SERDE_RENAME,
    FORMAT,
    DEPRECATED,
    PARAM_LOCATION,
    BOUND,
)

# Optionality is a generic instantiation of this name, never a flag
OPTION = "Option"
RESULT = "Result"
VEC = "Vec"

# String-keyed dictionary: Map<String, V>
MAP = "Map"

# Primitive reference names
STRING = "String"
INTEGER = "i64"
NUMBER = "f64"
BOOLEAN = "bool"
ANY = "Any"
UNIT = "Unit"
NEVER = "Never"

PRIMITIVE_NAMES = (STRING, INTEGER, NUMBER, BOOLEAN, ANY, UNIT, NEVER)

# Error type every operation returns on failure
API_ERROR = "ApiError"

# Reference names with a fixed meaning; schema components cannot take them
BUILTIN_NAMES = (*PRIMITIVE_NAMES, OPTION, RESULT, VEC, MAP, API_ERROR)
