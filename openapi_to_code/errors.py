"""
Exceptions raised by the code generator.

Only fatal conditions are reported through exceptions. Problems local to a
single schema element are absorbed by the converter and logged instead.
"""

from __future__ import annotations


class CodegenError(Exception):
    """Base class for all fatal code generation errors."""

    pass


class SchemaLoadError(CodegenError):
    """Raised when the input document cannot be read from disk."""

    pass


class SchemaParseError(CodegenError):
    """Raised when the input document is not valid JSON/YAML.

    Also raised when the top-level value is not a mapping.
    """

    pass


class UnknownTargetError(CodegenError):
    """Raised when no backend is registered for the requested target language."""

    def __init__(self, target: str, known: list[str]):
        self.target = target
        self.known = known
        super().__init__(f"Unknown target: {target} (expected one of: {', '.join(known)})")


class UnknownFormatError(CodegenError):
    """Raised when an IR dump is requested in an unsupported format."""

    def __init__(self, format_name: str, known: list[str]):
        self.format_name = format_name
        self.known = known
        super().__init__(f"Unknown format: {format_name} (expected one of: {', '.join(known)})")


class OutputValidationError(CodegenError):
    """Raised when generated code fails the pre-write sanity checks."""

    pass


class OutputWriteError(CodegenError):
    """Raised when the generated file cannot be written to disk."""

    pass
