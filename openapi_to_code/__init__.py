"""OpenAPI to Code Generator

A Python package for generating typed bindings from OpenAPI documents.
Documents are converted into a language-neutral intermediate representation,
which a backend then projects onto the target language (Rust).
"""

__version__ = "0.1.0"

from .errors import (
    CodegenError,
    OutputValidationError,
    OutputWriteError,
    SchemaLoadError,
    SchemaParseError,
    UnknownFormatError,
    UnknownTargetError,
)
from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    DumpFormat,
    PipelineGenerator,
    load_document,
)

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "DumpFormat",
    "AtomicWriter",
    "load_document",
    "CodegenError",
    "SchemaLoadError",
    "SchemaParseError",
    "UnknownTargetError",
    "UnknownFormatError",
    "OutputValidationError",
    "OutputWriteError",
]
