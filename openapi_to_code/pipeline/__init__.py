"""
Pipeline - OpenAPI to Code generator.

This module provides a two-phase architecture for generating code from
OpenAPI documents through a language-neutral intermediate representation:

1. Phase 1 (Converter): Convert the OpenAPI document into an IR Module
2. Phase 2 (Backend): Project the IR Module onto a target language
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, DumpFormat
from .generator import PipelineGenerator
from .loader import load_document
from .writer import AtomicWriter

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "DumpFormat",
    "AtomicWriter",
    "load_document",
]
