"""
Base class for code generation backends.

Defines the interface that all language-specific backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import jinja2

from ..config import CodeGeneratorConfig
from ..ir.ir_nodes import Module, Type


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Type mapping from IR primitive names to language types
    TYPE_MAP: dict[str, str] = {}

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    # Templates loaded by _setup_templates, one per declaration kind
    TEMPLATE_NAMES: tuple[str, ...] = ()

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            keep_trailing_newline=True,
            lstrip_blocks=True,
            trim_blocks=True,
            undefined=jinja2.StrictUndefined,
        )
        # Add custom filters
        self.jinja_env.filters["string_literal"] = self.format_string

        self.templates = {name: self.jinja_env.get_template(f"{name}.{self.FILE_EXTENSION}.jinja2") for name in self.TEMPLATE_NAMES}

    def render(self, template_name: str, **context: Any) -> str:
        return self.templates[template_name].render(**context)

    @abstractmethod
    def generate(self, module: Module) -> str:
        """
        Generate code from IR.

        Args:
            module: The module to project

        Returns:
            Generated code as a string
        """

    @abstractmethod
    def translate_type(self, type_: Type, owner: str | None = None, hint: str | None = None) -> str:
        """
        Translate an IR type to a language-specific type string.

        Args:
            type_: The type
            owner: Name of the enclosing declaration, if any
            hint: Name of the position the type appears in, if any

        Returns:
            Language-specific type string
        """

    @abstractmethod
    def format_value(self, value: Any, type_: Type) -> str:
        """
        Format a literal value for the target language.

        Args:
            value: The value
            type_: The declared type of the value

        Returns:
            Formatted literal string
        """

    @abstractmethod
    def format_string(self, value: str) -> str:
        """Format a string literal, quoted and escaped."""

    @staticmethod
    def doc_lines(docs: str | None) -> list[str]:
        """Split documentation into lines, without trailing whitespace."""
        if not docs:
            return []
        return [line.rstrip() for line in docs.strip().splitlines()]
