"""
Pipeline generator.

Runs the two phases of the pipeline on one OpenAPI document:

1. Converter: OpenAPI document -> IR Module
2. Backend: IR Module -> target language source

and writes the result atomically.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .backends import get_backend
from .config import CodeGeneratorConfig
from .converter import convert
from .ir import Module
from .writer import AtomicWriter

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Generates bindings for one OpenAPI document."""

    def __init__(
        self,
        document: dict[str, Any],
        config: CodeGeneratorConfig | None = None,
        target: str = "rust",
        source: str | None = None,
    ):
        """
        Initialize the generator.

        Args:
            document: Parsed OpenAPI document
            config: Code generation configuration
            target: Target language, must be a registered backend
            source: Path of the input document, recorded in the IR metadata

        Raises:
            UnknownTargetError: If no backend is registered for ``target``
        """
        self.document = document
        self.config = config or CodeGeneratorConfig()
        self.target = target
        self.source = source
        self.backend = get_backend(target, self.config)
        self._module: Module | None = None

    def convert(self) -> Module:
        """Convert the document to IR (computed once)."""
        if self._module is None:
            self._module = convert(self.document, self.source)
            logger.debug("Converted %s into %d items", self.source or "document", len(self._module.items))
        return self._module

    def generate(self) -> str:
        """Generate the target language source."""
        return self.backend.generate(self.convert())

    def write(self, output_dir: Path | str) -> Path:
        """
        Generate and write the bindings into ``output_dir``.

        Returns:
            Path of the written file
        """
        output_path = Path(output_dir) / self.config.output_file_name
        content = self.generate()
        AtomicWriter().write(output_path, content, language=self.target, validate=self.config.validate_before_write)
        logger.debug("Wrote %s", output_path)
        return output_path
