"""
Atomic file writer for generated code.

Generated code is written to a temporary file next to the target, checked,
then moved into place, so an interrupted run never leaves a partial file.
"""

from __future__ import annotations

import re
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..errors import OutputValidationError, OutputWriteError

# String literals and line comments, ignored when balancing braces
_STRING_LITERAL = re.compile(r'"(?:\\.|[^"\\])*"')
_LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)


class AtomicWriter:
    """Handles atomic file writes with validation.

    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, validate_rust: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate_rust: Optional validation function for Rust code
        """
        self._validate_rust = validate_rust or self._default_validate_rust

    def write(self, path: Path, content: str, language: str = "rust", validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            language: Language of the content, selects the validation
            validate: Whether to validate before finalizing

        Raises:
            OutputValidationError: If validation fails
            OutputWriteError: If file operations fail
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)

            # Same directory ensures atomic rename on the same filesystem
            temp_fd, temp_path_str = tempfile.mkstemp(
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                text=True,
            )
        except OSError as e:
            raise OutputWriteError(f"Failed to write {path}: {e}") from e
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate:
                self._validate_content(content, language)

            temp_path.replace(path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise OutputWriteError(f"Failed to write {path}: {e}") from e
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise

    def _validate_content(self, content: str, language: str) -> None:
        if language == "rust":
            self._validate_rust(content)

    def _default_validate_rust(self, content: str) -> None:
        """Basic structural checks on Rust code.

        Raises:
            OutputValidationError: If validation fails
        """
        if not content.strip():
            raise OutputValidationError("Generated Rust code is empty")

        code = "\n".join(_LINE_COMMENT.sub("", _STRING_LITERAL.sub('""', line)) for line in content.splitlines())
        open_braces = code.count("{")
        close_braces = code.count("}")
        if open_braces != close_braces:
            raise OutputValidationError(f"Generated Rust code has unbalanced braces: {open_braces} open, {close_braces} close")

        if "struct ApiError" not in content:
            raise OutputValidationError("Generated Rust code is missing the ApiError declaration")
