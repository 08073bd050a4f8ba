"""
Tests for the atomic writer.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from openapi_to_code.errors import OutputValidationError, OutputWriteError
from openapi_to_code.pipeline.writer import AtomicWriter

VALID_RUST = """use serde::{Deserialize, Serialize};

pub struct ApiError {
    pub message: String,
    pub code: Option<String>,
}
"""


class TestAtomicWriter:
    """Tests for AtomicWriter."""

    def test_write_creates_file(self):
        """Test that write creates a new file."""
        writer = AtomicWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "mod.rs"
            writer.write(path, VALID_RUST)

            assert path.read_text(encoding="utf-8") == VALID_RUST
            assert list(path.parent.iterdir()) == [path]

    def test_write_overwrites_existing(self):
        """Test that write overwrites existing file."""
        writer = AtomicWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "mod.rs"
            path.write_text("old content")

            writer.write(path, VALID_RUST)

            assert path.read_text(encoding="utf-8") == VALID_RUST

    def test_unbalanced_braces_rejected(self):
        """Test that a failed validation leaves no file behind."""
        writer = AtomicWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "mod.rs"

            with pytest.raises(OutputValidationError, match="unbalanced"):
                writer.write(path, VALID_RUST + "pub struct Broken {\n")

            assert not path.exists()
            assert list(Path(tmpdir).iterdir()) == []

    def test_failed_write_keeps_previous_file(self):
        writer = AtomicWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "mod.rs"
            path.write_text(VALID_RUST)

            with pytest.raises(OutputValidationError):
                writer.write(path, "")

            assert path.read_text() == VALID_RUST

    def test_braces_in_strings_and_comments_ignored(self):
        writer = AtomicWriter()
        code = VALID_RUST + '/// Returns "{" when open {\n#[serde(rename = "}")]\npub const X: &str = "{{";\n'

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "mod.rs"
            writer.write(path, code)
            assert path.exists()

    def test_missing_error_type_rejected(self):
        writer = AtomicWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(OutputValidationError, match="ApiError"):
                writer.write(Path(tmpdir) / "mod.rs", "pub struct Pet {}\n")

    def test_validation_can_be_disabled(self):
        writer = AtomicWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "mod.rs"
            writer.write(path, "{", validate=False)
            assert path.read_text() == "{"

    def test_custom_validator(self):
        calls = []
        writer = AtomicWriter(validate_rust=calls.append)

        with tempfile.TemporaryDirectory() as tmpdir:
            writer.write(Path(tmpdir) / "mod.rs", "anything")

        assert calls == ["anything"]

    def test_other_languages_not_validated(self):
        writer = AtomicWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "notes.txt"
            writer.write(path, "{", language="text")
            assert path.read_text() == "{"

    def test_parent_is_a_file(self):
        writer = AtomicWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            blocker = Path(tmpdir) / "out"
            blocker.write_text("not a directory")

            with pytest.raises(OutputWriteError, match="Failed to write"):
                writer.write(blocker / "mod.rs", VALID_RUST)

            assert blocker.read_text() == "not a directory"

    def test_target_is_a_directory(self):
        writer = AtomicWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "mod.rs"
            path.mkdir()

            with pytest.raises(OutputWriteError):
                writer.write(path, VALID_RUST)

            assert sorted(p.name for p in Path(tmpdir).iterdir()) == ["mod.rs"]
