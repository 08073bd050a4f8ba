"""
Code generation backends.

Contains language-specific code generators.
"""

from __future__ import annotations

from ...errors import UnknownTargetError
from ..config import CodeGeneratorConfig
from .base import CodeBackend
from .rust_backend import RustBackend

BACKENDS: dict[str, type[CodeBackend]] = {
    "rust": RustBackend,
}


def get_backend(target: str, config: CodeGeneratorConfig) -> CodeBackend:
    """Instantiate the backend registered for ``target``."""
    try:
        backend_class = BACKENDS[target]
    except KeyError:
        raise UnknownTargetError(target, sorted(BACKENDS)) from None
    return backend_class(config)


__all__ = [
    "BACKENDS",
    "CodeBackend",
    "RustBackend",
    "get_backend",
]
