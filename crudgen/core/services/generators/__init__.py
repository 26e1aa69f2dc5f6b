"""
Generators — render TypeScript files for one module operation.

Each module exposes a ``render_*()`` function returning file text (no
markers, no I/O) and a ``*_path()`` helper for its location under the
module directory. Wrapping, merging and writing happen in ``two_phase``.
"""

from __future__ import annotations

from pathlib import Path

from crudgen.core.services.naming import ModuleNaming


def operation_file(directory: str, operation: str, naming: ModuleNaming) -> Path:
    """``<directory>/<operation>.<file>.ts`` relative to the module root."""
    return Path(directory) / f"{operation}.{naming.file}.ts"


def symbol(operation: str, naming: ModuleNaming, suffix: str) -> str:
    """``createTodoController``-style identifier."""
    return f"{operation}{naming.cls}{suffix}"
