"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from crudgen.core.models.request import ModuleGenerationRequest


@pytest.fixture
def module_dir(tmp_path: Path) -> Path:
    """Return an empty ``todo`` module directory with a ``types/`` folder."""
    path = tmp_path / "src" / "apis" / "todo"
    (path / "types").mkdir(parents=True)
    return path


@pytest.fixture
def write_type(module_dir: Path):
    """Write ``types/<op>.todo.ts`` holding the given payload body."""

    def _write(operation: str, body: str) -> Path:
        path = module_dir / "types" / f"{operation}.todo.ts"
        text = "export type typePayload = {\n" + textwrap.dedent(body) + "};\n"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def todo_request(module_dir: Path) -> ModuleGenerationRequest:
    """A crud generation request for the ``todo`` module."""
    return ModuleGenerationRequest(module_name="todo", module_path=module_dir)
