"""
Tests for the two-phase generator — collect payloads, then render and write.
"""

from pathlib import Path

import pytest

from crudgen.core.models.request import ApiType, ModuleGenerationRequest
from crudgen.core.models.template import WriteAction
from crudgen.core.services.merge import MARKER_BEGIN, MARKER_END, MergeConflict
from crudgen.core.services.two_phase import (
    GenerationError,
    collect_payloads,
    emit_files,
    generate,
)
from crudgen.core.services.type_parser import ParseError


def _snapshot(root: Path) -> dict[str, bytes]:
    return {
        str(p.relative_to(root)): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


# ═══════════════════════════════════════════════════════════════════
#  Phase 1
# ═══════════════════════════════════════════════════════════════════


class TestCollectPayloads:
    """Tests for collect_payloads()."""

    def test_missing_files_marked_absent(self, todo_request, write_type):
        write_type("get", "  id: string;\n")
        payloads = collect_payloads(todo_request)
        assert list(payloads) == ["create", "get", "update", "delete", "list"]
        assert payloads["create"] is None
        assert payloads["get"] is not None
        assert payloads["get"].names == ["id"]

    def test_missing_module_dir(self, tmp_path: Path):
        request = ModuleGenerationRequest(module_name="todo", module_path=tmp_path / "absent")
        with pytest.raises(FileNotFoundError):
            collect_payloads(request)

    def test_parse_error_wrapped(self, todo_request, write_type):
        write_type("create", "  title: string;\n")
        write_type("update", "  id: string;\n  badline\n")
        with pytest.raises(GenerationError) as exc:
            collect_payloads(todo_request)
        err = exc.value
        assert err.module_name == "todo"
        assert err.operation == "update"
        assert isinstance(err.cause, ParseError)
        assert err.__cause__ is err.cause
        assert "badline" in str(err)

    def test_custom_operations_in_given_order(self, module_dir: Path, write_type):
        write_type("summarize", "  text: string;\n")
        request = ModuleGenerationRequest(
            module_name="todo",
            module_path=module_dir,
            api_type=ApiType(type="custom", custom_names=("summarize", "archive")),
        )
        payloads = collect_payloads(request)
        assert list(payloads) == ["summarize", "archive"]
        assert payloads["archive"] is None


# ═══════════════════════════════════════════════════════════════════
#  Phase 2
# ═══════════════════════════════════════════════════════════════════


class TestEmitFiles:
    """Tests for emit_files()."""

    def test_canonical_order(self, todo_request, write_type):
        write_type("list", "  page?: number;\n")
        write_type("create", "  title: string;\n")
        files = emit_files(todo_request, collect_payloads(todo_request))
        assert [(f.operation, f.role) for f in files] == [
            ("create", "service"),
            ("create", "controller"),
            ("create", "validator"),
            ("list", "service"),
            ("list", "controller"),
            ("list", "validator"),
            ("", "routes"),
        ]

    def test_every_file_marker_wrapped(self, todo_request, write_type):
        write_type("create", "  title: string;\n")
        for f in emit_files(todo_request, collect_payloads(todo_request)):
            assert f.content.startswith(MARKER_BEGIN + "\n")
            assert f.content.endswith(MARKER_END + "\n")

    def test_no_type_files_no_output(self, todo_request):
        assert emit_files(todo_request, collect_payloads(todo_request)) == []


class TestGenerate:
    """Tests for generate()."""

    def test_writes_expected_files(self, todo_request, module_dir: Path, write_type):
        write_type("create", "  title: string;\n  done?: boolean;\n")
        files = generate(todo_request)
        assert all(f.action == WriteAction.CREATED for f in files)
        assert (module_dir / "services" / "create.todo.ts").is_file()
        assert (module_dir / "controllers" / "create.todo.ts").is_file()
        assert (module_dir / "validators" / "create.todo.ts").is_file()
        assert (module_dir / "todo.routes.ts").is_file()
        assert not (module_dir / "services" / "get.todo.ts").exists()

        service = (module_dir / "services" / "create.todo.ts").read_text()
        assert "const { title, done } = payload;" in service
        assert "const input = { title: title, done: done };" in service

    def test_idempotent_replace(self, todo_request, module_dir: Path, write_type):
        write_type("create", "  title: string;\n")
        write_type("get", "  id: string;\n")
        generate(todo_request)
        first = _snapshot(module_dir)

        files = generate(todo_request)
        assert _snapshot(module_dir) == first
        assert all(f.action == WriteAction.UNCHANGED for f in files)

    def test_append_preserves_manual_edits(self, module_dir: Path, write_type):
        request = ModuleGenerationRequest(module_name="todo", module_path=module_dir, append_mode=True)
        write_type("create", "  title: string;\n")
        generate(request)

        service = module_dir / "services" / "create.todo.ts"
        service.write_text("// my header\n" + service.read_text() + "\nexport const extra = 1;\n")

        write_type("create", "  title: string;\n  priority: number;\n")
        files = generate(request)

        text = service.read_text()
        assert text.startswith("// my header\n")
        assert text.endswith("\nexport const extra = 1;\n")
        assert "const { title, priority } = payload;" in text
        by_role = {f.role: f for f in files if f.operation == "create"}
        assert by_role["service"].action == WriteAction.MERGED

    def test_append_conflict(self, module_dir: Path, write_type):
        request = ModuleGenerationRequest(module_name="todo", module_path=module_dir, append_mode=True)
        write_type("create", "  title: string;\n")
        (module_dir / "services").mkdir()
        handwritten = module_dir / "services" / "create.todo.ts"
        handwritten.write_text("export default function mine() {}\n")

        with pytest.raises(MergeConflict):
            generate(request)
        assert handwritten.read_text() == "export default function mine() {}\n"

    def test_parse_failure_writes_nothing(self, todo_request, module_dir: Path, write_type):
        write_type("create", "  title: string;\n")
        write_type("list", "  page?: number;\n  ???\n")
        before = _snapshot(module_dir)
        with pytest.raises(GenerationError):
            generate(todo_request)
        assert _snapshot(module_dir) == before

    def test_dry_run(self, module_dir: Path, write_type):
        request = ModuleGenerationRequest(module_name="todo", module_path=module_dir, dry_run=True)
        write_type("get", "  id: string;\n")
        before = _snapshot(module_dir)
        files = generate(request)
        assert len(files) == 4
        assert _snapshot(module_dir) == before

    def test_routes_register_present_operations(self, todo_request, module_dir: Path, write_type):
        write_type("get", "  id: string;\n")
        write_type("delete", "  id: string;\n")
        generate(todo_request)
        routes = (module_dir / "todo.routes.ts").read_text()
        assert "router.get('/:id', getTodoController);" in routes
        assert "router.delete('/:id', deleteTodoController);" in routes
        assert "createTodoController" not in routes

    def test_hono_framework(self, module_dir: Path, write_type):
        request = ModuleGenerationRequest(module_name="todo", module_path=module_dir, framework="hono")
        write_type("get", "  id: string;\n")
        generate(request)
        controller = (module_dir / "controllers" / "get.todo.ts").read_text()
        assert "import { Context } from 'hono';" in controller
