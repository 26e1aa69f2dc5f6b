"""
Tests for CLI commands — config check, module types/generate/inspect, global options.
"""

import json
import textwrap
from pathlib import Path

from click.testing import CliRunner

from crudgen.main import cli


def _make_project(tmp_path: Path) -> Path:
    """Create a crudgen.yml with one scaffoldable module."""
    content = textwrap.dedent("""\
        version: 1
        framework: express
        modules:
          - name: todo
    """)
    config = tmp_path / "crudgen.yml"
    config.write_text(content)
    (tmp_path / "src" / "apis" / "todo").mkdir(parents=True)
    return config


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "CRUD API boilerplate" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_module_group_registered(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["module", "--help"])
        assert result.exit_code == 0
        for name in ("types", "generate", "inspect"):
            assert name in result.output


class TestConfigCheckCommand:
    """Tests for the config check command."""

    def test_valid(self, tmp_path: Path):
        config = _make_project(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "check"])
        assert result.exit_code == 0
        assert "valid" in result.output

    def test_json(self, tmp_path: Path):
        config = _make_project(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "check", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["valid"] is True
        assert data["module_count"] == 1

    def test_invalid(self, tmp_path: Path):
        config = tmp_path / "crudgen.yml"
        config.write_text("framework: koa\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "check"])
        assert result.exit_code == 1
        assert "errors" in result.output


class TestModuleCommands:
    """Tests for the module command group."""

    def test_types_then_generate(self, tmp_path: Path):
        config = _make_project(tmp_path)
        runner = CliRunner()

        result = runner.invoke(cli, ["--config", str(config), "module", "types", "todo"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "src/apis/todo/types/create.todo.ts").is_file()

        result = runner.invoke(cli, ["--config", str(config), "module", "generate", "todo"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "src/apis/todo/todo.routes.ts").is_file()
        assert "created" in result.output

    def test_generate_json(self, tmp_path: Path):
        config = _make_project(tmp_path)
        types_dir = tmp_path / "src/apis/todo/types"
        types_dir.mkdir()
        (types_dir / "get.todo.ts").write_text("export type typePayload = {\n  id: string;\n};\n")

        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(config), "module", "generate", "todo", "--json"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["ok"] is True
        roles = [f["role"] for f in data["modules"][0]["files"]]
        assert roles == ["service", "controller", "validator", "routes"]

    def test_generate_without_config_uses_path(self, tmp_path: Path):
        module = tmp_path / "elsewhere"
        (module / "types").mkdir(parents=True)
        (module / "types" / "create.note.ts").write_text(
            "export type typePayload = { title: string; }\n"
        )
        runner = CliRunner()
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(
                cli, ["module", "generate", "note", "--path", str(module), "--framework", "hono"]
            )
        assert result.exit_code == 0, result.output
        controller = (module / "controllers" / "create.note.ts").read_text()
        assert "from 'hono'" in controller

    def test_generate_parse_error_exits_1(self, tmp_path: Path):
        config = _make_project(tmp_path)
        types_dir = tmp_path / "src/apis/todo/types"
        types_dir.mkdir()
        (types_dir / "create.todo.ts").write_text("export type typePayload = {\n  badline\n};\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "module", "generate", "todo"])
        assert result.exit_code == 1
        assert "badline" in result.output

    def test_generate_dry_run(self, tmp_path: Path):
        config = _make_project(tmp_path)
        runner = CliRunner()
        runner.invoke(cli, ["--config", str(config), "module", "types", "todo"])
        result = runner.invoke(
            cli, ["--config", str(config), "module", "generate", "todo", "--dry-run"]
        )
        assert result.exit_code == 0, result.output
        assert "[dry-run]" in result.output
        assert not (tmp_path / "src/apis/todo/services").exists()

    def test_generate_all(self, tmp_path: Path):
        config = _make_project(tmp_path)
        runner = CliRunner()
        runner.invoke(cli, ["--config", str(config), "module", "types", "todo"])
        result = runner.invoke(
            cli, ["--config", str(config), "module", "generate", "--all", "--jobs", "2"]
        )
        assert result.exit_code == 0, result.output

    def test_generate_needs_name_or_all(self, tmp_path: Path):
        config = _make_project(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "module", "generate"])
        assert result.exit_code == 2

    def test_generate_all_rejects_single_module_options(self, tmp_path: Path):
        config = _make_project(tmp_path)
        runner = CliRunner()
        for extra in (["--custom", "summarize"], ["--path", "src/apis/elsewhere"]):
            result = runner.invoke(
                cli, ["--config", str(config), "module", "generate", "--all", *extra]
            )
            assert result.exit_code == 2
            assert "apply to a single module" in result.output
        assert list((tmp_path / "src" / "apis" / "todo").iterdir()) == []

    def test_bad_module_name(self, tmp_path: Path):
        config = _make_project(tmp_path)
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(config), "module", "generate", "bad name"]
        )
        assert result.exit_code == 1

    def test_inspect(self, tmp_path: Path):
        path = tmp_path / "create.todo.ts"
        path.write_text("export type typePayload = { name: string; description?: string; }\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["module", "inspect", str(path)])
        assert result.exit_code == 0, result.output
        assert "{ name, description }" in result.output
        assert "{ name: name, description: description }" in result.output

    def test_inspect_json_error(self, tmp_path: Path):
        path = tmp_path / "create.todo.ts"
        path.write_text("type nothing = {}\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["module", "inspect", str(path), "--json"])
        assert result.exit_code == 1
        assert "error" in json.loads(result.output)
