"""
CLI commands for module generation.

Thin wrappers over ``crudgen.core.use_cases``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from crudgen.core.config.loader import (
    DEFAULT_APIS_DIR,
    ConfigError,
    GeneratorConfig,
    build_request,
    find_config_file,
    load_config,
    project_root,
)
from crudgen.core.models.request import ApiType, ModuleGenerationRequest
from crudgen.core.models.template import GeneratedFile, WriteAction
from crudgen.core.services.naming import to_kebab_case

_ACTION_STYLE = {
    WriteAction.CREATED: ("+", "green"),
    WriteAction.REPLACED: ("~", "cyan"),
    WriteAction.MERGED: ("≈", "cyan"),
    WriteAction.UNCHANGED: ("=", "white"),
    WriteAction.SKIPPED: ("⊘", "yellow"),
}


def _load_context(ctx: click.Context) -> tuple[GeneratorConfig | None, Path]:
    """Config (if any) and the root relative module paths hang off."""
    config_path: Path | None = ctx.obj.get("config_path")
    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        return None, Path.cwd()
    try:
        return load_config(config_path), project_root(config_path)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


def _api_type(custom: str | None) -> ApiType | None:
    if not custom:
        return None
    names = tuple(n.strip() for n in custom.split(",") if n.strip())
    return ApiType(type="custom", custom_names=names)


def _single_request(
    ctx: click.Context,
    name: str,
    path: str | None,
    custom: str | None,
    **overrides: object,
) -> ModuleGenerationRequest:
    """Request for one module, from the config entry or from flags."""
    config, root = _load_context(ctx)
    api_type = _api_type(custom)
    if api_type is not None:
        overrides["api_type"] = api_type

    entry = config.get_module(name) if config else None
    if config is not None and entry is not None and path is None:
        return build_request(config, entry, root, **overrides)

    apis_dir = config.apis_dir if config else DEFAULT_APIS_DIR
    module_path = Path(path) if path else root / apis_dir / to_kebab_case(name)
    fields: dict[str, object] = {
        "module_name": name,
        "module_path": module_path.resolve(),
        "append_mode": config.append_mode if config else False,
        "framework": config.framework if config else "express",
    }
    fields.update({k: v for k, v in overrides.items() if v is not None})
    return ModuleGenerationRequest(**fields)


def _echo_files(files: list[GeneratedFile]) -> None:
    for f in files:
        icon, color = _ACTION_STYLE.get(f.action, ("?", "white"))
        click.secho(f"   {icon} ", fg=color, nl=False)
        click.echo(f"{f.action:<9} {f.path}")


@click.group()
def module() -> None:
    """Modules — scaffold payload types, generate CRUD files, inspect types."""


# ── Scaffold ────────────────────────────────────────────────────


@module.command("types")
@click.argument("name")
@click.option("--path", "path", default=None, help="Module directory (default: from config).")
@click.option("--custom", default=None, help="Comma-separated custom operation names.")
@click.option("--force", is_flag=True, help="Overwrite existing type files.")
@click.option("--dry-run", is_flag=True, help="Show what would be written.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def types(
    ctx: click.Context,
    name: str,
    path: str | None,
    custom: str | None,
    force: bool,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Write payload type stubs for NAME.

    Existing type files are kept unless --force is given.
    """
    from crudgen.core.use_cases.scaffold import scaffold_types

    try:
        request = _single_request(ctx, name, path, custom, dry_run=dry_run)
        files = scaffold_types(request, force=force)
    except (ValueError, OSError) as e:
        if as_json:
            click.echo(json.dumps({"ok": False, "error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({
            "ok": True,
            "module": request.module_name,
            "files": [
                {"path": f.path, "operation": f.operation, "action": str(f.action)}
                for f in files
            ],
        }, indent=2))
        return

    label = "[dry-run] " if dry_run else ""
    click.secho(f"📝 {label}Types for {request.module_name}", fg="cyan", bold=True)
    _echo_files(files)
    click.echo()


# ── Generate ────────────────────────────────────────────────────


@module.command("generate")
@click.argument("name", required=False)
@click.option("--all", "all_modules", is_flag=True, help="Generate every configured module.")
@click.option("--path", "path", default=None, help="Module directory (default: from config).")
@click.option("--custom", default=None, help="Comma-separated custom operation names.")
@click.option(
    "--framework",
    type=click.Choice(["express", "hono"]),
    default=None,
    help="Target framework (default: from config, else express).",
)
@click.option(
    "--append/--no-append",
    "append_mode",
    default=None,
    help="Merge into existing marker regions instead of replacing files.",
)
@click.option("--dry-run", is_flag=True, help="Show what would be written.")
@click.option("--jobs", "-j", default=1, type=click.IntRange(min=1), help="Modules in parallel.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    name: str | None,
    all_modules: bool,
    path: str | None,
    custom: str | None,
    framework: str | None,
    append_mode: bool | None,
    dry_run: bool,
    jobs: int,
    as_json: bool,
) -> None:
    """Generate services, controllers, validators and routes.

    Examples:

        crudgen module generate todo

        crudgen module generate --all --append --jobs 4

        crudgen module generate report --custom summarize,export --path src/apis/report
    """
    from crudgen.core.use_cases.generate import requests_from_config, run_generate

    if bool(name) == all_modules:
        raise click.UsageError("Give a module NAME or --all (not both).")
    if all_modules and (path or custom):
        raise click.UsageError("--path and --custom apply to a single module, not --all.")

    overrides: dict[str, object] = {
        "framework": framework,
        "append_mode": append_mode,
        "dry_run": dry_run,
    }

    try:
        if all_modules:
            config, root = _load_context(ctx)
            if config is None:
                raise click.UsageError("--all needs a crudgen.yml (none found).")
            requests = requests_from_config(config, root, None, **overrides)
        else:
            assert name is not None
            requests = [_single_request(ctx, name, path, custom, **overrides)]
    except ValueError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    result = run_generate(requests, jobs=jobs)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    label = "[dry-run] " if dry_run else ""
    for outcome in result.modules:
        if outcome.ok:
            click.secho(f"⚙️  {label}{outcome.module_name}", fg="cyan", bold=True)
            if not outcome.files:
                click.secho("   No type files found; nothing generated.", fg="yellow")
            _echo_files(outcome.files)
        else:
            click.secho(f"❌ {outcome.module_name}: {outcome.error}", fg="red")
        click.echo()

    failed = len(result.failed)
    if failed:
        click.secho(
            f"   {len(result.modules) - failed}/{len(result.modules)} module(s) generated",
            fg="red",
            bold=True,
        )
        sys.exit(1)


# ── Inspect ─────────────────────────────────────────────────────


@module.command("inspect")
@click.argument("file", type=click.Path(path_type=Path))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def inspect(file: Path, as_json: bool) -> None:
    """Show the fields and fragments parsed from a type FILE."""
    from crudgen.core.models.fragment import FragmentKind
    from crudgen.core.use_cases.inspect import inspect_type_file

    result = inspect_type_file(file)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.error is None else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    payload = result.payload
    assert payload is not None
    click.secho(f"🔍 {file}", fg="cyan", bold=True)
    click.echo(f"   Fields: {len(payload.fields)}")
    for f in payload.fields:
        mark = "?" if f.optional else " "
        click.echo(f"     • {f.name}{mark} {f.type_expression}")

    click.echo()
    click.echo(f"   Destructuring: {result.fragments[FragmentKind.DESTRUCTURING].text}")
    click.echo(f"   Field object:  {result.fragments[FragmentKind.FIELD_OBJECT].text}")
    click.echo("   Validation:")
    for line in result.fragments[FragmentKind.VALIDATION_STUB].text.splitlines():
        click.echo(f"     {line}")
    click.echo()
