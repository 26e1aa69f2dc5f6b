"""
Routes generator — one file per module registering its controllers.

Only operations that were generated are registered, in the order given.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from crudgen.core.services.generators.controller import CONTROLLERS_DIR, controller_name
from crudgen.core.services.naming import ModuleNaming

# (HTTP method, path) per crud operation; custom operations POST to /<name>
_CRUD_ROUTES = {
    "create": ("post", "/"),
    "get": ("get", "/:id"),
    "update": ("put", "/:id"),
    "delete": ("delete", "/:id"),
    "list": ("get", "/"),
}

_HEADERS = {
    "express": ("import { Router } from 'express';", "const router = Router();", "router"),
    "hono": ("import { Hono } from 'hono';", "const app = new Hono();", "app"),
}


def routes_path(naming: ModuleNaming) -> Path:
    return Path(f"{naming.file}.routes.ts")


def route_for(operation: str) -> tuple[str, str]:
    """(method, path) an operation is served on."""
    return _CRUD_ROUTES.get(operation, ("post", f"/{operation}"))


def render_routes(
    operations: Sequence[str],
    naming: ModuleNaming,
    framework: str = "express",
) -> str:
    """Routes file body registering ``operations``.

    Raises:
        ValueError: Unknown framework.
    """
    if framework not in _HEADERS:
        raise ValueError(f"Unsupported framework: {framework}")

    import_line, create_line, var = _HEADERS[framework]
    lines = [import_line]
    for op in operations:
        lines.append(
            f"import {controller_name(op, naming)} from './{CONTROLLERS_DIR}/{op}.{naming.file}';"
        )
    lines += ["", create_line, ""]
    for op in operations:
        method, path = route_for(op)
        lines.append(f"{var}.{method}('{path}', {controller_name(op, naming)});")
    lines += ["", f"export default {var};", ""]
    return "\n".join(lines)
