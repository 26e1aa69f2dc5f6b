"""
Controller generator — HTTP handler for one operation.

Validates the request input, destructures the validated payload and
hands the field object to the service. Express and Hono differ only in
how input is read and how the response is sent.
"""

from __future__ import annotations

from pathlib import Path

from crudgen.core.models.fragment import FragmentKind, GeneratedFragment
from crudgen.core.services.generators import operation_file, symbol
from crudgen.core.services.generators.service import service_name
from crudgen.core.services.naming import ModuleNaming

CONTROLLERS_DIR = "controllers"

# Where each crud operation reads its input from; custom operations use the body
_INPUT_SOURCE = {
    "create": "body",
    "get": "params",
    "update": "params+body",
    "delete": "params",
    "list": "query",
}

_INPUT_EXPR = {
    "express": {
        "body": "req.body",
        "params": "req.params",
        "query": "req.query",
        "params+body": "{ ...req.params, ...req.body }",
    },
    "hono": {
        "body": "await c.req.json()",
        "params": "c.req.param()",
        "query": "c.req.query()",
        "params+body": "{ ...c.req.param(), ...(await c.req.json()) }",
    },
}

_EXPRESS = """\
import {{ Request, Response }} from 'express';
import {{ validatePayload }} from '../validators/{operation}.{file}';
import {service} from '../services/{operation}.{file}';

export default async function {name}(req: Request, res: Response): Promise<void> {{
  const validation = validatePayload({input});
  if (!validation.success) {{
    res.status(400).json({{
      data: null,
      error: {{ code: 'VALIDATION_ERROR', message: validation.error.message, statusCode: 400 }},
    }});
    return;
  }}

  const {destructuring} = validation.data;
  const result = await {service}({field_object});
  res.status(result.error ? result.error.statusCode : {status}).json(result);
}}
"""

_HONO = """\
import {{ Context }} from 'hono';
import {{ validatePayload }} from '../validators/{operation}.{file}';
import {service} from '../services/{operation}.{file}';

export default async function {name}(c: Context) {{
  const validation = validatePayload({input});
  if (!validation.success) {{
    return c.json(
      {{
        data: null,
        error: {{ code: 'VALIDATION_ERROR', message: validation.error.message, statusCode: 400 }},
      }},
      400,
    );
  }}

  const {destructuring} = validation.data;
  const result = await {service}({field_object});
  return c.json(result, result.error ? result.error.statusCode : {status});
}}
"""

_TEMPLATES = {"express": _EXPRESS, "hono": _HONO}


def controller_path(operation: str, naming: ModuleNaming) -> Path:
    return operation_file(CONTROLLERS_DIR, operation, naming)


def controller_name(operation: str, naming: ModuleNaming) -> str:
    return symbol(operation, naming, "Controller")


def render_controller(
    operation: str,
    naming: ModuleNaming,
    fragments: dict[FragmentKind, GeneratedFragment],
    framework: str = "express",
) -> str:
    """Controller file body for one operation.

    Raises:
        ValueError: Unknown framework.
    """
    if framework not in _TEMPLATES:
        raise ValueError(f"Unsupported framework: {framework}")

    source = _INPUT_SOURCE.get(operation, "body")
    return _TEMPLATES[framework].format(
        operation=operation,
        file=naming.file,
        name=controller_name(operation, naming),
        service=service_name(operation, naming),
        input=_INPUT_EXPR[framework][source],
        destructuring=fragments[FragmentKind.DESTRUCTURING].text,
        field_object=fragments[FragmentKind.FIELD_OBJECT].text,
        status=201 if operation == "create" else 200,
    )
