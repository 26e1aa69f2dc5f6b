"""
Service generator — the per-operation function the controller calls.

The service destructures the typed payload and assembles the input
object for persistence; storing it is left to the user.
"""

from __future__ import annotations

from pathlib import Path

from crudgen.core.models.field import ParsedTypePayload
from crudgen.core.models.fragment import FragmentKind, GeneratedFragment
from crudgen.core.services.generators import operation_file, symbol
from crudgen.core.services.naming import ModuleNaming

SERVICES_DIR = "services"

DEFAULT_PAGE_SIZE = 20

_SERVICE = """\
import type {{ typePayload, typeResult, typeResultData }} from '../types/{operation}.{file}';

export default async function {name}(payload: typePayload): Promise<typeResult> {{
  const {destructuring} = payload;
{prelude}  const input = {field_object};

  // {constant}: persist or query `input` here
  return {{ data: {data}, error: null }};
}}
"""


def service_path(operation: str, naming: ModuleNaming) -> Path:
    return operation_file(SERVICES_DIR, operation, naming)


def service_name(operation: str, naming: ModuleNaming) -> str:
    return symbol(operation, naming, "Service")


def render_service(
    operation: str,
    naming: ModuleNaming,
    payload: ParsedTypePayload,
    fragments: dict[FragmentKind, GeneratedFragment],
) -> str:
    """Service file body for one operation."""
    prelude = ""
    data = "input as unknown as typeResultData"

    if operation == "list":
        if payload.get("page") and payload.get("limit"):
            prelude = (
                f"  const pageSize = limit ?? {DEFAULT_PAGE_SIZE};\n"
                "  const offset = ((page ?? 1) - 1) * pageSize;\n"
            )
            meta = "{ page: page ?? 1, limit: pageSize, offset, total_count: 0 }"
        else:
            meta = "{ total_count: 0 }"
        data = f"{{ items: [], _metadata: {meta} }} as unknown as typeResultData"
    elif operation == "delete" and payload.has_id:
        data = "{ deleted_id: id } as unknown as typeResultData"

    return _SERVICE.format(
        operation=operation,
        file=naming.file,
        name=service_name(operation, naming),
        destructuring=fragments[FragmentKind.DESTRUCTURING].text,
        field_object=fragments[FragmentKind.FIELD_OBJECT].text,
        prelude=prelude,
        constant=naming.constant,
        data=data,
    )
