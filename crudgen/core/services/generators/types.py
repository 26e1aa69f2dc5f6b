"""
Type file scaffold — the hand-editable ``typePayload`` starting point.

These files are authored by the user after scaffolding, so they are
written once and never merged.
"""

from __future__ import annotations

from pathlib import Path

from crudgen.core.services.generators import operation_file
from crudgen.core.services.naming import ModuleNaming

TYPES_DIR = "types"

_PAYLOADS: dict[str, str] = {
    "create": """\
export type typePayload = {{
  // Add your {original} creation fields here
}};
""",
    "get": """\
export type typePayload = {{
  id: string; // {cls} ID to retrieve
}};
""",
    "update": """\
export type typePayload = {{
  id: string; // {cls} ID to update
  // Add your updatable {original} fields here (make them optional)
}};
""",
    "delete": """\
export type typePayload = {{
  id: string; // {cls} ID to delete
}};
""",
    "list": """\
export type typePayload = {{
  page?: number;
  limit?: number;
  sort_by?: string;
  sort_order?: 'asc' | 'desc';
  search?: string;
  // Add your {original} specific filters here
}};
""",
}

_CUSTOM_PAYLOAD = """\
export type typePayload = {{
  // Add your {operation} request fields here
}};
"""

_RECORD_RESULT = """
export type typeResultData = {{
  id: string;
  created_at: string;
  updated_at: string;
  // Add your {original} specific fields here
}};
"""

_LIST_RESULT = """
export type typeResultData = {{
  items: {{
    id: string;
    created_at: string;
    updated_at: string;
  }}[];
  _metadata: {{
    page: number;
    limit: number;
    total_count: number;
  }};
}};
"""

_DELETE_RESULT = """
export type typeResultData = {{
  deleted_id: string;
}};
"""

_CUSTOM_RESULT = """
export type typeResultData = {{
  // Add your {operation} response fields here
}};
"""

_ERROR_CODES = {
    "create": ("'VALIDATION_ERROR' | 'DUPLICATE_ENTRY' | 'INTERNAL_ERROR'", "400 | 409 | 500"),
    "get": ("'NOT_FOUND' | 'UNAUTHORIZED' | 'INTERNAL_ERROR'", "404 | 401 | 500"),
    "update": ("'VALIDATION_ERROR' | 'NOT_FOUND' | 'INTERNAL_ERROR'", "400 | 404 | 500"),
    "delete": ("'NOT_FOUND' | 'UNAUTHORIZED' | 'INTERNAL_ERROR'", "404 | 401 | 500"),
    "list": ("'VALIDATION_ERROR' | 'INTERNAL_ERROR'", "400 | 500"),
}
_DEFAULT_ERROR_CODES = ("'VALIDATION_ERROR' | 'INTERNAL_ERROR'", "400 | 500")

_RESULT_TAIL = """
export type typeResultError = {{
  code: {codes};
  message: string;
  statusCode: {statuses};
}};

export type typeResult = {{
  data: null | typeResultData;
  error: null | typeResultError;
}};
"""


def types_path(operation: str, naming: ModuleNaming) -> Path:
    return operation_file(TYPES_DIR, operation, naming)


def render_types(operation: str, naming: ModuleNaming) -> str:
    """Type file stub for one operation."""
    values = {"original": naming.original, "cls": naming.cls, "operation": operation}

    if operation in _PAYLOADS:
        payload = _PAYLOADS[operation]
        if operation == "list":
            result = _LIST_RESULT
        elif operation == "delete":
            result = _DELETE_RESULT
        else:
            result = _RECORD_RESULT
    else:
        payload, result = _CUSTOM_PAYLOAD, _CUSTOM_RESULT

    codes, statuses = _ERROR_CODES.get(operation, _DEFAULT_ERROR_CODES)
    tail = _RESULT_TAIL.format(codes=codes, statuses=statuses)
    return payload.format(**values) + result.format(**values) + tail
