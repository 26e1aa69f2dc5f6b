"""
Inspect use case — show what the parser sees in one type file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from crudgen.core.models.field import ParsedTypePayload
from crudgen.core.models.fragment import FragmentKind, GeneratedFragment
from crudgen.core.services.fragments import build_fragments
from crudgen.core.services.type_parser import ParseError, parse_type_file


@dataclass
class InspectResult:
    """Parsed fields and derived fragments of a type file."""

    path: Path
    payload: ParsedTypePayload | None = None
    fragments: dict[FragmentKind, GeneratedFragment] = field(default_factory=dict)
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"path": str(self.path), "error": self.error}
        assert self.payload is not None
        return {
            "path": str(self.path),
            "fields": [
                {
                    "name": f.name,
                    "optional": f.optional,
                    "type": f.type_expression,
                    "nested": f.is_nested,
                    "line": f.line,
                }
                for f in self.payload.fields
            ],
            "has_id": self.payload.has_id,
            "has_pagination": self.payload.has_pagination,
            "fragments": {str(k): v.text for k, v in self.fragments.items()},
        }


def inspect_type_file(path: Path) -> InspectResult:
    """Parse ``path`` and derive its fragments; parse and read errors are reported."""
    result = InspectResult(path=path)
    try:
        result.payload = parse_type_file(path)
    except (ParseError, OSError) as e:
        result.error = str(e)
        return result
    result.fragments = build_fragments(result.payload)
    return result
