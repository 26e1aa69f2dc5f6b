"""
Field models — the parsed shape of one ``typePayload`` declaration.

A declaration is an ordered list of fields. Order is the declaration
order and drives every emitted fragment, so fields live in a tuple,
never in a mapping keyed by name.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, field_validator

IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Field names that mark a list-style payload
PAGINATION_FIELDS = ("page", "limit", "sort_by", "sort_order")


class PayloadField(BaseModel):
    """One ``name[?]: type`` entry of a payload declaration.

    Attributes:
        name:            Identifier, unique within the declaration.
        optional:        True when declared with ``?``.
        type_expression: Raw type text as written (never re-parsed).
        line:            1-based source line, for diagnostics only.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    optional: bool = False
    type_expression: str
    line: int | None = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not IDENTIFIER_RE.match(value):
            raise ValueError(f"not an identifier: {value!r}")
        return value

    @field_validator("type_expression")
    @classmethod
    def _check_type(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("type expression must not be empty")
        return value

    @property
    def is_nested(self) -> bool:
        """Whether the type is an inline object literal."""
        return self.type_expression.startswith("{")


class ParsedTypePayload(BaseModel):
    """The ordered field list of one declaration."""

    model_config = ConfigDict(frozen=True)

    fields: tuple[PayloadField, ...] = ()
    source_path: str = ""

    @field_validator("fields")
    @classmethod
    def _check_unique(cls, value: tuple[PayloadField, ...]) -> tuple[PayloadField, ...]:
        seen: set[str] = set()
        for f in value:
            if f.name in seen:
                raise ValueError(f"duplicate field name: {f.name!r}")
            seen.add(f.name)
        return value

    @property
    def names(self) -> list[str]:
        return [f.name for f in self.fields]

    @property
    def has_id(self) -> bool:
        return "id" in self.names

    @property
    def has_pagination(self) -> bool:
        return any(name in PAGINATION_FIELDS for name in self.names)

    def get(self, name: str) -> PayloadField | None:
        """Look up a field by name."""
        for f in self.fields:
            if f.name == name:
                return f
        return None
