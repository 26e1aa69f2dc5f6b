"""
Fragment model — one generated snippet and what it is for.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class FragmentKind(StrEnum):
    """Kinds of code fragments the emitter produces."""

    DESTRUCTURING = "destructuring"
    FIELD_OBJECT = "field_object"
    VALIDATION_STUB = "validation_stub"
    FULL_FILE_BODY = "full_file_body"


class GeneratedFragment(BaseModel):
    """An immutable ``(kind, text)`` pair."""

    model_config = ConfigDict(frozen=True)

    kind: FragmentKind
    text: str
