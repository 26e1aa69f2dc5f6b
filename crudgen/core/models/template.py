"""
Generated file model — one file written (or planned) by a generation run.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class WriteAction(StrEnum):
    """What the writer did with a target file."""

    CREATED = "created"
    REPLACED = "replaced"
    MERGED = "merged"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"


class WriteResult(BaseModel):
    """Outcome of writing one file.

    Attributes:
        path:    Target path.
        action:  What happened on disk (or would, under dry run).
        content: Exact text now on disk.
    """

    path: str
    action: WriteAction
    content: str


class GeneratedFile(BaseModel):
    """A file produced by a generation run.

    Attributes:
        path:      Target path.
        content:   Full file content as written.
        operation: Operation it belongs to (empty for module-wide files).
        role:      service, controller, validator, routes or types.
        action:    How the writer handled it.
    """

    path: str
    content: str
    operation: str = ""
    role: str = ""
    action: WriteAction = WriteAction.CREATED
