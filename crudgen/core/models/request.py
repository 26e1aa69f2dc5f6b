"""
Generation request — what to generate, where, and how to write it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from crudgen.core.models.field import IDENTIFIER_RE
from crudgen.core.services.naming import validate_module_name

# Canonical processing order for crud modules
CRUD_OPERATIONS: tuple[str, ...] = ("create", "get", "update", "delete", "list")

Framework = Literal["express", "hono"]


class ApiType(BaseModel):
    """Resource shape of a module.

    ``crud`` modules get the five canonical operations; ``custom``
    modules get the operations named in ``custom_names``, in order.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["crud", "custom"] = "crud"
    custom_names: tuple[str, ...] = ()

    @field_validator("custom_names")
    @classmethod
    def _check_names(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for name in value:
            if not IDENTIFIER_RE.match(name):
                raise ValueError(f"custom operation is not an identifier: {name!r}")
        dupes = sorted({n for n in value if value.count(n) > 1})
        if dupes:
            raise ValueError(f"duplicate custom operations: {', '.join(dupes)}")
        return value

    @model_validator(mode="after")
    def _custom_needs_names(self) -> ApiType:
        if self.type == "custom" and not self.custom_names:
            raise ValueError("custom api type needs at least one custom name")
        return self

    @property
    def operations(self) -> tuple[str, ...]:
        if self.type == "crud":
            return CRUD_OPERATIONS
        return self.custom_names


class ModuleGenerationRequest(BaseModel):
    """One module's generation run.

    Attributes:
        module_name: Module name as typed by the user (validated).
        module_path: Directory holding ``types/`` and receiving output.
        api_type:    Which operations to generate.
        append_mode: Splice into existing marker regions instead of
                     replacing whole files.
        framework:   Target web framework for controllers and routes.
        dry_run:     Compute results without touching the disk.
    """

    model_config = ConfigDict(frozen=True)

    module_name: str
    module_path: Path
    api_type: ApiType = Field(default_factory=ApiType)
    append_mode: bool = False
    framework: Framework = "express"
    dry_run: bool = False

    @field_validator("module_name")
    @classmethod
    def _check_module_name(cls, value: str) -> str:
        return validate_module_name(value)

    @property
    def operations(self) -> tuple[str, ...]:
        return self.api_type.operations
