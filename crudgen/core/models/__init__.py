"""
Domain models — pydantic types for the generator.

    from crudgen.core.models import PayloadField, ParsedTypePayload, ModuleGenerationRequest
"""

from crudgen.core.models.field import PAGINATION_FIELDS, ParsedTypePayload, PayloadField
from crudgen.core.models.fragment import FragmentKind, GeneratedFragment
from crudgen.core.models.request import (
    CRUD_OPERATIONS,
    ApiType,
    ModuleGenerationRequest,
)
from crudgen.core.models.template import GeneratedFile, WriteAction, WriteResult

__all__ = [
    # field.py
    "PAGINATION_FIELDS",
    "ParsedTypePayload",
    "PayloadField",
    # fragment.py
    "FragmentKind",
    "GeneratedFragment",
    # request.py
    "ApiType",
    "CRUD_OPERATIONS",
    "ModuleGenerationRequest",
    # template.py
    "GeneratedFile",
    "WriteAction",
    "WriteResult",
]
