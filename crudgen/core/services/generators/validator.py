"""
Validator generator — zod schema built from the payload fields.
"""

from __future__ import annotations

from pathlib import Path

from crudgen.core.models.fragment import FragmentKind, GeneratedFragment
from crudgen.core.services.generators import operation_file
from crudgen.core.services.naming import ModuleNaming

VALIDATORS_DIR = "validators"

_VALIDATOR = """\
import {{ z }} from 'zod';
import type {{ typePayload }} from '../types/{operation}.{file}';

export const payloadSchema = {schema};

export const validatePayload = (payload: unknown) =>
  payloadSchema.safeParse(payload) as z.SafeParseReturnType<unknown, typePayload>;
"""


def validator_path(operation: str, naming: ModuleNaming) -> Path:
    return operation_file(VALIDATORS_DIR, operation, naming)


def render_validator(
    operation: str,
    naming: ModuleNaming,
    fragments: dict[FragmentKind, GeneratedFragment],
) -> str:
    return _VALIDATOR.format(
        operation=operation,
        file=naming.file,
        schema=fragments[FragmentKind.VALIDATION_STUB].text,
    )
