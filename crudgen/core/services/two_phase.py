"""
Two-phase generator — parse every type file, then render and write.

Phase 1 (collect) parses each operation's ``types/<op>.<module>.ts``.
A missing type file skips that operation; a malformed one aborts the
module before anything is written.

Phase 2 (emit) renders service, controller and validator files for every
operation that has a type file, then one routes file registering them,
and passes each file to the merge engine. Operations are processed in
the request's canonical order so output is identical across runs.
"""

from __future__ import annotations

import logging
from pathlib import Path

from crudgen.core.models.field import ParsedTypePayload
from crudgen.core.models.fragment import FragmentKind, GeneratedFragment
from crudgen.core.models.request import ModuleGenerationRequest
from crudgen.core.models.template import GeneratedFile
from crudgen.core.services.fragments import build_fragments
from crudgen.core.services.generators.controller import controller_path, render_controller
from crudgen.core.services.generators.routes import render_routes, routes_path
from crudgen.core.services.generators.service import render_service, service_path
from crudgen.core.services.generators.types import types_path
from crudgen.core.services.generators.validator import render_validator, validator_path
from crudgen.core.services.merge import wrap_generated, write_generated
from crudgen.core.services.naming import module_naming
from crudgen.core.services.type_parser import ParseError, parse_type_file

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """A module's type file failed to parse; nothing was generated.

    Attributes:
        module_name: Module being generated.
        operation:   Operation whose type file failed.
        cause:       The underlying ParseError.
    """

    def __init__(self, module_name: str, operation: str, cause: ParseError) -> None:
        self.module_name = module_name
        self.operation = operation
        self.cause = cause
        super().__init__(
            f"module '{module_name}', operation '{operation}': {cause}"
        )


# ── Phase 1 ─────────────────────────────────────────────────────


def type_file(request: ModuleGenerationRequest, operation: str) -> Path:
    """Absolute location of an operation's type file."""
    naming = module_naming(request.module_name)
    return request.module_path / types_path(operation, naming)


def collect_payloads(request: ModuleGenerationRequest) -> dict[str, ParsedTypePayload | None]:
    """Parse every operation's type file, in canonical order.

    Returns:
        Operation → parsed payload, or None when its type file is absent.

    Raises:
        FileNotFoundError: The module directory does not exist.
        GenerationError: A type file exists but does not parse.
        OSError: A type file cannot be read.
    """
    if not request.module_path.is_dir():
        raise FileNotFoundError(f"Module path not found: {request.module_path}")

    payloads: dict[str, ParsedTypePayload | None] = {}
    for operation in request.operations:
        path = type_file(request, operation)
        if not path.is_file():
            logger.info("No type file for %s.%s at %s, skipping", request.module_name, operation, path)
            payloads[operation] = None
            continue
        try:
            payloads[operation] = parse_type_file(path)
        except ParseError as e:
            logger.error("Cannot parse %s: %s", path, e.reason)
            raise GenerationError(request.module_name, operation, e) from e

    return payloads


# ── Phase 2 ─────────────────────────────────────────────────────


def render_operation(
    request: ModuleGenerationRequest,
    operation: str,
    payload: ParsedTypePayload,
) -> list[GeneratedFile]:
    """Marker-wrapped service, controller and validator for one operation."""
    naming = module_naming(request.module_name)
    fragments = build_fragments(payload)

    bodies = [
        ("service", service_path(operation, naming),
         render_service(operation, naming, payload, fragments)),
        ("controller", controller_path(operation, naming),
         render_controller(operation, naming, fragments, request.framework)),
        ("validator", validator_path(operation, naming),
         render_validator(operation, naming, fragments)),
    ]

    files = []
    for role, rel_path, body in bodies:
        full = GeneratedFragment(kind=FragmentKind.FULL_FILE_BODY, text=wrap_generated(body))
        files.append(GeneratedFile(
            path=str(request.module_path / rel_path),
            content=full.text,
            operation=operation,
            role=role,
        ))
    return files


def render_module_routes(
    request: ModuleGenerationRequest,
    operations: list[str],
) -> GeneratedFile:
    naming = module_naming(request.module_name)
    body = render_routes(operations, naming, request.framework)
    return GeneratedFile(
        path=str(request.module_path / routes_path(naming)),
        content=wrap_generated(body),
        role="routes",
    )


def emit_files(
    request: ModuleGenerationRequest,
    payloads: dict[str, ParsedTypePayload | None],
) -> list[GeneratedFile]:
    """Render every file of the module, in write order, without writing."""
    planned: list[GeneratedFile] = []
    present = [
        (op, payloads[op]) for op in request.operations
        if payloads.get(op) is not None
    ]
    for operation, payload in present:
        planned.extend(render_operation(request, operation, payload))
    if present:
        planned.append(render_module_routes(request, [op for op, _ in present]))
    return planned


def generate(request: ModuleGenerationRequest) -> list[GeneratedFile]:
    """Run both phases for one module and write the result.

    Returns:
        The files written (or, under dry run, that would be written),
        in canonical order, with their final content.

    Raises:
        GenerationError: Phase 1 failed; nothing was written.
        MergeConflict: Append mode hit a file it cannot splice into.
        OSError: Any read or write failure.
    """
    logger.info(
        "Generating module '%s' (%s) in %s",
        request.module_name, request.api_type.type, request.module_path,
    )
    payloads = collect_payloads(request)
    planned = emit_files(request, payloads)

    written: list[GeneratedFile] = []
    for item in planned:
        result = write_generated(
            Path(item.path),
            item.content,
            append_mode=request.append_mode,
            dry_run=request.dry_run,
        )
        written.append(item.model_copy(update={
            "content": result.content,
            "action": result.action,
        }))

    logger.info("Module '%s': %d file(s) generated", request.module_name, len(written))
    return written
