"""
Scaffold use case — write the type stubs a module is generated from.

Type files are hand-authored after scaffolding, so existing ones are
left alone unless ``force`` is set.
"""

from __future__ import annotations

import logging

from crudgen.core.models.request import ModuleGenerationRequest
from crudgen.core.models.template import GeneratedFile, WriteAction
from crudgen.core.services.generators.types import render_types, types_path
from crudgen.core.services.merge import atomic_write
from crudgen.core.services.naming import module_naming

logger = logging.getLogger(__name__)


def scaffold_types(request: ModuleGenerationRequest, force: bool = False) -> list[GeneratedFile]:
    """Write ``types/<op>.<module>.ts`` for every operation of the request.

    Args:
        request: Module to scaffold; ``dry_run`` is honoured.
        force: Overwrite type files that already exist.

    Returns:
        One GeneratedFile per operation, in canonical order.

    Raises:
        OSError: Write failure.
    """
    naming = module_naming(request.module_name)
    files: list[GeneratedFile] = []

    for operation in request.operations:
        path = request.module_path / types_path(operation, naming)
        content = render_types(operation, naming)

        if path.exists() and not force:
            logger.info("Keeping existing type file %s", path)
            action = WriteAction.SKIPPED
            content = path.read_text(encoding="utf-8")
        else:
            action = WriteAction.REPLACED if path.exists() else WriteAction.CREATED
            if request.dry_run:
                logger.info("[dry-run] %s %s", action, path)
            else:
                atomic_write(path, content)
                logger.info("%s %s", action.capitalize(), path)

        files.append(GeneratedFile(
            path=str(path),
            content=content,
            operation=operation,
            role="types",
            action=action,
        ))

    return files
