"""
Generate use case — run the two-phase generator over one or more modules.

Modules are independent: one module's failure is recorded and the rest
still run. Results come back in request order whatever the job count.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from crudgen.core.config.loader import GeneratorConfig, build_request
from crudgen.core.models.request import ModuleGenerationRequest
from crudgen.core.models.template import GeneratedFile, WriteAction
from crudgen.core.services.merge import MergeConflict
from crudgen.core.services.two_phase import GenerationError, generate

logger = logging.getLogger(__name__)


@dataclass
class ModuleOutcome:
    """What happened to one module."""

    module_name: str
    module_path: Path
    files: list[GeneratedFile] = field(default_factory=list)
    error: str | None = None
    error_type: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        result: dict = {
            "module": self.module_name,
            "path": str(self.module_path),
            "ok": self.ok,
            "files": [
                {
                    "path": f.path,
                    "operation": f.operation,
                    "role": f.role,
                    "action": str(f.action),
                }
                for f in self.files
            ],
        }
        if self.error:
            result["error"] = self.error
            result["error_type"] = self.error_type
        return result


@dataclass
class GenerateResult:
    """Outcome of a generation batch."""

    modules: list[ModuleOutcome] = field(default_factory=list)
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return all(m.ok for m in self.modules)

    @property
    def failed(self) -> list[ModuleOutcome]:
        return [m for m in self.modules if not m.ok]

    def count(self, action: WriteAction) -> int:
        return sum(1 for m in self.modules for f in m.files if f.action == action)

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "dry_run": self.dry_run,
            "modules": [m.to_dict() for m in self.modules],
            "summary": {
                "modules": len(self.modules),
                "failed": len(self.failed),
                **{str(a): self.count(a) for a in WriteAction if a != WriteAction.SKIPPED},
            },
        }


def generate_module(request: ModuleGenerationRequest) -> ModuleOutcome:
    """Generate one module, turning its failure into an outcome."""
    outcome = ModuleOutcome(module_name=request.module_name, module_path=request.module_path)
    try:
        outcome.files = generate(request)
    except (GenerationError, MergeConflict, OSError) as e:
        logger.warning("Module '%s' failed: %s", request.module_name, e)
        outcome.error = str(e)
        outcome.error_type = type(e).__name__
    return outcome


def run_generate(
    requests: list[ModuleGenerationRequest],
    jobs: int = 1,
) -> GenerateResult:
    """Generate every requested module.

    Args:
        requests: Modules to generate.
        jobs: Worker threads; modules never share files, so they may
            run in parallel. Each module itself is sequential.

    Returns:
        GenerateResult with one outcome per request, in request order.
    """
    result = GenerateResult(dry_run=any(r.dry_run for r in requests))
    if not requests:
        return result

    if jobs <= 1 or len(requests) == 1:
        result.modules = [generate_module(r) for r in requests]
        return result

    outcomes: dict[int, ModuleOutcome] = {}
    with ThreadPoolExecutor(max_workers=min(jobs, len(requests))) as pool:
        futures = {pool.submit(generate_module, r): i for i, r in enumerate(requests)}
        for future in as_completed(futures):
            outcomes[futures[future]] = future.result()

    result.modules = [outcomes[i] for i in range(len(requests))]
    return result


def requests_from_config(
    config: GeneratorConfig,
    root: Path,
    names: list[str] | None = None,
    **overrides: object,
) -> list[ModuleGenerationRequest]:
    """Build requests for configured modules.

    Args:
        config: Loaded crudgen.yml.
        root: Directory relative module paths are anchored at.
        names: Subset of module names; all modules when None.
        **overrides: Passed to ``build_request``.

    Raises:
        KeyError: A requested name is not configured.
    """
    if names is None:
        entries = list(config.modules)
    else:
        entries = []
        for name in names:
            entry = config.get_module(name)
            if entry is None:
                raise KeyError(name)
            entries.append(entry)
    return [build_request(config, e, root, **overrides) for e in entries]
