"""
Naming conventions — one module name, every casing the templates need.

    module_naming("blog-post")
    → directory "blog-post", file "blogPost", class "BlogPost", constant "BLOG_POST"
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_MODULE_NAME_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_CAMEL_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")


def validate_module_name(name: str) -> str:
    """Check a module name and return it trimmed.

    Raises:
        ValueError: If the name is empty, has characters other than
            letters, digits, ``-`` and ``_``, or starts with a digit or dash.
    """
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValueError("Module name cannot be empty")
    if not _MODULE_NAME_RE.match(cleaned):
        raise ValueError(
            "Module name can only contain letters, numbers, hyphens, and underscores"
        )
    if not re.match(r"^[A-Za-z_]", cleaned):
        raise ValueError("Module name must start with a letter or underscore")
    return cleaned


def _words(name: str) -> list[str]:
    spaced = _CAMEL_BOUNDARY_RE.sub(r"\1 \2", name.strip())
    return [w.lower() for w in re.split(r"[-_\s]+", spaced) if w]


def to_camel_case(name: str) -> str:
    words = _words(name)
    if not words:
        return ""
    return words[0] + "".join(w.capitalize() for w in words[1:])


def to_pascal_case(name: str) -> str:
    return "".join(w.capitalize() for w in _words(name))


def to_kebab_case(name: str) -> str:
    return "-".join(_words(name))


def to_snake_case(name: str) -> str:
    return "_".join(_words(name))


def to_constant_case(name: str) -> str:
    return to_snake_case(name).upper()


@dataclass(frozen=True)
class ModuleNaming:
    """Every name derived from one module name."""

    original: str
    directory: str  # kebab-case
    file: str       # camelCase
    cls: str        # PascalCase
    variable: str   # camelCase
    constant: str   # CONSTANT_CASE
    url: str        # kebab-case


def module_naming(name: str) -> ModuleNaming:
    """Derive all naming variants for a module name."""
    cleaned = name.strip()
    return ModuleNaming(
        original=cleaned,
        directory=to_kebab_case(cleaned),
        file=to_camel_case(cleaned),
        cls=to_pascal_case(cleaned),
        variable=to_camel_case(cleaned),
        constant=to_constant_case(cleaned),
        url=to_kebab_case(cleaned),
    )
