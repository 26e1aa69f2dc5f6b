"""
Fragment emitter — field list in, code snippets out.

Pure functions: no I/O, deterministic, field order preserved. Input is
assumed validated by the parser; an empty field list yields an empty
pattern or object.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from crudgen.core.models.field import ParsedTypePayload, PayloadField
from crudgen.core.models.fragment import FragmentKind, GeneratedFragment

_PRIMITIVE_SCHEMAS = {
    "string": "z.string()",
    "number": "z.number()",
    "boolean": "z.boolean()",
    "Date": "z.coerce.date()",
}

_ARRAY_SUFFIX_RE = re.compile(r"^(?P<inner>.+)\[\]$")
_ARRAY_GENERIC_RE = re.compile(r"^Array<(?P<inner>.+)>$")
_STRING_LITERAL_RE = re.compile(r"^(['\"])(?P<value>[^'\"]*)\1$")


def destructuring(fields: Sequence[PayloadField]) -> str:
    """``{ a, b, c }`` over all field names, in declaration order."""
    if not fields:
        return "{}"
    return "{ " + ", ".join(f.name for f in fields) + " }"


def field_object(fields: Sequence[PayloadField]) -> str:
    """``{ a: a, b: b }`` object literal, in declaration order."""
    if not fields:
        return "{}"
    return "{ " + ", ".join(f"{f.name}: {f.name}" for f in fields) + " }"


def _literal_union(type_text: str) -> list[str] | None:
    """Values of a ``'a' | 'b'`` union, or None if it is not one."""
    values: list[str] = []
    for member in type_text.split("|"):
        match = _STRING_LITERAL_RE.match(member.strip())
        if match is None:
            return None
        values.append(match.group("value"))
    return values


def _base_schema(type_text: str) -> str:
    type_text = type_text.strip()
    if type_text in _PRIMITIVE_SCHEMAS:
        return _PRIMITIVE_SCHEMAS[type_text]

    if not type_text.startswith("{"):
        array = _ARRAY_SUFFIX_RE.match(type_text) or _ARRAY_GENERIC_RE.match(type_text)
        if array:
            return f"z.array({_base_schema(array.group('inner'))})"

        if "|" in type_text:
            values = _literal_union(type_text)
            if values:
                return "z.enum([" + ", ".join(f"'{v}'" for v in values) + "])"

    return "z.any()"


def field_schema(f: PayloadField) -> str:
    """zod schema expression for one field."""
    schema = _base_schema(f.type_expression)
    lowered = f.name.lower()
    if schema == "z.string()":
        if "email" in lowered:
            schema = "z.string().email()"
        elif "url" in lowered:
            schema = "z.string().url()"
    return f"{schema}.optional()" if f.optional else schema


def validation_stub(fields: Sequence[PayloadField]) -> str:
    """A ``z.object({...})`` schema with one property per field."""
    if not fields:
        return "z.object({})"
    lines = ["z.object({"]
    lines += [f"  {f.name}: {field_schema(f)}," for f in fields]
    lines.append("})")
    return "\n".join(lines)


_EMITTERS = {
    FragmentKind.DESTRUCTURING: destructuring,
    FragmentKind.FIELD_OBJECT: field_object,
    FragmentKind.VALIDATION_STUB: validation_stub,
}


def emit(kind: FragmentKind, fields: Sequence[PayloadField]) -> GeneratedFragment:
    """Produce one field-derived fragment.

    Raises:
        ValueError: For ``full_file_body``, which is assembled from a
            template rather than emitted from fields.
    """
    emitter = _EMITTERS.get(kind)
    if emitter is None:
        raise ValueError(f"{kind} is not emitted from a field list")
    return GeneratedFragment(kind=kind, text=emitter(fields))


def build_fragments(payload: ParsedTypePayload) -> dict[FragmentKind, GeneratedFragment]:
    """All field-derived fragments for one payload, keyed by kind."""
    return {kind: emit(kind, payload.fields) for kind in _EMITTERS}
