"""
Merge engine — write generated files without destroying hand edits.

Every generated file carries one marker pair:

    // ---- crudgen:begin generated ----
    ...generator-owned code...
    // ---- crudgen:end generated ----

In append mode only the text between the markers is replaced; anything
before the begin marker or after the end marker is kept byte-for-byte.
Markers are matched as exact lines, never inferred from content.

Writes are atomic: the full new content is built in memory, written to
a temp file in the target directory, then renamed over the target.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from crudgen.core.models.template import WriteAction, WriteResult

logger = logging.getLogger(__name__)

MARKER_BEGIN = "// ---- crudgen:begin generated ----"
MARKER_END = "// ---- crudgen:end generated ----"


class MergeConflict(Exception):
    """Raised when append mode cannot splice into an existing file.

    That is a file without exactly one marker pair, or one that is not
    valid UTF-8. The target file is never modified when this is raised.
    """

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{path}: {reason}")


def wrap_generated(body: str) -> str:
    """Enclose a generated body in the marker pair."""
    inner = body.strip("\n")
    return f"{MARKER_BEGIN}\n{inner}\n{MARKER_END}\n"


def _region_bounds(text: str) -> tuple[int, int] | str:
    """Character span of the text between the markers.

    Returns:
        (start, end) offsets of the enclosed text, or a string
        describing why no single well-formed pair exists.
    """
    begins: list[int] = []  # offset just after the begin line
    ends: list[int] = []    # offset where the end line starts
    offset = 0
    for line in text.splitlines(keepends=True):
        bare = line.rstrip("\r\n")
        if bare == MARKER_BEGIN:
            begins.append(offset + len(line))
        elif bare == MARKER_END:
            ends.append(offset)
        offset += len(line)

    if not begins and not ends:
        return "no generated-code markers found"
    if len(begins) != 1 or len(ends) != 1:
        return (
            f"expected exactly one marker pair, found {len(begins)} begin "
            f"and {len(ends)} end marker(s)"
        )
    if ends[0] < begins[0]:
        return "end marker appears before begin marker"
    return begins[0], ends[0]


def splice(existing: str, generated: str, path: Path | str = "<memory>") -> str:
    """Replace the marker region of ``existing`` with the one in ``generated``.

    Raises:
        MergeConflict: ``existing`` has no single well-formed marker pair.
        ValueError: ``generated`` has no single well-formed marker pair.
    """
    new_bounds = _region_bounds(generated)
    if isinstance(new_bounds, str):
        raise ValueError(f"generated content for {path} is not marker-wrapped: {new_bounds}")

    old_bounds = _region_bounds(existing)
    if isinstance(old_bounds, str):
        raise MergeConflict(path, old_bounds)

    region = generated[new_bounds[0]:new_bounds[1]]
    if "\r\n" in existing[:old_bounds[0]]:
        region = region.replace("\r\n", "\n").replace("\n", "\r\n")
    return existing[:old_bounds[0]] + region + existing[old_bounds[1]:]


def _read_exact(path: Path) -> str:
    # No newline translation: kept text must survive byte-for-byte
    try:
        return path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise MergeConflict(path, f"existing file is not valid UTF-8 (byte {e.start})") from e


def compose(path: Path, new_content: str, append_mode: bool) -> tuple[str, WriteAction]:
    """Decide the final content of ``path`` without writing anything.

    Replace mode never decodes the existing file; append mode needs it
    as UTF-8 text and reports anything else as a MergeConflict.
    """
    if not path.exists():
        return new_content, WriteAction.CREATED

    if not append_mode:
        if path.read_bytes() == new_content.encode("utf-8"):
            return new_content, WriteAction.UNCHANGED
        return new_content, WriteAction.REPLACED

    existing = _read_exact(path)
    merged = splice(existing, new_content, path)
    if merged == existing:
        return merged, WriteAction.UNCHANGED
    return merged, WriteAction.MERGED


def _default_mode() -> int:
    """Permissions a plain ``open()`` would give a new file."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


# Read once: os.umask is process-wide and not safe to toggle from worker threads
_NEW_FILE_MODE = _default_mode()


def atomic_write(path: Path, content: str) -> None:
    """Replace ``path`` with ``content`` in one rename.

    The target keeps its permission bits; a new file gets the umask default.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else _NEW_FILE_MODE
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        os.chmod(tmp, mode)
        tmp.replace(path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise


def write_generated(
    path: Path,
    new_content: str,
    append_mode: bool,
    dry_run: bool = False,
) -> WriteResult:
    """Write one generated file, merging into its marker region in append mode.

    Args:
        path: Target file.
        new_content: Full marker-wrapped content.
        append_mode: Splice into an existing file instead of replacing it.
        dry_run: Compute the result but leave the disk alone.

    Returns:
        WriteResult with the action taken and the resulting content.

    Raises:
        MergeConflict: Append mode on a file without a usable marker pair.
        OSError: Read or write failure.
    """
    try:
        content, action = compose(path, new_content, append_mode)
    except MergeConflict as e:
        logger.error("Refusing to merge %s: %s", path, e.reason)
        raise

    if dry_run:
        logger.info("[dry-run] %s %s", action, path)
    elif action != WriteAction.UNCHANGED:
        atomic_write(path, content)
        logger.info("%s %s", action.capitalize(), path)
    else:
        logger.debug("Unchanged %s", path)

    return WriteResult(path=str(path), action=action, content=content)
