"""Small I/O helpers shared by the routing and spec readers.

Functions
~~~~~~~~~
expand(path_tmpl, **kw)
    Simple str.format path expansion.

abs_path(path, label)
    Expand ``~`` and return an absolute, normalised :class:`~pathlib.Path`.

read_json(path, label, stage, decode=None)
    Read a JSON file and optionally decode it into a typed shape.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar, Union

from .errors import FileReadError, JSONParseError, PathExpansionError

T = TypeVar("T")


def expand(path_tmpl: str, **kw: Any) -> str:
    """Expand a string template representing a path."""
    return path_tmpl.format(**kw)


def abs_path(path: Union[str, Path], label: str, *, stage: str = "routing") -> Path:
    """Return ``path`` with ``~`` expanded, made absolute.

    ``..`` segments are collapsed but symlinks are left alone.

    Raises
    ------
    PathExpansionError
        If ``path`` is empty or the home directory cannot be determined.
    """
    if not str(path):
        raise PathExpansionError(f"Failed to get absolute path for {label}: no path provided", stage=stage)
    try:
        expanded = Path(path).expanduser()
    except RuntimeError as exc:
        raise PathExpansionError(f"Failed to get absolute path for {label}: {exc}", stage=stage) from exc
    return Path(os.path.abspath(expanded))


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def read_json(
    path: Path,
    label: str,
    *,
    stage: str,
    decode: Optional[Callable[[Any], T]] = None,
    encoding: str = "utf-8",
) -> Union[T, Any]:
    """Load the JSON document at ``path``.

    Parameters
    ----------
    path
        File to read. It is opened once and closed before returning.
    label
        Human readable name used in error messages (``"routing file"``).
    stage
        Stage recorded on raised errors.
    decode
        Optional callable turning the parsed JSON value into a typed shape.
        A ``ValueError`` or ``TypeError`` raised by it is reported as a parse
        failure.
    encoding
        Text encoding of the file.

    Raises
    ------
    FileReadError
        The file is missing, a directory, or cannot be read.
    JSONParseError
        The content is not valid text in ``encoding``, not strict JSON, or
        ``decode`` rejects it.
    """
    try:
        with open(path, "rb") as f:
            content = f.read()
    except OSError as exc:
        raise FileReadError(f"Failed to read {label}: {exc}", stage=stage) from exc

    # UnicodeDecodeError and JSONDecodeError are both ValueErrors; deeply
    # nested input overflows the recursive decoder.
    try:
        data = json.loads(content.decode(encoding), parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise JSONParseError(f"Failed to parse {label}: {exc}", stage=stage) from exc

    if decode is None:
        return data
    try:
        return decode(data)
    except (ValueError, TypeError, RecursionError) as exc:
        raise JSONParseError(f"Failed to parse {label}: {exc}", stage=stage) from exc


__all__ = ["expand", "abs_path", "read_json"]
