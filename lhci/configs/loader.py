from __future__ import annotations

import json
import logging
import pathlib
from typing import Any, Mapping, Union

import jsonschema

logger = logging.getLogger(__name__)

PathLike = Union[str, pathlib.Path]

SCHEMA_DIR = pathlib.Path(__file__).resolve().parent / "schemas"
RC_SECTIONS = ("assert", "collect", "upload", "server")
MAX_EXTENDS_DEPTH = 32


class RcFileError(ValueError):
    """Raised when an rc file has the wrong shape or a broken extends chain."""


def _replace_dots(key: Any) -> Any:
    if isinstance(key, str) and "." in key:
        return key.replace(".", ":")
    return key


def replace_dots_in_keys(obj: Any) -> Any:
    """Return a copy of ``obj`` with every ``.`` in mapping keys replaced by ``:``.

    The command-line parser treats dotted names as object subpaths, which is
    only wanted for arguments, never for rc file keys such as assertion audit
    ids. Mappings nested inside lists are rewritten as well.
    """
    if isinstance(obj, Mapping):
        # a renamed key wins over a key already spelled with ``:``
        result: dict[Any, Any] = {}
        renamed = set()
        for k, v in obj.items():
            new_key = _replace_dots(k)
            if new_key != k:
                renamed.add(new_key)
            elif k in renamed:
                continue
            result[new_key] = replace_dots_in_keys(v)
        return result
    if isinstance(obj, list):
        return [replace_dots_in_keys(v) for v in obj]
    return obj


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` on top of ``base``.

    Nested mappings merge key by key; every other value, lists included,
    replaces the base value wholesale.
    """
    result: dict[str, Any] = dict(base)
    for k, v in override.items():
        if k in result and isinstance(result[k], Mapping) and isinstance(v, Mapping):
            result[k] = deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _rc_schema() -> Mapping[str, Any]:
    with (SCHEMA_DIR / "rc_file.json").open("r", encoding="utf-8") as f:
        return json.load(f)


def load_rc_file(path_to_rc_file: PathLike) -> dict[str, Any]:
    path = pathlib.Path(path_to_rc_file)
    with path.open("r", encoding="utf-8") as f:
        rc = json.load(f)
    try:
        jsonschema.validate(rc, _rc_schema())
    except jsonschema.ValidationError as exc:
        location = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise RcFileError(f"Invalid rc file {path} at {location}: {exc.message}") from exc
    return replace_dots_in_keys(rc)


def _load_and_parse(path: pathlib.Path, chain: tuple[pathlib.Path, ...], sources: list[pathlib.Path] | None) -> dict[str, Any]:
    real = path.resolve()
    if real in chain:
        raise RcFileError(f"Circular extends detected: {path}")
    if len(chain) >= MAX_EXTENDS_DEPTH:
        raise RcFileError(f"Extends chain deeper than {MAX_EXTENDS_DEPTH} files at {path}")
    logger.debug("Loading rc file %s", path)
    return _convert(load_rc_file(path), path, chain + (real,), sources)


def _convert(
    rc_file: Mapping[str, Any],
    path: pathlib.Path,
    chain: tuple[pathlib.Path, ...],
    sources: list[pathlib.Path] | None,
) -> dict[str, Any]:
    ci = rc_file.get("ci") or {}
    merged: dict[str, Any] = {}
    for section in RC_SECTIONS:
        merged.update(ci.get(section) or {})

    extends = ci.get("extends")
    if extends:
        base_path = path.parent / extends
        logger.debug("%s extends %s", path, base_path)
        merged = deep_merge(_load_and_parse(base_path, chain, sources), merged)

    if sources is not None:
        sources.append(path)
    return merged


def convert_rc_file_to_options(rc_file: Mapping[str, Any], path_to_rc_file: PathLike) -> dict[str, Any]:
    """Flatten the ``ci`` sections of a loaded rc file into one options mapping.

    ``ci.extends`` is resolved against the directory of ``path_to_rc_file`` and
    the options of this file are merged on top of the extended ones.
    """
    path = pathlib.Path(path_to_rc_file)
    return _convert(rc_file, path, (path.resolve(),), None)


def load_and_parse_rc_file(path_to_rc_file: PathLike, sources: list[pathlib.Path] | None = None) -> dict[str, Any]:
    """Load an rc file with its extends chain and return the options mapping.

    If ``sources`` is given, every file read is appended to it, base first.
    """
    return _load_and_parse(pathlib.Path(path_to_rc_file), (), sources)
