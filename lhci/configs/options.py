from __future__ import annotations

import json
import logging
import os
import pathlib
from dataclasses import dataclass, field
from typing import Any, Mapping, MutableMapping, Optional, Sequence

from .discovery import NO_RC_ENV_VAR, PathLike, resolve_rc_file_path
from .loader import deep_merge, load_and_parse_rc_file

logger = logging.getLogger(__name__)

ENV_PREFIX = "LHCI_"


@dataclass
class ResolvedOptions:
    options: dict[str, Any]
    rc_path: Optional[pathlib.Path] = None
    sources: list[pathlib.Path] = field(default_factory=list)


def _parse_value(val: str) -> Any:
    lowered = val.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered in {"null", "nan", "infinity", "-infinity"}:
        return val
    try:
        return json.loads(val)
    except ValueError:
        return val


def _camel_case(segment: str) -> str:
    head, *rest = [p for p in segment.lower().split("_") if p]
    return head + "".join(p.capitalize() for p in rest)


def load_env_overrides(env: Optional[Mapping[str, str]] = None, prefix: str = ENV_PREFIX) -> dict[str, Any]:
    """Collect options from ``<prefix>`` environment variables.

    ``__`` separates nesting levels and single underscores are camel-cased, so
    ``LHCI_BUILD_CONTEXT__CURRENT_HASH`` sets ``buildContext.currentHash``.
    """
    env = os.environ if env is None else env
    result: dict[str, Any] = {}
    for key, value in env.items():
        if not key.startswith(prefix) or key == NO_RC_ENV_VAR:
            continue
        parts = [p for p in key[len(prefix) :].split("__") if p.strip("_")]
        if not parts:
            continue
        cursor: MutableMapping[str, Any] = result
        for p in parts[:-1]:
            nxt = cursor.get(_camel_case(p))
            if not isinstance(nxt, MutableMapping):
                nxt = cursor[_camel_case(p)] = {}
            cursor = nxt
        cursor[_camel_case(parts[-1])] = _parse_value(value)
    return result


def resolve_options(
    explicit_path: Optional[PathLike] = None,
    *,
    argv: Optional[Sequence[str]] = None,
    env: Optional[Mapping[str, str]] = None,
    cwd: Optional[PathLike] = None,
    env_prefix: str = ENV_PREFIX,
) -> ResolvedOptions:
    """Resolve the rc file, load its extends chain and layer environment overrides on top."""
    env = os.environ if env is None else env
    rc_path = resolve_rc_file_path(explicit_path, argv=argv, env=env, cwd=cwd)
    sources: list[pathlib.Path] = []
    options: dict[str, Any] = {}
    if rc_path:
        options = load_and_parse_rc_file(rc_path, sources=sources)
    else:
        logger.debug("No rc file, using environment overrides only")

    env_options = load_env_overrides(env, env_prefix)
    if env_options:
        logger.debug("Applying environment overrides: %s", sorted(env_options))
        options = deep_merge(options, env_options)
    return ResolvedOptions(
        options=options,
        rc_path=pathlib.Path(rc_path) if rc_path else None,
        sources=sources,
    )
