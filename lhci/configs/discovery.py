from __future__ import annotations

import logging
import os
import pathlib
import re
import sys
from typing import Mapping, Optional, Sequence, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, pathlib.Path]

RC_FILE_NAMES = (
    ".lighthouserc.json",
    "lighthouserc.json",
)
NO_RC_ENV_VAR = "LHCI_NO_LIGHTHOUSERC"

_OPT_OUT_PATTERN = re.compile(r"no-?lighthouserc", re.IGNORECASE)


def find_rc_file_in_directory(directory: PathLike) -> Optional[pathlib.Path]:
    for name in RC_FILE_NAMES:
        candidate = pathlib.Path(directory) / name
        if candidate.exists():
            return candidate
    return None


def find_rc_file(
    start_dir: Optional[PathLike] = None,
    *,
    recursive: bool = False,
    cwd: Optional[PathLike] = None,
) -> Optional[pathlib.Path]:
    """Look for an rc file in ``start_dir`` and, if ``recursive``, in every parent.

    A relative ``start_dir`` is taken relative to ``cwd``, which falls back to the
    process working directory. The walk stops at the filesystem root, whose
    parent is itself.
    """
    directory = pathlib.Path(os.path.abspath(os.path.join(cwd or os.getcwd(), start_dir or "")))
    if not recursive:
        return find_rc_file_in_directory(directory)

    while True:
        rc_file = find_rc_file_in_directory(directory)
        if rc_file:
            return rc_file
        parent = directory.parent
        if parent == directory:
            logger.debug("No rc file found up to %s", directory)
            return None
        directory = parent


def has_opted_out_of_rc_detection(
    argv: Optional[Sequence[str]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> bool:
    argv = sys.argv if argv is None else argv
    env = os.environ if env is None else env
    if env.get(NO_RC_ENV_VAR):
        return True
    return any(_OPT_OUT_PATTERN.search(arg) for arg in argv)


def resolve_rc_file_path(
    explicit_path: Optional[PathLike] = None,
    *,
    argv: Optional[Sequence[str]] = None,
    env: Optional[Mapping[str, str]] = None,
    cwd: Optional[PathLike] = None,
) -> Optional[PathLike]:
    """Return the rc file to use: the explicit one, or the nearest auto-detected one.

    Returns ``None`` when detection is disabled or nothing is found.
    """
    if explicit_path:
        return explicit_path
    if has_opted_out_of_rc_detection(argv, env):
        logger.debug("rc file detection disabled")
        return None
    rc_file = find_rc_file(cwd, recursive=True)
    if rc_file:
        logger.info("Using rc file %s", rc_file)
    return rc_file
