"""Locating, loading and merging lighthouserc configuration."""
from .discovery import RC_FILE_NAMES, find_rc_file, find_rc_file_in_directory, has_opted_out_of_rc_detection, resolve_rc_file_path
from .loader import RcFileError, convert_rc_file_to_options, deep_merge, load_and_parse_rc_file, load_rc_file, replace_dots_in_keys
from .options import ResolvedOptions, load_env_overrides, resolve_options
__all__ = [
    "RC_FILE_NAMES",
    "RcFileError",
    "ResolvedOptions",
    "convert_rc_file_to_options",
    "deep_merge",
    "find_rc_file",
    "find_rc_file_in_directory",
    "has_opted_out_of_rc_detection",
    "load_and_parse_rc_file",
    "load_env_overrides",
    "load_rc_file",
    "replace_dots_in_keys",
    "resolve_options",
    "resolve_rc_file_path",
]
