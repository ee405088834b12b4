"""Utility helpers shared across kubejax."""

from kubejax.utils.command import run_command
from kubejax.utils.file import is_candidate_config_file, read_text_file, write_text_file

__all__ = [
    "run_command",
    "is_candidate_config_file",
    "read_text_file",
    "write_text_file",
]
