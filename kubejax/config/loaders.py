"""
Kubeconfig loading functions.

This module provides functions to discover and read kubeconfig files:
- A single kubeconfig file (typed read model)
- Every kubeconfig in the config directory (~/.kube/configs by default)
- The active context summary used by ``--current``

Loading is read-only. Writes go through ``kubejax.config.document``.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

import yaml
from pydantic import ValidationError

from kubejax.config.schemas import ConfigEntry, CurrentContextInfo, KubeConfig
from kubejax.exceptions import KubeJaxError, KubeJaxIOError, KubeJaxNotFoundError, KubeJaxParseError
from kubejax.utils.file import is_candidate_config_file, read_text_file

LOGGER = logging.getLogger("kubejax.config.loaders")


def load_kube_config(path: Path) -> KubeConfig:
    """
    Load a kubeconfig file into the typed read model.

    Args:
    ----
        path: Kubeconfig file to read

    Returns:
    -------
        Validated KubeConfig

    Raises:
    ------
        KubeJaxNotFoundError: If the file does not exist
        KubeJaxIOError: If the file cannot be read
        KubeJaxParseError: If the file is not YAML or not a kubeconfig

    """
    content = read_text_file(path)

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise KubeJaxParseError(f"Failed to parse {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise KubeJaxParseError(f"Invalid kubeconfig {path}: top level must be a mapping")

    try:
        return KubeConfig.model_validate(data)
    except ValidationError as e:
        raise KubeJaxParseError(f"Invalid kubeconfig {path}: {e}") from e


def load_all_kube_configs(config_dir: Path) -> list[ConfigEntry]:
    """
    Load every kubeconfig file directly inside ``config_dir``.

    Subdirectories, hidden files and ``.log``/``.txt``/``.md`` files are
    skipped. A file that cannot be read or parsed is logged as a warning and
    skipped; the remaining files still load. Files declaring no contexts are
    left out without a warning.

    Args:
    ----
        config_dir: Directory holding kubeconfig files (not searched recursively)

    Returns:
    -------
        One ConfigEntry per file with at least one context, in file name order

    Raises:
    ------
        KubeJaxNotFoundError: If ``config_dir`` does not exist
        KubeJaxIOError: If ``config_dir`` cannot be listed

    """
    if not config_dir.exists():
        raise KubeJaxNotFoundError(f"config directory does not exist: {config_dir}")

    try:
        candidates = sorted(config_dir.iterdir())
    except OSError as e:
        raise KubeJaxIOError(f"could not list {config_dir}: {e}") from e

    entries = []
    for file_path in candidates:
        if file_path.is_dir() or not is_candidate_config_file(file_path):
            continue

        try:
            kubeconfig = load_kube_config(file_path)
        except KubeJaxError as e:
            LOGGER.warning(f"Could not load {file_path.name}: {e}")
            continue

        if kubeconfig.context_names:
            entries.append(ConfigEntry(file_path=file_path, context_names=tuple(kubeconfig.context_names)))
        else:
            LOGGER.debug(f"Skipping {file_path.name}: no contexts declared")

    LOGGER.debug(f"Loaded {len(entries)} kubeconfig file(s) from {config_dir}")
    return entries


def find_context_file(entries: Sequence[ConfigEntry], context_name: str) -> Path | None:
    """
    Find the file that declares ``context_name``.

    When several files declare the same name the first one (in file name order)
    wins.
    """
    for entry in entries:
        if context_name in entry.context_names:
            return entry.file_path
    return None


def get_current_context(kubeconfig_path: Path) -> str:
    """
    Get the ``current-context`` of the active kubeconfig.

    Returns an empty string if the file is missing or unreadable; callers use
    this only to mark the current context in listings.
    """
    try:
        return load_kube_config(kubeconfig_path).current_context
    except KubeJaxError as e:
        LOGGER.debug(f"No current context from {kubeconfig_path}: {e}")
        return ""


def get_current_context_info(kubeconfig_path: Path) -> CurrentContextInfo | None:
    """
    Summarize the active context of ``kubeconfig_path``.

    Returns
    -------
        CurrentContextInfo, or None if the file cannot be loaded or has no
        current context

    """
    try:
        kubeconfig = load_kube_config(kubeconfig_path)
    except KubeJaxError as e:
        LOGGER.debug(f"Cannot summarize {kubeconfig_path}: {e}")
        return None

    if not kubeconfig.current_context:
        return None

    info = CurrentContextInfo(context=kubeconfig.current_context, config_path=kubeconfig_path)
    context = kubeconfig.get_context(kubeconfig.current_context)
    if context is not None:
        info.cluster = context.context.cluster or ""
        info.namespace = context.context.effective_namespace
    return info
