"""
Production environment classification.

Decides, from keywords alone, whether a context name or kubeconfig file name
refers to a production environment. The result only ever drives warnings; it
never blocks a switch.
"""

import logging
from pathlib import Path

from kubejax.types import PRODUCTION_KEYWORDS, WORD_SEPARATORS, KeywordMatch, ProductionReason

LOGGER = logging.getLogger("kubejax.production")


def is_exact_word_match(text: str, keyword: str) -> bool:
    """
    Check whether ``keyword`` occurs in ``text`` as a whole word.

    A word is bounded on each side by a separator (``-``, ``_``, ``.``, space)
    or by the edge of the text. Every occurrence is checked, so a partial hit
    early in the text does not hide a whole-word hit later on.

    Example:
    -------
        >>> is_exact_word_match("my-prod-cluster", "prod")
        True
        >>> is_exact_word_match("production", "prod")
        False
        >>> is_exact_word_match("products-prod", "prod")
        True

    """
    if not keyword:
        return False

    index = text.find(keyword)
    while index != -1:
        end = index + len(keyword)

        valid_start = index == 0 or text[index - 1] in WORD_SEPARATORS
        valid_end = end >= len(text) or text[end] in WORD_SEPARATORS

        if valid_start and valid_end:
            return True

        index = text.find(keyword, end)

    return False


def is_production_environment(text: str) -> bool:
    """
    Classify a name as production using the static keyword sets.

    Exact keywords are tried first as whole words, then substring keywords
    anywhere in the lower-cased text.

    Example:
    -------
        >>> is_production_environment("staging-prd")
        True
        >>> is_production_environment("nonproduction")
        True
        >>> is_production_environment("dev")
        False

    """
    lowered = text.lower()

    for keyword in PRODUCTION_KEYWORDS[KeywordMatch.EXACT]:
        if is_exact_word_match(lowered, keyword):
            return True

    for keyword in PRODUCTION_KEYWORDS[KeywordMatch.CONTAINS]:
        if keyword in lowered:
            return True

    return False


def is_production_config_file(config_file: Path | str) -> bool:
    """Classify a kubeconfig file by its base name only."""
    return is_production_environment(Path(config_file).name)


def production_reasons(context_name: str, config_file: Path | str | None) -> list[ProductionReason]:
    """
    List which parts of a context/file pair look like production.

    Returns
    -------
        Empty list when neither the context name nor the file name matches

    """
    reasons = []
    if context_name and is_production_environment(context_name):
        reasons.append(ProductionReason.CONTEXT_NAME)
    if config_file and is_production_config_file(config_file):
        reasons.append(ProductionReason.CONFIG_FILE)

    if reasons:
        LOGGER.debug(f"Context '{context_name}' classified as production: {[r.value for r in reasons]}")
    return reasons


def is_production_combined(context_name: str, config_file: Path | str | None) -> bool:
    """Return True if either the context name or the config file name is production."""
    return bool(production_reasons(context_name, config_file))
