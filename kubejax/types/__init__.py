"""KubeJax type definitions (enums and keyword sets)."""

from kubejax.types.environments import (
    PRODUCTION_KEYWORDS,
    WORD_SEPARATORS,
    KeywordMatch,
    ProductionReason,
)

__all__ = [
    "KeywordMatch",
    "ProductionReason",
    "PRODUCTION_KEYWORDS",
    "WORD_SEPARATORS",
]
