"""Production keyword definitions."""

from enum import Enum


class KeywordMatch(Enum):
    """
    How a production keyword is matched against a context or file name.

    EXACT keywords must appear as a whole word, delimited by a separator or the
    edge of the text. CONTAINS keywords match anywhere as a substring.
    """

    EXACT = "exact"
    CONTAINS = "contains"


# Characters that delimit words in context and file names
WORD_SEPARATORS = frozenset("-_. ")

PRODUCTION_KEYWORDS: dict[KeywordMatch, tuple[str, ...]] = {
    KeywordMatch.EXACT: ("prod",),
    KeywordMatch.CONTAINS: ("prd", "production"),
}


class ProductionReason(Enum):
    """Which part of a context/file pair looks like a production environment."""

    CONTEXT_NAME = "context"
    CONFIG_FILE = "file"
