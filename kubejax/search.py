"""Case-insensitive search over context and namespace names."""

from collections.abc import Iterable, Sequence

from kubejax.config.schemas import ConfigEntry


def search(haystack: Iterable[str], term: str) -> list[str]:
    """
    Find every name containing ``term``, ignoring case.

    Matches are sorted ascending by plain string order. An empty result is a
    valid outcome; callers decide what zero, one, or many matches mean.

    Example:
    -------
        >>> search(["Alpha", "beta", "ALPHA-2"], "alpha")
        ['ALPHA-2', 'Alpha']

    """
    needle = term.lower()
    return sorted(name for name in haystack if needle in name.lower())


def search_contexts(entries: Sequence[ConfigEntry], term: str) -> list[str]:
    """Search the context names of every loaded kubeconfig file."""
    return search((name for entry in entries for name in entry.context_names), term)


def matches_filter(item: str, query: str) -> bool:
    """
    Filter predicate used by the interactive picker.

    Both sides are lower-cased and stripped of spaces, so ``"East (prod"``
    matches the label ``"us-east (prod.yaml)"``.
    """
    target = item.lower().replace(" ", "")
    needle = query.lower().replace(" ", "")
    return needle in target
