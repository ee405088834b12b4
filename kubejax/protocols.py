"""
Protocol definitions for KubeJax.

These protocols define the contracts of the collaborators the orchestrator
drives but does not implement itself: the interactive picker and the live
namespace listing. Protocols let the container swap in fakes for tests.

All protocols follow PEP 544 (Structural Subtyping / Protocol).
"""

from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class Picker(Protocol):
    """
    Protocol for interactive selection from a list of labels.

    Implementations:
    - kubejax/picker.py - PromptPicker, numbered menu with type-to-filter
    """

    def pick(self, label: str, items: Sequence[str], predicate: Callable[[str, str], bool]) -> str | None:
        """
        Let the user choose one item.

        Args:
        ----
            label: Prompt shown above the items
            items: Labels to choose from, in display order
            predicate: ``predicate(item, query)`` decides whether an item survives a filter query

        Returns:
        -------
            The chosen item, or None if the user cancelled

        """
        ...


@runtime_checkable
class NamespaceLister(Protocol):
    """
    Protocol for listing the namespaces of the active cluster.

    Implementations:
    - kubejax/namespaces.py - KubectlNamespaceLister, shells out to kubectl
    """

    def list_namespaces(self) -> list[str]:
        """
        List namespaces, sorted ascending.

        Raises
        ------
            KubeJaxExternalToolError: If the listing command is missing or fails

        """
        ...
