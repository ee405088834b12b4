"""
Interactive selection prompt.

A plain-terminal menu: the visible items are numbered, typing text narrows
them with the caller's filter predicate, typing a number selects. Only
``input()`` and ``print()`` are used, so it works in any terminal and is easy
to drive from tests.
"""

import logging
import sys
from collections.abc import Callable, Sequence
from typing import TextIO

LOGGER = logging.getLogger("kubejax.picker")

DEFAULT_PAGE_SIZE = 15


def is_int_within_range(value: str, low: int, high: int) -> bool:
    """Check that ``value`` is an integer between ``low`` and ``high`` inclusive."""
    try:
        number = int(value)
    except ValueError:
        return False
    return low <= number <= high


class PromptPicker:
    """
    Numbered, filterable menu driven by ``input()``.

    Implements the Picker protocol.

    Controls:
        <number>  select the numbered item
        <text>    filter the items (replaces the previous filter)
        <enter>   select the only remaining item, or clear the filter
        Ctrl-D    cancel (Ctrl-C cancels too)

    Example:
    -------
        ```python
        picker = PromptPicker()
        choice = picker.pick("Select context", ["dev", "prod"], matches_filter)
        if choice is None:
            print("cancelled")
        ```

    """

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        out: TextIO | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self._input = input_func
        self._out = out or sys.stdout
        self._page_size = page_size

    def _echo(self, message: str = "") -> None:
        print(message, file=self._out)

    def _render(self, label: str, visible: Sequence[str], query: str) -> None:
        header = f"{label} [filter: {query}]" if query else label
        self._echo(header)
        for number, item in enumerate(visible[: self._page_size], start=1):
            self._echo(f"{f'({number})':<5} {item}")
        hidden = len(visible) - self._page_size
        if hidden > 0:
            self._echo(f"      ... {hidden} more, type to filter")

    def pick(self, label: str, items: Sequence[str], predicate: Callable[[str, str], bool]) -> str | None:
        """
        Show the menu until the user selects an item or cancels.

        Returns
        -------
            The selected item, or None on cancel

        """
        if not items:
            return None

        query = ""
        while True:
            visible = [item for item in items if predicate(item, query)] if query else list(items)
            if not visible:
                self._echo(f"No matches for '{query}'")
                query = ""
                continue

            self._render(label, visible, query)

            try:
                response = self._input("Number to select, text to filter, Ctrl-D to cancel: ").strip()
            except (EOFError, KeyboardInterrupt):
                self._echo()
                LOGGER.debug(f"Selection cancelled: {label}")
                return None

            if not response:
                if len(visible) == 1:
                    return visible[0]
                query = ""
            elif is_int_within_range(response, 1, min(len(visible), self._page_size)):
                return visible[int(response) - 1]
            else:
                query = response
