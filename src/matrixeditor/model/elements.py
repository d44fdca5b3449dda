"""
Element Registry
================
The ordered list of named elements that label both axes of a matrix.

An element's identity is its position in the registry, not its name: names
may repeat or be empty. The registry's length is the matrix dimension.

Note:
    Moving an element does not move its matrix values with it. Values stay
    bound to indices, so after a move the row/column at an index belongs to
    whichever element now sits there.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Iterable, Iterator, List

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


@dataclass(frozen=True)
class Element:
    """Very simple record that holds only the name of an element."""
    name: str = ""


class ElementRegistry:
    """Ordered sequence of elements that notifies subscribers on every change."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._elements: List[Element] = [Element(str(name)) for name in names]
        self._listeners: List[Listener] = []

    def __len__(self) -> int:
        return len(self._elements)

    def __getitem__(self, index: int) -> Element:
        return self._elements[index]

    def __iter__(self) -> Iterator[Element]:
        return iter(self._elements)

    def __repr__(self) -> str:
        return f"ElementRegistry({self.names()!r})"

    def name(self, index: int) -> str:
        return self._elements[index].name

    def names(self) -> List[str]:
        return [element.name for element in self._elements]

    # --- NOTIFICATION ---

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    # --- MUTATION ---

    def append(self, name: str) -> Element:
        element = Element(str(name))
        self._elements.append(element)
        self._notify()
        return element

    def insert(self, index: int, name: str) -> Element:
        element = Element(str(name))
        self._elements.insert(index, element)
        self._notify()
        return element

    def remove(self, index: int) -> Element:
        element = self._elements.pop(index)
        self._notify()
        return element

    def rename(self, index: int, name: str) -> Element:
        # Elements are immutable, renaming swaps in a new one at the same index
        element = Element(str(name))
        self._elements[index] = element
        self._notify()
        return element

    def move(self, source: int, destination: int) -> None:
        element = self._elements[source]
        self._elements[destination]  # bounds check before mutating
        del self._elements[source]
        self._elements.insert(destination, element)
        logger.warning(
            f"Moved element '{element.name}' from index {source} to {destination}; "
            f"matrix values stay bound to their old indices."
        )
        self._notify()

    def set_names(self, names: Iterable[str]) -> None:
        self._elements = [Element(str(name)) for name in names]
        self._notify()

    def clear(self) -> None:
        self._elements.clear()
        self._notify()
