"""
Class-name lookups scoped to a single weapon block.
"""

from typing import List, Optional

from bs4 import Tag

from .text_normalizer import Value, prune


def element_children(element: Optional[Tag]) -> List[Tag]:
    """Child elements of a tag, skipping text nodes between them."""
    if element is None:
        return []
    return [child for child in element.children if isinstance(child, Tag)]


def element_child(element: Optional[Tag], index: int) -> Optional[Tag]:
    """The index-th child element, or None when there is no such child."""
    children = element_children(element)
    if 0 <= index < len(children):
        return children[index]
    return None


def text_content(element: Optional[Tag]) -> Optional[str]:
    """Full text of an element, or None for a missing element."""
    if element is None:
        return None
    return element.get_text()


class WeaponLocator:
    """Finds elements by class name inside one weapon block."""

    def __init__(self, weapon: Tag):
        self.weapon = weapon

    def find_all(self, class_key: str) -> List[Tag]:
        return self.weapon.find_all(class_=class_key)

    def find_first(self, class_key: str) -> Optional[Tag]:
        return self.weapon.find(class_=class_key)

    def text_of(self, class_key: str, keep_spaces: bool = False, as_number: bool = True) -> Optional[Value]:
        """Pruned text of the first element with the class."""
        return prune(text_content(self.find_first(class_key)), keep_spaces=keep_spaces, as_number=as_number)

    def text_of_next_sibling(self, class_key: str, keep_spaces: bool = False, as_number: bool = True) -> Optional[Value]:
        """Pruned text of the element right after the first element with the class."""
        element = self.find_first(class_key)
        sibling = element.find_next_sibling() if element is not None else None
        return prune(text_content(sibling), keep_spaces=keep_spaces, as_number=as_number)

    def table_cell(self, class_key: str, row: int, col: int) -> Optional[Tag]:
        """
        Cell at position (row, col) of the first table with the class.

        Rows count every tr in the table, header included, and cells count the
        element children of the row, label cell included. Either index being
        out of range gives None.
        """
        table = self.find_first(class_key)
        if table is None:
            return None
        rows = table.find_all("tr")
        if not 0 <= row < len(rows):
            return None
        return element_child(rows[row], col)
