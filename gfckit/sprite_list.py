"""Lists of sprites with bulk removal and bulk method calls."""

from __future__ import annotations

from typing import Any, Callable, List, Union


def deleted(item: Any) -> bool:
    """Predicate telling whether an item is marked as deleted."""
    return bool(item.is_deleted())


class SpriteList(list):
    """A list of sprites with helpers for removing and updating them in bulk."""

    def delete_if(self, predicate: Callable[[Any], bool]) -> List[Any]:
        """Remove every item for which the predicate holds; return the removed items."""
        kept: List[Any] = []
        removed: List[Any] = []
        for item in self:
            (removed if predicate(item) else kept).append(item)
        self[:] = kept
        return removed

    def for_each(self, method: Union[str, Callable[..., Any]], *args: Any) -> None:
        """Call a method on every item, in order, passing the extra arguments.

        The method may be given as a function taking the item first
        (such as ``Sprite.update``) or as the name of a method.
        """
        for item in list(self):
            if isinstance(method, str):
                getattr(item, method)(*args)
            else:
                method(item, *args)

    def delete_all(self) -> None:
        """Remove every item."""
        self.clear()