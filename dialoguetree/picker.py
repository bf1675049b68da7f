"""A searchable picker choosing one object out of a named collection."""

from __future__ import annotations

from typing import Any, Callable, Iterable

EMPTY_OPTIONS_TEXT = "No valid items"


class ObjectPicker:
    """Lists objects by name, filters them by search text and picks one."""

    def __init__(
        self,
        collection: Iterable[Any],
        name_getter: Callable[[Any], str] | None = None,
        on_select: Callable[[Any], Any] | None = None,
    ) -> None:
        items = list(collection)
        if not items:
            raise ValueError("picker needs at least one object")
        getter = name_getter if name_getter is not None else (lambda obj: obj.name)
        self.collection: dict[str, Any] = {getter(obj): obj for obj in items}
        self.filtered_names: list[str] = sorted(self.collection, key=str.casefold)
        self.on_select = on_select
        self.search_text = ""
        self.is_open = True

    @property
    def entries(self) -> list[str]:
        """The lines the picker shows: the matching names or a placeholder."""
        return list(self.filtered_names) if self.filtered_names else [EMPTY_OPTIONS_TEXT]

    def filter(self, search_text: str) -> list[str]:
        """Keep names containing the search text, ignoring case and spaces."""
        self.search_text = search_text
        if not search_text.strip():
            self.filtered_names = list(self.collection)
        else:
            needle = search_text.replace(" ", "").casefold()
            self.filtered_names = [
                name
                for name in self.collection
                if needle in name.replace(" ", "").casefold()
            ]
        return list(self.filtered_names)

    def select(self, name: str) -> Any:
        """Report the object called ``name`` and close the picker."""
        if name not in self.collection:
            raise KeyError(name)
        chosen = self.collection[name]
        if self.on_select is not None:
            self.on_select(chosen)
        self.is_open = False
        return chosen

    def clear_search(self) -> None:
        self.filter("")