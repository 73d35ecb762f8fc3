from __future__ import annotations

from typing import Any, Callable, Optional, Type, TypeVar

P = TypeVar("P")
D = TypeVar("D")


class Foundry:
    """
    Shortcuts for instantiating page classes and data objects.

    Mix into anything that holds a ``browser`` (data objects, test helpers).
    """

    browser: Any
    current_page: Any = None

    def visit(self, page_class: Type[P], block: Optional[Callable[[P], Any]] = None) -> P:
        """Navigate to the page's page_url, then construct it."""
        return self.on(page_class, visit=True, block=block)

    def on(
        self,
        page_class: Type[P],
        visit: bool = False,
        block: Optional[Callable[[P], Any]] = None,
    ) -> P:
        """Construct page_class against the current browser page and remember it."""
        page = page_class(self.browser, visit)
        self.current_page = page
        if block is not None:
            block(page)
        return page

    on_page = on

    def make(self, data_object_class: Type[D], **opts: Any) -> D:
        """Instantiate a data object without creating it in the system under test."""
        return data_object_class(self.browser, **opts)

    def create(self, data_object_class: Type[D], **opts: Any) -> D:
        data_object = self.make(data_object_class, **opts)
        data_object.create()
        return data_object
