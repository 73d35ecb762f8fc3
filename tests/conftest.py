from __future__ import annotations

from typing import Any

import pytest
from selenium.common.exceptions import NoSuchElementException

from page_factory import config


class FakeElement:
    """Just enough of a WebElement for page classes and controls."""

    def __init__(self, tag_name: str = "input", text: str = "", *, value: str = "",
                 displayed: bool = True, enabled: bool = True, selected: bool = False,
                 attrs: dict[str, Any] | None = None):
        self.tag_name = tag_name
        self.text = text
        self.value = value
        self.displayed = displayed
        self.enabled = enabled
        self.selected = selected
        self.attrs = dict(attrs or {})
        self.calls: list[tuple] = []

    def clear(self) -> None:
        self.calls.append(("clear",))
        self.value = ""

    def send_keys(self, *keys: str) -> None:
        self.calls.append(("send_keys",) + keys)
        self.value += "".join(keys)

    def click(self) -> None:
        self.calls.append(("click",))
        if self.attrs.get("type") in ("checkbox",):
            self.selected = not self.selected
        else:
            self.selected = True

    def is_displayed(self) -> bool:
        return self.displayed

    def is_enabled(self) -> bool:
        return self.enabled

    def is_selected(self) -> bool:
        return self.selected

    def get_attribute(self, name: str):
        return self.attrs.get(name)


class FakeDriver:
    """Records navigation and resolves elements from a (by, value) table."""

    def __init__(self, title: str = "", elements: dict[tuple[str, str], FakeElement] | None = None):
        self._title = title
        self.elements = dict(elements or {})
        self.visited: list[str] = []
        self.lookups: list[tuple[str, str]] = []
        self.title_reads = 0
        self.current_url = "about:blank"

    @property
    def title(self) -> str:
        self.title_reads += 1
        return self._title

    def get(self, url: str) -> None:
        self.visited.append(url)
        self.current_url = url

    def find_element(self, by: str, value: str) -> FakeElement:
        self.lookups.append((by, value))
        try:
            return self.elements[(by, value)]
        except KeyError:
            raise NoSuchElementException(f"no element for {by}={value}") from None


@pytest.fixture
def driver() -> FakeDriver:
    return FakeDriver(title="Home")


@pytest.fixture
def fast_polling(monkeypatch):
    monkeypatch.setattr(config, "POLL_INTERVAL", 0.01)
