# src/page_factory/controls.py
"""
Editable controls and the ``fit`` method.

``fit`` lets a data object keep one ``edit`` method instead of one per field:
pass the new value for fields that should change and ``None`` for the ones
that should be left alone.

    def edit(self, **opts):
        page = self.on(EditUserPage)
        page.first_name().fit(opts.get("first_name"))
        page.role().fit(opts.get("role"))          # select list: text or re.Pattern
        page.active().fit(opts.get("active"))      # checkbox: Toggle.SET / Toggle.CLEAR
        self.update_options(opts)

For this to work, define the text fields, select lists, checkboxes and radio
buttons themselves as elements (wrapped in the matching Control class, or via
``editable``). Don't define set/select/clear actions for them.

If your data object holds something other than set/clear for a checkbox, map it
with a small dict first:

    ACTIVE_TRANS = {"YES": Toggle.SET, "NO": Toggle.CLEAR}
    page.active().fit(ACTIVE_TRANS.get(opts.get("active")))
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Any, Optional, Union

from selenium.common.exceptions import NoSuchElementException
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.ui import Select

from .errors import ControlNotEditableError
from .instrumentation import Cat, emit_diag

TextOrPattern = Union[str, re.Pattern]


class Toggle(str, Enum):
    SET = "set"
    CLEAR = "clear"


class Control:
    """Wraps a WebElement; anything not defined here goes to the element."""

    kind = "control"

    def __init__(self, element: WebElement):
        self.element = element

    def __getattr__(self, name: str):
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        try:
            element = self.__dict__["element"]
        except KeyError:
            raise AttributeError(name) from None
        return getattr(element, name)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} element={self.__dict__.get('element')!r}>"

    def fit(self, value: Any) -> None:
        raise NotImplementedError(f"{type(self).__name__} does not support fit()")


class TextField(Control):
    """Text inputs, textareas and anything else that takes keystrokes."""

    kind = "text_field"

    def assert_writable(self) -> None:
        el = self.element
        if not el.is_enabled() or el.get_attribute("readonly") not in (None, "false"):
            raise ControlNotEditableError(f"{self!r} is disabled or read-only")

    def fit(self, value: Any) -> None:
        # Use when the value may be None, in which case the field is left alone.
        if value is None:
            return
        self.assert_writable()
        emit_diag(Cat.FIT, "clear + type", kind=self.kind, chars=len(str(value)))
        self.element.clear()
        self.element.send_keys(str(value))


class SelectList(Control):

    kind = "select_list"

    def fit(self, value: Optional[TextOrPattern]) -> None:
        if value is None:
            return
        select = Select(self.element)
        if isinstance(value, re.Pattern):
            emit_diag(Cat.FIT, "select by pattern", kind=self.kind, pattern=value.pattern)
            for option in select.options:
                if value.search(option.text):
                    if not option.is_selected():
                        option.click()
                    return
            raise NoSuchElementException(f"Could not locate option matching pattern: {value.pattern}")
        emit_diag(Cat.FIT, "select by text", kind=self.kind, text=value)
        select.select_by_visible_text(value)


def _toggle(value: Any) -> Toggle:
    try:
        return Toggle(value)
    except ValueError:
        raise ValueError(f"fit() expects {Toggle.SET.value!r}, {Toggle.CLEAR.value!r} or None, got {value!r}") from None


class CheckBox(Control):

    kind = "checkbox"

    def fit(self, value: Optional[Union[Toggle, str]]) -> None:
        if value is None:
            return
        wanted = _toggle(value) is Toggle.SET
        if self.element.is_selected() != wanted:
            emit_diag(Cat.FIT, "toggle", kind=self.kind, to=_toggle(value).value)
            self.element.click()


class RadioButton(Control):

    kind = "radio"

    def fit(self, value: Optional[Union[Toggle, str]]) -> None:
        if value is None:
            return
        if _toggle(value) is Toggle.CLEAR:
            raise ValueError("a radio button cannot be cleared; set another one in its group instead")
        if not self.element.is_selected():
            emit_diag(Cat.FIT, "select radio", kind=self.kind)
            self.element.click()


_INPUT_TYPES = {
    "checkbox": CheckBox,
    "radio": RadioButton,
}


def editable(element: Any) -> Control:
    """Wrap a raw element in the Control class matching its tag/type."""
    if isinstance(element, Control):
        return element
    tag = (element.tag_name or "").lower()
    if tag == "select":
        return SelectList(element)
    if tag == "input":
        input_type = (element.get_attribute("type") or "text").lower()
        return _INPUT_TYPES.get(input_type, TextField)(element)
    return TextField(element)


def fit(control: Any, value: Any) -> None:
    """
    Apply value to a control of any kind; None leaves it untouched.

    Accepts a Control or a raw WebElement. With None the driver is never called.
    """
    if value is None:
        return
    editable(control).fit(value)
