# src/page_factory/definition.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Set, Union

from .errors import DefinitionError, DefinitionLockedError, DuplicateDefinitionError
from .instrumentation import Cat, emit_diag

ExpectedTitle = Union[str, re.Pattern]


class BindingKind(str, Enum):
    ELEMENT = "element"
    ACTION = "action"


@dataclass(frozen=True)
class ElementBinding:
    """
    Named accessor: calls ``locator(page)`` each time, nothing is cached.
    """
    name: str
    locator: Callable[[Any], Any]
    kind: BindingKind = BindingKind.ELEMENT

    def bind(self, page: Any) -> Callable[[], Any]:
        locator = self.locator

        def accessor():
            return locator(page)

        accessor.__name__ = self.name
        return accessor


@dataclass(frozen=True)
class ActionBinding:
    """
    Named, parametrized interaction: ``body(*args, page)``.
    """
    name: str
    body: Callable[..., Any]
    kind: BindingKind = BindingKind.ACTION

    def bind(self, page: Any) -> Callable[..., Any]:
        body = self.body

        def action(*args):
            return body(*args, page)

        action.__name__ = self.name
        return action


Binding = Union[ElementBinding, ActionBinding]


@dataclass(frozen=True)
class ExpectedElement:
    name: str
    timeout: float


@dataclass
class PageDefinition:
    """
    Everything one page type declared: navigation target, construction checks,
    and the name -> binding dispatch table.

    Mutable only until lock() is called; after that every declaration raises
    DefinitionLockedError.
    """
    page_name: str
    url: Optional[str] = None
    expected_element: Optional[ExpectedElement] = None
    expected_title: Optional[ExpectedTitle] = None
    _bindings: Dict[str, Binding] = field(default_factory=dict, repr=False)
    # every element/value name ever declared, even if an action later took the slot
    _element_names: Set[str] = field(default_factory=set, repr=False)
    _locked: bool = field(default=False, repr=False)

    # --- read side ---

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def bindings(self) -> Mapping[str, Binding]:
        return MappingProxyType(self._bindings)

    def get(self, name: str) -> Optional[Binding]:
        return self._bindings.get(name)

    def element_names(self) -> list[str]:
        return [n for n, b in self._bindings.items() if b.kind is BindingKind.ELEMENT]

    def action_names(self) -> list[str]:
        return [n for n, b in self._bindings.items() if b.kind is BindingKind.ACTION]

    # --- write side (declaration phase only) ---

    def ensure_open(self, what: str) -> None:
        if self._locked:
            raise DefinitionLockedError(
                f"{self.page_name} is already defined; cannot declare {what} after its declare() hook"
            )

    def set_url(self, url: str) -> None:
        self.ensure_open("page_url")
        self.url = url

    def set_expected_element(self, name: str, timeout: float) -> None:
        self.ensure_open("expected_element")
        self.expected_element = ExpectedElement(name=name, timeout=timeout)

    def set_expected_title(self, expected: ExpectedTitle) -> None:
        self.ensure_open("expected_title")
        if not isinstance(expected, (str, re.Pattern)):
            raise DefinitionError(
                f"expected_title on {self.page_name} must be a str or compiled pattern, got {type(expected).__name__}"
            )
        self.expected_title = expected

    def add_element(self, name: str, locator: Callable[[Any], Any]) -> ElementBinding:
        self.ensure_open(f"element '{name}'")
        existing = self._bindings.get(name)
        if name in self._element_names or (existing is not None and existing.kind is BindingKind.ACTION):
            raise DuplicateDefinitionError(f"{name} is being defined twice in {self.page_name}!")
        binding = ElementBinding(name=name, locator=locator)
        self._bindings[name] = binding
        self._element_names.add(name)
        emit_diag(Cat.DEFINE, "element declared", page=self.page_name, name=name)
        return binding

    def add_action(self, name: str, body: Callable[..., Any]) -> ActionBinding:
        # No duplicate check: a second action under the same name replaces the first.
        self.ensure_open(f"action '{name}'")
        binding = ActionBinding(name=name, body=body)
        replaced = name in self._bindings
        self._bindings[name] = binding
        emit_diag(Cat.DEFINE, "action declared", page=self.page_name, name=name, replaced=replaced or None)
        return binding

    def lock(self) -> None:
        self._locked = True

    def derive(self, page_name: str) -> "PageDefinition":
        """Unlocked copy for a subclass; bindings are shared, the table is not."""
        return PageDefinition(
            page_name=page_name,
            url=self.url,
            expected_element=self.expected_element,
            expected_title=self.expected_title,
            _bindings=dict(self._bindings),
            _element_names=set(self._element_names),
        )
