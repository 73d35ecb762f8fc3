# src/page_factory/page_catalog.py
"""
Declare page classes from YAML/JSON instead of Python.

    pages:
      LoginPage:
        url: "{base_url}/users/sign_in"
        expected_title: "Log in"              # or {pattern: "^Log in"}
        expected_element: {name: username, timeout: 10}
        elements:
          username: {by: id, value: user_login, kind: text_field}
          role: {by: css, value: "select#role", kind: select_list}
        values:
          heading: {by: css, value: h1}                       # element text
          form_action: {by: id, value: login, attribute: action}
        links: ["Forgot your password?"]
        buttons: ["Log in"]

Locator ``by`` keys: id, name, css, xpath, link_text, partial_link_text,
class_name, tag_name. Element ``kind`` keys: text_field, select_list,
checkbox, radio, auto.
"""
from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, Union

import yaml
from selenium.webdriver.common.by import By

from .controls import CheckBox, RadioButton, SelectList, TextField, editable
from .errors import CatalogError, PageFactoryError
from .instrumentation import Cat, emit_signal
from .page_factory import PageFactory

BY_KEYS: Dict[str, str] = {
    "id": By.ID,
    "name": By.NAME,
    "css": By.CSS_SELECTOR,
    "xpath": By.XPATH,
    "link_text": By.LINK_TEXT,
    "partial_link_text": By.PARTIAL_LINK_TEXT,
    "class_name": By.CLASS_NAME,
    "tag_name": By.TAG_NAME,
}

CONTROL_KINDS: Dict[str, Callable[[Any], Any]] = {
    "text_field": TextField,
    "select_list": SelectList,
    "checkbox": CheckBox,
    "radio": RadioButton,
    "auto": editable,
}

_PAGE_KEYS = {"url", "expected_title", "expected_element", "elements", "values", "links", "buttons", "base"}


class PageCatalog:
    """
    Reads page declarations from a file or directory and builds PageFactory subclasses.

    Pages may name a ``base`` page (declared earlier in the same catalog, or passed
    in ``bases``) to inherit its declarations.
    """

    def __init__(self, logger=None, bases: Optional[Mapping[str, Type[PageFactory]]] = None):
        self.logger = logger
        self.pages: Dict[str, Type[PageFactory]] = dict(bases or {})

    # ---------- public API ----------

    def read_path(self, path: Union[str, Path]) -> Dict[str, Type[PageFactory]]:
        """
        Read a single file OR a directory (all *.yml/*.yaml/*.json in it, non-recursive).

        Returns only the page classes defined by what was read.
        """
        p = Path(path)
        if p.is_dir():
            return self._read_directory(p)
        if p.is_file():
            return self._read_file(p)
        raise FileNotFoundError(f"Page catalog path not found: {p}")

    def __getitem__(self, name: str) -> Type[PageFactory]:
        return self.pages[name]

    def __contains__(self, name: object) -> bool:
        return name in self.pages

    # ---------- internal helpers ----------

    def _read_directory(self, dir_path: Path) -> Dict[str, Type[PageFactory]]:
        built: Dict[str, Type[PageFactory]] = {}
        files: List[Path] = []
        for ext in ("*.yml", "*.yaml", "*.json"):
            files.extend(dir_path.glob(ext))
        for file in sorted(files):
            if self.logger:
                self.logger.info("Reading page catalog: %s", file)
            built.update(self._read_file(file))
        return built

    def _read_file(self, file_path: Path) -> Dict[str, Type[PageFactory]]:
        data = self._load_raw(file_path)
        if not isinstance(data, dict) or not isinstance(data.get("pages"), dict):
            raise CatalogError(f"{file_path}: expected a mapping with a 'pages' mapping at the top")

        built: Dict[str, Type[PageFactory]] = {}
        for name, raw in data["pages"].items():
            try:
                page_class = self.build_page(name, raw or {})
            except PageFactoryError as e:
                raise CatalogError(f"{file_path}: page {name}: {e}") from e
            built[name] = page_class
            self.pages[name] = page_class

        emit_signal(Cat.CATALOG, f"Read {len(built)} page type(s)", source=str(file_path))
        return built

    def _load_raw(self, file_path: Path) -> Any:
        suffix = file_path.suffix.lower()
        with file_path.open("r", encoding="utf-8") as f:
            if suffix in (".yml", ".yaml"):
                return yaml.safe_load(f)
            elif suffix == ".json":
                return json.load(f)
            else:
                raise CatalogError(f"Unsupported catalog file extension: {suffix}")

    # ---------- page building ----------

    def build_page(self, name: str, raw: Mapping[str, Any]) -> Type[PageFactory]:
        if not isinstance(raw, Mapping):
            raise CatalogError(f"page {name} must be a mapping")
        unknown = set(raw) - _PAGE_KEYS
        if unknown:
            raise CatalogError(f"page {name} has unknown keys: {', '.join(sorted(unknown))}")

        base_name = raw.get("base")
        if base_name is None:
            base: Type[PageFactory] = PageFactory
        elif base_name in self.pages:
            base = self.pages[base_name]
        else:
            raise CatalogError(f"page {name} names unknown base page {base_name!r}")

        def declare(cls):
            if raw.get("url") is not None:
                cls.page_url(str(raw["url"]))
            if raw.get("expected_title") is not None:
                cls.expected_title(_expected_title(raw["expected_title"]))
            if raw.get("expected_element") is not None:
                element_name, timeout = _expected_element(raw["expected_element"])
                cls.expected_element(element_name, timeout)
            for element_name, spec in (raw.get("elements") or {}).items():
                cls.element(element_name, _element_locator(element_name, spec))
            for value_name, spec in (raw.get("values") or {}).items():
                cls.value(value_name, _value_locator(value_name, spec))
            for text in raw.get("links") or []:
                cls.link(str(text))
            for text in raw.get("buttons") or []:
                cls.button(str(text))

        return type(name, (base,), {"declare": classmethod(declare), "__module__": __name__})


def _expected_title(raw: Any):
    if isinstance(raw, str):
        return raw
    if isinstance(raw, Mapping) and isinstance(raw.get("pattern"), str):
        return re.compile(raw["pattern"])
    raise CatalogError(f"expected_title must be a string or {{pattern: ...}}, got {raw!r}")


def _expected_element(raw: Any):
    if isinstance(raw, str):
        return raw, None
    if isinstance(raw, Mapping) and isinstance(raw.get("name"), str):
        timeout = raw.get("timeout")
        return raw["name"], (float(timeout) if timeout is not None else None)
    raise CatalogError(f"expected_element must be a name or {{name: ..., timeout: ...}}, got {raw!r}")


def _locator(name: str, spec: Any):
    if not isinstance(spec, Mapping) or "by" not in spec or "value" not in spec:
        raise CatalogError(f"{name}: locator needs 'by' and 'value'")
    by = BY_KEYS.get(str(spec["by"]).lower())
    if by is None:
        raise CatalogError(f"{name}: unknown locator strategy {spec['by']!r}")
    return by, str(spec["value"])


def _element_locator(name: str, spec: Any) -> Callable[[Any], Any]:
    by, value = _locator(name, spec)
    kind = spec.get("kind")
    if kind is None:
        return lambda b: b.find_element(by, value)
    wrap = CONTROL_KINDS.get(kind)
    if wrap is None:
        raise CatalogError(f"{name}: unknown control kind {kind!r}")
    return lambda b: wrap(b.find_element(by, value))


def _value_locator(name: str, spec: Any) -> Callable[[Any], Any]:
    by, value = _locator(name, spec)
    attribute = spec.get("attribute", "text")
    if attribute == "text":
        return lambda b: b.find_element(by, value).text
    return lambda b: b.find_element(by, value).get_attribute(attribute)
