# src/page_factory/page_factory.py
"""
PageFactory: the superclass for page classes.

A page class declares its elements and actions once, inside a ``declare``
classmethod, using Selenium locators:

    class LoginPage(PageFactory):

        @classmethod
        def declare(cls):
            cls.page_url("{base_url}/users/sign_in")
            cls.expected_element("username")
            cls.expected_title("Log in")

            cls.element("username", lambda b: b.find_element(By.ID, "user_login"))
            cls.value("error_text", lambda b: b.find_element(By.CSS_SELECTOR, ".alert").text)
            cls.action("log_in_as", lambda user, pw, b: (b.username().send_keys(user), ...))
            cls.link("Forgot your password?")
            cls.button("Log in")

    page = LoginPage(driver, visit=True)
    page.username().send_keys("admin")
    page.log_in()
    page.current_url        # not declared: forwarded to the driver

The block given to an element/action receives the page itself (``b``), so it can
call other bindings or any driver method through the page.
"""
from __future__ import annotations

import re
from typing import Any, Callable, Optional

from selenium.common.exceptions import (
    NoSuchElementException,
    StaleElementReferenceException,
    TimeoutException,
)
from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import WebDriverWait

from . import config
from .definition import ExpectedTitle, PageDefinition
from .errors import (
    DefinitionError,
    PresenceTimeoutError,
    ReservedNameError,
    TitleMismatchError,
    UndefinedHookError,
)
from .instrumentation import Cat, emit_diag, emit_signal, emit_trace
from .string_factory import damballa
from .timing import phase_timer

# Set on every instance in __init__; never a binding name.
RESERVED_NAMES = frozenset({"browser"})

_BUTTON_XPATH = (
    "//button[normalize-space(.)={t} or @value={t}]"
    " | //input[(@type='submit' or @type='button' or @type='reset' or @type='image') and @value={t}]"
)


def resolve_url(template: str) -> str:
    return template.replace("{base_url}", config.BASE_URL)


def xpath_literal(text: str) -> str:
    """Quote text for use inside an XPath expression."""
    if "'" not in text:
        return f"'{text}'"
    if '"' not in text:
        return f'"{text}"'
    parts = text.split("'")
    return "concat(" + ", \"'\", ".join(f"'{p}'" for p in parts) + ")"


class PageFactory:

    _definition: PageDefinition

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        # cls._definition still resolves to the parent's here
        cls._definition = cls._definition.derive(cls.__qualname__)
        hook = cls.__dict__.get("declare")
        if hook is not None:
            if isinstance(hook, (classmethod, staticmethod)):
                cls.declare()
            else:
                hook(cls)
        expected = cls._definition.expected_element
        if expected is not None and cls._definition.get(expected.name) is None and not hasattr(cls, expected.name):
            raise DefinitionError(
                f"{cls.__qualname__} expects element '{expected.name}', which is neither declared nor an attribute"
            )
        cls._definition.lock()
        emit_diag(
            Cat.DEFINE,
            "page type defined",
            page=cls.__qualname__,
            elements=len(cls._definition.element_names()),
            actions=len(cls._definition.action_names()),
        )

    # As the PageFactory will be the superclass for all your page classes, having this
    # initializer here means the construction checks are only written once.
    def __init__(self, browser, visit: bool = False):
        self.browser = browser
        definition = type(self)._definition
        with phase_timer(
            f"construct {definition.page_name}",
            ctx={"page": definition.page_name, "visit": visit},
        ):
            if visit:
                self.goto()
            if definition.expected_element is not None:
                self.wait_for_expected_element()
            if definition.expected_title is not None:
                self.verify_expected_title()

    def __getattr__(self, name: str):
        # Only reached when normal lookup fails: generated bindings first, then the driver.
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        binding = type(self)._definition.get(name)
        if binding is not None:
            return binding.bind(self)
        try:
            browser = self.__dict__["browser"]
        except KeyError:
            raise AttributeError(name) from None
        emit_trace(Cat.DISPATCH, "forwarding to browser", page=type(self).__qualname__, name=name)
        return getattr(browser, name)

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(type(self)._definition.bindings))

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__} browser={self.__dict__.get('browser')!r}>"

    # ------------------------------------------------------------------
    # Construction checks
    # ------------------------------------------------------------------

    def goto(self):
        """Navigate to the declared page_url."""
        definition = type(self)._definition
        if definition.url is None:
            raise UndefinedHookError(
                f"{definition.page_name} has no page_url; it cannot be visited"
            )
        url = resolve_url(definition.url)
        emit_signal(Cat.LIFECYCLE, "navigating", level="debug", page=definition.page_name, url=url)
        return self.browser.get(url)

    def wait_for_expected_element(self):
        """
        Block until the expected element is displayed, re-resolving it on every poll.

        Returns the control, or None when the page declares no expected element.
        """
        definition = type(self)._definition
        expected = definition.expected_element
        if expected is None:
            return None

        def _present(_driver):
            control = self._resolve_accessor(expected.name)
            if control is not None and control.is_displayed():
                return control
            return False

        wait = WebDriverWait(
            self.browser,
            expected.timeout,
            poll_frequency=config.POLL_INTERVAL,
            ignored_exceptions=(NoSuchElementException, StaleElementReferenceException),
        )
        try:
            return wait.until(_present)
        except TimeoutException as exc:
            raise PresenceTimeoutError(definition.page_name, expected.name, expected.timeout) from exc

    def verify_expected_title(self) -> None:
        definition = type(self)._definition
        expected = definition.expected_title
        if expected is None:
            return
        actual = self.browser.title
        if isinstance(expected, re.Pattern):
            matched = expected.search(actual) is not None
        else:
            matched = expected == actual
        if not matched:
            raise TitleMismatchError(expected, actual)

    def _resolve_accessor(self, name: str):
        target = getattr(self, name)
        return target() if callable(target) else target

    # ------------------------------------------------------------------
    # Declarations (only valid inside declare())
    # ------------------------------------------------------------------

    @classmethod
    def declare(cls) -> None:
        """Override in a page class and make your declarations here."""

    @classmethod
    def page_definition(cls) -> PageDefinition:
        return cls._definition

    @classmethod
    def _check_name(cls, name: str, what: str) -> None:
        cls._definition.ensure_open(f"{what} '{name}'")
        if not name or not isinstance(name, str):
            raise DefinitionError(f"{what} on {cls.__qualname__} needs a non-empty name, got {name!r}")
        if name in RESERVED_NAMES or hasattr(cls, name):
            raise ReservedNameError(
                f"{name} is already an attribute of {cls.__qualname__}; "
                f"a {what} with that name could never be reached"
            )

    # Define this in a page class and when you use visit=True to instantiate the class
    # it will enter the URL in the browser's address bar.
    @classmethod
    def page_url(cls, url: str) -> None:
        cls._definition.set_url(url)

    # When the class is instantiated it will wait until that element appears on the page
    # before continuing with the script.
    @classmethod
    def expected_element(cls, element_name: str, timeout: Optional[float] = None) -> None:
        if timeout is None:
            timeout = config.EXPECTED_ELEMENT_TIMEOUT
        cls._definition.set_expected_element(element_name, timeout)

    # When the class is instantiated it will verify that the browser's title matches.
    # A str must match exactly; a compiled pattern only has to be found in the title.
    @classmethod
    def expected_title(cls, expected_title: ExpectedTitle) -> None:
        cls._definition.set_expected_title(expected_title)

    @classmethod
    def element(cls, element_name: str, locator: Optional[Callable[[Any], Any]] = None):
        """
        The basic building block of page classes: a named accessor.

            cls.element("title", lambda b: b.find_element(By.ID, "title-id"))
            cls.value("page_header", lambda b: b.find_element(By.CSS_SELECTOR, "h3.page_header").text)

        Called without a locator it returns a decorator.
        """
        if locator is None:
            def decorator(fn):
                cls.element(element_name, fn)
                return fn
            return decorator
        cls._check_name(element_name, "element")
        cls._definition.add_element(element_name, locator)
        return locator

    value = element

    @classmethod
    def action(cls, method_name: str, body: Optional[Callable[..., Any]] = None):
        """
        The basic building block for interacting with a page.

            cls.action("continue_on", lambda b: b.find_element(By.ID, "continue").click())
            cls.action("select_style", lambda style, b: b.find_element(By.LINK_TEXT, style).click())

        The body gets the caller's positional arguments followed by the page.
        Declaring the same action name again replaces the earlier one.
        """
        if body is None:
            def decorator(fn):
                cls.action(method_name, fn)
                return fn
            return decorator
        cls._check_name(method_name, "action")
        cls._definition.add_action(method_name, body)
        return body

    # Use this for links that are safe to define by their text string.
    # link("Click Me For Fun!") creates #click_me_for_fun and #click_me_for_fun_link.
    @classmethod
    def link(cls, link_text: str) -> None:
        def locate(b):
            return b.find_element(By.LINK_TEXT, link_text)

        cls.element(damballa(link_text + " link"), locate)
        cls.action(damballa(link_text), lambda b: locate(b).click())

    # Use this for buttons that are safe to define by their value (or their text).
    # button("Save Changes") creates #save_changes and #save_changes_button.
    @classmethod
    def button(cls, button_text: str) -> None:
        xpath = _BUTTON_XPATH.format(t=xpath_literal(button_text))

        def locate(b):
            return b.find_element(By.XPATH, xpath)

        cls.element(damballa(button_text + " button"), locate)
        cls.action(damballa(button_text), lambda b: locate(b).click())

    # A helper that converts the passed string into snake case.
    @staticmethod
    def damballa(text: str) -> str:
        return damballa(text)


PageFactory._definition = PageDefinition(page_name="PageFactory")
PageFactory._definition.lock()
