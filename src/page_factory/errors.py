class PageFactoryError(RuntimeError):
    """Base class for everything raised by page_factory itself."""
    pass


# --- definition time ---

class DefinitionError(PageFactoryError):
    """Raised when a page type declaration is invalid."""
    pass

class DuplicateDefinitionError(DefinitionError):
    """Raised when an element/value name is declared twice on one page type."""
    pass

class ReservedNameError(DefinitionError):
    """Raised when a binding name would be shadowed by an attribute of the page class."""
    pass

class DefinitionLockedError(DefinitionError):
    """Raised when something tries to declare on a page type after its declare() hook ran."""
    pass


# --- construction time ---

class LifecycleError(PageFactoryError):
    """Raised when a page instance cannot be constructed."""
    pass

class UndefinedHookError(LifecycleError):
    """Raised when visit=True is requested but no page_url was declared."""
    pass

class PresenceTimeoutError(LifecycleError):
    """Raised when the expected element does not become present in time."""

    def __init__(self, page_name: str, element_name: str, timeout: float):
        self.page_name = page_name
        self.element_name = element_name
        self.timeout = timeout
        super().__init__(
            f"Expected element '{element_name}' on {page_name} was not present after {timeout:g}s"
        )

class TitleMismatchError(LifecycleError):
    """Raised when the browser title does not satisfy the declared expectation."""

    def __init__(self, expected, actual: str):
        self.expected = expected
        self.actual = actual
        shown = getattr(expected, "pattern", expected)
        super().__init__(f"Expected title '{shown}' instead of '{actual}'")


# --- controls / data ---

class ControlNotEditableError(PageFactoryError):
    """Raised when fit() targets a disabled or read-only control."""
    pass

class MissingDataError(PageFactoryError):
    """Raised when a data object is missing attributes it requires."""
    pass

class CatalogError(PageFactoryError, ValueError):
    """Raised when a page catalog file cannot be turned into page types."""
    pass
