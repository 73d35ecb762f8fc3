from __future__ import annotations

from typing import Any, Mapping, Optional

from .errors import MissingDataError
from .foundry import Foundry


class DataFactory:
    """
    Helpers for data objects: classes that describe a record in the system under
    test and know how to create/edit it through page classes.
    """

    def set_options(self, opts: Optional[Mapping[str, Any]]) -> None:
        """
        Copy options onto the object.

        None values are skipped, so the same dict that was fed to fit() can be
        passed here at the end of an edit method.
        """
        for key, value in (opts or {}).items():
            if value is not None:
                setattr(self, key, value)

    update_options = set_options

    def requires(self, *names: str) -> None:
        missing = [n for n in names if getattr(self, n, None) is None]
        if missing:
            raise MissingDataError(
                f"{type(self).__name__} needs values for: {', '.join(missing)}"
            )


class DataObject(Foundry, DataFactory):
    """Base for data objects; subclasses set defaults in ``defaults``."""

    defaults: Mapping[str, Any] = {}

    def __init__(self, browser, **opts: Any):
        self.browser = browser
        self.set_options(dict(self.defaults))
        self.set_options(opts)

    def create(self) -> None:
        raise NotImplementedError(f"{type(self).__name__} does not define create()")
