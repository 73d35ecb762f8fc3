import re

_DROP = re.compile(r"[^\w\s-]")
_SEPARATORS = re.compile(r"[\s_-]+")


def normalize(text: str) -> str:
    """
    Turn free-form UI text into a snake_case method name.

    Everything but letters, digits, spaces, dashes and underscores is dropped,
    runs of separators collapse into one underscore, and the result is lower
    case with no leading/trailing underscore.

        normalize("Click Me For Fun!")  -> "click_me_for_fun"
        normalize(" Re--Set ")          -> "re_set"
    """
    # lower first: some characters lower-case into combining marks that _DROP removes
    cleaned = _DROP.sub("", text.lower())
    return _SEPARATORS.sub("_", cleaned).strip("_")


# The name the method generators have always used for this.
damballa = normalize
