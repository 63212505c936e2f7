class NavigationError(Exception):
    """Base class for failures that make navigation unavailable.

    A cursor that is simply not on a navigable symbol is not an error; the
    entry points return ``None`` for that case.
    """


class SourceReadError(NavigationError, OSError):
    pass


class ParseSetupError(NavigationError):
    pass


class QueryCompileError(NavigationError):
    pass


class PositionError(NavigationError, ValueError):
    pass


class UriError(NavigationError, ValueError):
    pass


class UnsupportedLanguageError(NavigationError, ValueError):
    pass
