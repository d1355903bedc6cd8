"""Exceptions raised when breakend links or alternate paths violate their structure."""


class PathLinkingError(ValueError):
    """Base exception for structural errors in links and alternate paths."""

    pass


class MalformedPathError(PathLinkingError):
    """Raised when an alternate path is empty or its links are not contiguous."""

    pass


class DegenerateLinkError(PathLinkingError):
    """Raised when a link starts and ends at the same breakend."""

    pass
