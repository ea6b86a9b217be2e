class RanlinkError(Exception):
    """Base class for all application errors."""
    pass


class ConfigurationError(RanlinkError):
    """Raised when a model, numerology, bandwidth, vendor or unit tag is not recognised."""

    def __init__(self, kind: str, tag: object):
        self.kind = kind
        self.tag = tag
        super().__init__(f"Unrecognised {kind}: {tag!r}")


class SuggestionServiceError(RanlinkError):
    """Raised when the external suggestion service cannot produce suggestions."""
    pass
