"""
Exception hierarchy for the generation pipeline.

Routes register a single handler for ``BriefyError`` and show ``str(exc)`` to
the user; the subclasses only exist so callers and tests can tell the failure
categories apart.
"""


class BriefyError(Exception):
    """Base class for errors that carry a user-facing message."""


class ConfigurationError(BriefyError):
    """The AI credential is missing or malformed. Raised before any network call."""


class ProviderError(BriefyError):
    """The AI provider call failed."""


class ApiKeyError(ProviderError):
    pass


class QuotaExceededError(ProviderError):
    pass


class ProviderNetworkError(ProviderError):
    pass


class GenerationError(ProviderError):
    """Any provider failure that does not fit the categories above."""


class InterpretationError(BriefyError, ValueError):
    """The model answered, but the answer could not be turned into content."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


class NoJsonFoundError(InterpretationError):
    pass


class MalformedJsonError(InterpretationError):
    pass


class UnsupportedContentTypeError(InterpretationError):
    pass
