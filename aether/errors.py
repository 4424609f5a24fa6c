"""Generation error taxonomy.

Every failure leaves the source state untouched; callers show ``user_message``
and log the detail.
"""

GENERIC_MESSAGE = "Failed to generate code. Please try again."


class GenerationError(Exception):
    """Base class for a failed generation request."""

    user_message = GENERIC_MESSAGE


class EmptyResponse(GenerationError):
    """The generation service returned no text."""


class MalformedResponse(GenerationError):
    """The returned text does not match the markup/style/logic schema."""


class GenerationFailed(GenerationError):
    """Transport or service-side failure. The underlying exception is kept on ``cause``."""

    def __init__(self, cause: BaseException):
        super().__init__(f"Generation service call failed: {cause!r}")
        self.cause = cause


class GenerationInFlight(GenerationError):
    """A generation request was issued while another one is still running."""
