"""Domain errors."""


class PagescopeError(Exception):
    """Base class for all pagescope errors."""


class ConversionError(PagescopeError):
    """PDF unreadable or rasterization backend unavailable.

    Fatal for the whole document.
    """


class InferenceError(PagescopeError):
    """Inference call failed. Recoverable per page."""


class ServiceUnavailable(InferenceError):
    """Inference service could not be reached."""


class ModelNotFound(InferenceError):
    """Requested model is not installed on the inference service."""

    def __init__(self, model_name: str) -> None:
        super().__init__(
            f"Model '{model_name}' not found. "
            f"Please pull the model first: ollama pull {model_name}"
        )
        self.model_name = model_name


class InferenceTimeout(InferenceError):
    """Inference request timed out."""


class InvalidResponse(InferenceError):
    """Inference response body was malformed or empty."""


class SummaryGenerationFailed(PagescopeError):
    """Document summarization failed; a fallback summary is used instead."""


class DocumentAborted(PagescopeError):
    """Processing run was cancelled before completion."""
