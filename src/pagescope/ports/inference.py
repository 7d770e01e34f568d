"""Inference port - interface for vision/text model calls."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import HealthStatus, InferenceResponse


class InferencePort(ABC):
    """Interface for model-backed page analysis.

    All analysis methods raise subclasses of InferenceError on failure.
    """

    vision_model: str
    text_model: str

    @abstractmethod
    def check_health(self) -> "HealthStatus":
        """Report service reachability. Never raises."""
        pass

    @abstractmethod
    def analyze_content(
        self, image_b64: str, prompt: str | None = None
    ) -> "InferenceResponse":
        """Describe the content of a page image."""
        pass

    @abstractmethod
    def analyze_forgery(self, image_b64: str) -> "InferenceResponse":
        """Produce a forensic authenticity analysis of a page image."""
        pass

    @abstractmethod
    def summarize_document(
        self, page_texts: Sequence[str], document_name: str
    ) -> "InferenceResponse":
        """Summarize a document from its page analyses, in page order."""
        pass

    def close(self) -> None:
        """Release any held connections."""
        pass
