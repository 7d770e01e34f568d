"""Inference adapters."""

from ...config import InferenceConfig
from ...ports.inference import InferencePort
from .ollama import OllamaInferenceAdapter

__all__ = ["OllamaInferenceAdapter", "create_inference_adapter"]


def create_inference_adapter(config: InferenceConfig) -> InferencePort:
    """Create inference adapter based on configuration."""
    return OllamaInferenceAdapter(config)
