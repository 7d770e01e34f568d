"""Inference adapter using Ollama."""

import logging
import time
from collections.abc import Sequence
from typing import Any
from urllib.parse import urlparse

import httpx

from ...config import InferenceConfig
from ...domain.errors import (
    InferenceTimeout,
    InvalidResponse,
    ModelNotFound,
    ServiceUnavailable,
)
from ...domain.models import HealthStatus, InferenceResponse
from ...ports.inference import InferencePort
from .prompts import CONTENT_PROMPT, FORGERY_PROMPT, build_summary_prompt

logger = logging.getLogger(__name__)

CONTENT_OPTIONS = {"temperature": 0.1, "top_p": 0.9, "top_k": 40}
FORGERY_OPTIONS = {"temperature": 0.05, "top_p": 0.8, "top_k": 30}
SUMMARY_OPTIONS = {"temperature": 0.1, "top_p": 0.9, "top_k": 40, "num_predict": 1000}

VISION_MARKERS = ("llava", "vision")


class OllamaInferenceAdapter(InferencePort):
    """Inference implementation using the Ollama HTTP API."""

    def __init__(
        self,
        config: InferenceConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        parsed = urlparse(config.ollama_url)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"Invalid ollama_url scheme: {parsed.scheme}")
        self.base_url = config.ollama_url.rstrip("/")
        self.vision_model = config.vision_model
        self.text_model = config.text_model
        self.timeout = config.timeout
        self.health_timeout = config.health_timeout
        self.client = httpx.Client(base_url=self.base_url, transport=transport)

    def close(self) -> None:
        self.client.close()
        logger.debug("Closed Ollama client")

    def check_health(self) -> HealthStatus:
        try:
            models = self._fetch_models(self.health_timeout)
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"Ollama health check failed: {e}")
            return HealthStatus(reachable=False, url=self.base_url, error=str(e))

        vision_present = any(
            name == self.vision_model
            or any(marker in name for marker in VISION_MARKERS)
            for name in models
        )
        return HealthStatus(
            reachable=True,
            url=self.base_url,
            models_available=models,
            vision_model_present=vision_present,
        )

    def list_models(self) -> list[str]:
        """Return names of installed models, or an empty list on failure."""
        try:
            return self._fetch_models(self.timeout)
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"Failed to list Ollama models: {e}")
            return []

    def analyze_content(
        self, image_b64: str, prompt: str | None = None
    ) -> InferenceResponse:
        logger.info(f"Analyzing page content with Ollama ({self.vision_model})")
        return self._generate(
            model=self.vision_model,
            prompt=prompt or CONTENT_PROMPT,
            images=[image_b64],
            options=CONTENT_OPTIONS,
            timeout=self.timeout,
        )

    def analyze_forgery(self, image_b64: str) -> InferenceResponse:
        logger.info(f"Running forgery analysis with Ollama ({self.vision_model})")
        return self._generate(
            model=self.vision_model,
            prompt=FORGERY_PROMPT,
            images=[image_b64],
            options=FORGERY_OPTIONS,
            timeout=self.timeout * 1.5,
        )

    def summarize_document(
        self, page_texts: Sequence[str], document_name: str
    ) -> InferenceResponse:
        logger.info(f"Generating document summary with Ollama ({self.text_model})")
        return self._generate(
            model=self.text_model,
            prompt=build_summary_prompt(list(page_texts), document_name),
            images=None,
            options=SUMMARY_OPTIONS,
            timeout=self.timeout * 2,
        )

    def _fetch_models(self, timeout: float) -> list[str]:
        response = self.client.get("/api/tags", timeout=timeout)
        response.raise_for_status()
        return [m["name"] for m in response.json().get("models") or []]

    def _generate(
        self,
        model: str,
        prompt: str,
        images: list[str] | None,
        options: dict[str, Any],
        timeout: float,
    ) -> InferenceResponse:
        body: dict[str, Any] = {
            "model": model,
            "prompt": prompt,
            "stream": False,
            "options": options,
        }
        if images:
            body["images"] = images

        start = time.perf_counter()
        try:
            response = self.client.post("/api/generate", json=body, timeout=timeout)
            response.raise_for_status()
        except httpx.ConnectError as e:
            raise ServiceUnavailable(
                "Cannot connect to Ollama. Make sure Ollama is running and accessible."
            ) from e
        except httpx.TimeoutException as e:
            raise InferenceTimeout(
                f"Ollama request timed out after {timeout:.0f}s. "
                "The image might be too complex or the model is overloaded."
            ) from e
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise ModelNotFound(model) from e
            raise ServiceUnavailable(
                f"Ollama returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ServiceUnavailable(f"Ollama request failed: {e}") from e
        elapsed_ms = int((time.perf_counter() - start) * 1000)

        try:
            data = response.json()
        except ValueError as e:
            raise InvalidResponse(f"Invalid JSON from Ollama: {response.text[:200]}") from e

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str) or not text.strip():
            raise InvalidResponse("Invalid response from Ollama: empty response body")

        total_duration = data.get("total_duration")
        duration_ms = (
            int(total_duration / 1_000_000)
            if isinstance(total_duration, int | float) and total_duration > 0
            else elapsed_ms
        )
        return InferenceResponse(
            text=text.strip(), model_name=model, duration_ms=duration_ms
        )
