"""Ollama HTTP API client."""

import logging
from typing import Any

import httpx

from localspy.backend.base import Backend
from localspy.errors import BackendError

logger = logging.getLogger(__name__)

# Default address of a local Ollama server
OLLAMA_DEFAULT_HOST = "http://localhost:11434"


class OllamaClient(Backend):
    """Client for a locally running Ollama server.

    Documentation: https://github.com/ollama/ollama/blob/main/docs/api.md
    """

    def __init__(
        self,
        host: str = OLLAMA_DEFAULT_HOST,
        timeout: float | None = 300.0,
        pull_timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the Ollama client.

        Args:
            host: Base URL of the Ollama server
            timeout: Timeout in seconds for listing and generating
            pull_timeout: Timeout in seconds for model downloads (None for no limit)
            transport: Custom httpx transport (used in tests)
        """
        self.host = host.rstrip("/")
        self.timeout = timeout
        self.pull_timeout = pull_timeout
        self.transport = transport

    def _make_request(
        self,
        method: str,
        endpoint: str,
        json_data: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Make an HTTP request to the Ollama API.

        Args:
            method: HTTP method (GET, POST)
            endpoint: API endpoint (e.g., /api/tags)
            json_data: JSON body for POST requests
            timeout: Request timeout in seconds

        Returns:
            Response JSON as dictionary

        Raises:
            BackendError: If the server is unreachable, times out or returns an error
        """
        url = f"{self.host}{endpoint}"
        method = method.upper()
        if method not in ("GET", "POST"):
            raise ValueError(f"Unsupported HTTP method: {method}")

        try:
            with httpx.Client(timeout=timeout, transport=self.transport) as client:
                if method == "GET":
                    response = client.get(url)
                else:
                    response = client.post(url, json=json_data)

                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as e:
            raise BackendError(f"Request to {url} timed out") from e
        except httpx.HTTPStatusError as e:
            raise BackendError(
                f"Ollama API error: {e.response.status_code} - {e.response.text}"
            ) from e
        except httpx.RequestError as e:
            raise BackendError(f"Cannot reach Ollama at {self.host}: {e}") from e
        except ValueError as e:
            raise BackendError(f"Invalid response from {url}: {e}") from e

        if not isinstance(data, dict):
            raise BackendError(f"Invalid response from {url}: expected a JSON object")
        if data.get("error"):
            raise BackendError(f"Ollama API error: {data['error']}")
        return data

    def list_models(self) -> list[str]:
        """Get the names of the locally installed models."""
        data = self._make_request("GET", "/api/tags", timeout=self.timeout)
        return [m["name"] for m in data.get("models", []) if isinstance(m, dict) and "name" in m]

    def has_model(self, model: str) -> bool:
        """Check whether a model is installed.

        A model requested without a tag matches its ``:latest`` variant.
        """
        candidates = {model}
        if ":" not in model:
            candidates.add(f"{model}:latest")
        return any(name in candidates for name in self.list_models())

    def pull_model(self, model: str) -> None:
        """Download a model, blocking until the pull completes."""
        logger.info(f"Pulling model {model} (this may take a while)...")
        data = self._make_request(
            "POST",
            "/api/pull",
            {"model": model, "stream": False},
            timeout=self.pull_timeout,
        )
        status = data.get("status", "")
        if status != "success":
            raise BackendError(f"Pulling {model} did not complete (status: {status or 'unknown'})")
        logger.info(f"Model {model} pulled")

    def generate(self, model: str, prompt: str, temperature: float, max_tokens: int) -> str:
        """Generate a completion with the given model."""
        data = self._make_request(
            "POST",
            "/api/generate",
            {
                "model": model,
                "prompt": prompt,
                "stream": False,
                "options": {
                    "temperature": temperature,
                    "num_predict": max_tokens,
                },
            },
            timeout=self.timeout,
        )
        response = data.get("response")
        if not isinstance(response, str):
            raise BackendError("Ollama response is missing generated text")
        return response
