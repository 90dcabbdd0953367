"""Base interface for model backends."""

from abc import ABC, abstractmethod


class Backend(ABC):
    """Abstract text-generation backend.

    Implementations raise ``BackendError`` when the backend cannot be reached
    or rejects a request.
    """

    @abstractmethod
    def list_models(self) -> list[str]:
        """Get the names of the locally installed models."""

    @abstractmethod
    def has_model(self, model: str) -> bool:
        """Check whether a model is installed locally."""

    @abstractmethod
    def pull_model(self, model: str) -> None:
        """Download a model. Returns once the model is installed."""

    @abstractmethod
    def generate(self, model: str, prompt: str, temperature: float, max_tokens: int) -> str:
        """Generate a completion for a prompt.

        Args:
            model: Model identifier
            prompt: Full prompt text
            temperature: Sampling temperature
            max_tokens: Maximum number of tokens to generate

        Returns:
            Raw generated text
        """
