"""Model backends used to generate reviews."""

from localspy.backend.base import Backend
from localspy.backend.ollama import OllamaClient

__all__ = [
    "Backend",
    "OllamaClient",
]
