"""localspy - local code review powered by Ollama."""

__version__ = "0.1.0"
