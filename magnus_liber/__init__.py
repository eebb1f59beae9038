"""Command-line chat client for an Azure OpenAI chat deployment."""

__version__ = "0.1.0"
