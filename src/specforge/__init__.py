"""Requirements-to-AppSpec extraction service."""

__version__ = "0.3.0"
