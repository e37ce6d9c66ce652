"""Input validation and sanitization layer for a document repository API client."""

__version__ = "0.1.0"
