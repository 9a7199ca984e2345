"""Task management REST service."""
