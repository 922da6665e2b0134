"""svc - local service lifecycle manager."""

__version__ = "1.1.0"
