"""Weather lookup CLI with pluggable, persisted providers."""

__all__ = ["__version__"]

__version__ = "0.1.0"
