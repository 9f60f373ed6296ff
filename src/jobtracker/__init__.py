"""jobtracker - a terminal dashboard for tracking job applications."""

__version__ = "0.1.0"

__all__ = ["__version__"]
