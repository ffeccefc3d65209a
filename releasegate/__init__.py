"""Release branch structure gate."""

__version__ = "0.1.0"
