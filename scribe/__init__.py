"""scribe: write OS images to removable media without hitting the wrong disk."""

__version__ = "0.1.0"
