"""Grade engine of the academic records portal."""

__version__ = "1.0.0"
