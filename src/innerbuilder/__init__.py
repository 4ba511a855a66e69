"""Inner builder generation for Java classes."""

__version__ = "0.1.0"
