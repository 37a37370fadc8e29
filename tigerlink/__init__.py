"""tigerlink - autolink and code generation engine for native extensions."""

__version__ = "0.1.0"
