"""Release packager for the SGLoader launcher."""

__version__ = "0.1.0"
