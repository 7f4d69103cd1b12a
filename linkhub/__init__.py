"""LinkHub - client for link-in-bio pages."""

__version__ = "0.1.0"
