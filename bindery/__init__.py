"""bindery: bind JSON data into annotated HTML templates."""

__version__ = "0.1.0"
