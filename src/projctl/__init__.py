"""projctl — resolve and apply field updates on GitHub project items."""

__version__ = "0.3.0"
