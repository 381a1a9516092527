"""MuPDF document session server for the Model Context Protocol."""

__version__ = "0.3.0"
