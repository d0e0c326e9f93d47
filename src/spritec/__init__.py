"""spritec: layered document to sprite resource bundle compiler."""

__version__ = "0.1.0"
