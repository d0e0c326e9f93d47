"""Boundary I/O: document decoding, raster persistence, JSON output."""
