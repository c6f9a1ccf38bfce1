"""Polygon mesh geometry: small matrices, transforms, triangulation and mesh file I/O."""

__version__ = "0.1.0"