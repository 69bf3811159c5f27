"""dtsearch: search npm for packages with TypeScript types."""

__version__ = "0.3.0"
