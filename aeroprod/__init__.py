"""Aircraft production tracking: parts, staged production and release gating."""

__version__ = "0.1.0"
