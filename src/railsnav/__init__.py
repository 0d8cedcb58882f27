"""railsnav — Rails-aware file navigation for editors."""

__version__ = "0.1.0"
