"""FitFlow: timed multi-step workout sessions."""

__version__ = "0.1.0"
