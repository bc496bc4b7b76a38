"""sgit - shorthand git workflows with interactive fallbacks."""

__version__ = "0.1.0"
