"""Text-buffer core for a terminal line editor."""

__all__ = [
    "adapters",
    "buffer",
    "graphemes",
    "highlighting",
    "runtime",
]

__version__ = "0.1.0"
