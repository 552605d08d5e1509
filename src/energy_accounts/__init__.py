"""Energy accounts service: accounts, due charges and card payments."""

__version__ = "0.1.0"
