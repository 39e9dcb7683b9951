"""ChaTop - rental listing backend with JWT authentication."""

__version__ = "0.1.0"
