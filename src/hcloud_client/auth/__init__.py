"""Authentication strategies for the Hetzner Cloud API."""
from .base import AuthStrategy
from .token import TokenAuth

__all__ = ["AuthStrategy", "TokenAuth"]
