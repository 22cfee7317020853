"""High-level Hetzner Cloud client entrypoints."""
from .client import HetznerCloudClient
from .config import ClientConfig
from .exceptions import ApiError, HetznerCloudError, ValidationError

__all__ = ["HetznerCloudClient", "ClientConfig", "HetznerCloudError", "ApiError", "ValidationError"]
