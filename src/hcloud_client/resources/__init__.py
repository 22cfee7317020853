"""Resource-specific convenience wrappers."""
from .base import ResourceBase
from .images import ImagesResource
from .servers import ServersResource
from .volumes import VolumesResource

__all__ = [
    "ResourceBase",
    "ServersResource",
    "VolumesResource",
    "ImagesResource",
]
