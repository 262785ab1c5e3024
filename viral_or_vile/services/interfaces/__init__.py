"""Service interface contracts (ABCs)"""

from viral_or_vile.services.interfaces.vision_client import IVisionClient

__all__ = [
    'IVisionClient',
]
