"""Model family detection."""

from .descriptor import ModelDescriptor
from .detector import ModelTypeDetector, detect_family

__all__ = ["ModelDescriptor", "ModelTypeDetector", "detect_family"]
