"""Ports - interfaces for external dependencies."""

from .metadata import MetadataPort
from .renderer import RendererPort

__all__ = ["MetadataPort", "RendererPort"]
