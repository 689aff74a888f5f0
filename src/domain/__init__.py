"""Domain value objects."""

from src.domain.customization import Customization

__all__ = ["Customization"]
