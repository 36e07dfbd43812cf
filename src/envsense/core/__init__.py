"""Data records produced by the sensor drivers."""

from .models import Reading

__all__ = ["Reading"]
