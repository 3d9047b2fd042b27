"""Reflection JSON codec exports."""

from .value_decoder import decode
from .value_encoder import encode

__all__ = ["decode", "encode"]
