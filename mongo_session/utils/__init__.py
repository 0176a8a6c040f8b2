"""Utility helpers."""
from mongo_session.utils.value_codec import decode_values, encode_values

__all__ = ["decode_values", "encode_values"]
