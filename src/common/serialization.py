"""Serialization utilities."""

from dataclasses import asdict


def serialize_dataclass(obj) -> dict:
    """Serialize a dataclass to a JSON-ready dict."""
    return asdict(obj)
