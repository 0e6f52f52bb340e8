"""Common CLI helper utilities."""

from __future__ import annotations

import argparse
import logging

from wikidata_client.queries import is_entity_id


def setup_logging(level: str = "INFO") -> None:
    """Configure standard logging format for CLI tools."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
        force=True,
    )


def parse_id_list(value: str, field_name: str = "ids") -> list[str]:
    """Parse a comma-separated list of entity ids for argparse arguments.

    Args:
        value: Comma-separated ids, e.g. "Q515,Q1549591".
        field_name: Name of the field for error messages.

    Returns:
        List of ids in the given order, duplicates removed.

    Raises:
        argparse.ArgumentTypeError: If any id is not of the form Q123.
    """
    ids: list[str] = []
    for part in value.split(","):
        part = part.strip().upper()
        if not part:
            continue
        if not is_entity_id(part):
            raise argparse.ArgumentTypeError(
                f"{field_name} must be comma-separated ids like Q515, got {part!r}"
            )
        if part not in ids:
            ids.append(part)
    return ids


def parse_positive_float(value: str, field_name: str = "value") -> float:
    """Parse a non-negative float for argparse arguments."""
    try:
        number = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{field_name} must be a number") from exc
    if number < 0:
        raise argparse.ArgumentTypeError(f"{field_name} must not be negative")
    return number
