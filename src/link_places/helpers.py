"""Helper functions for link_places CLI."""

from __future__ import annotations

import argparse
from typing import Any, Sequence

from common.cli_helpers import parse_id_list, parse_positive_float


def parse_link_places_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for link_places."""

    parser = argparse.ArgumentParser(
        description="Link place names in a table to Wikidata entities."
    )

    # Input options
    parser.add_argument("--input", required=True, help="Input table (.csv or .jsonl)")
    parser.add_argument(
        "--column",
        default=None,
        help="Column holding location mentions (default: from config)",
    )
    parser.add_argument(
        "--text-column",
        default=None,
        help="Column of free text to extract extra place mentions from with spaCy",
    )
    parser.add_argument(
        "--spacy-model",
        default=None,
        help="spaCy model for --text-column (default: from config)",
    )

    # Linking options
    parser.add_argument(
        "--config",
        default=None,
        help="Config name or path (default: $LINK_PLACES_CONFIG or 'default')",
    )
    parser.add_argument(
        "--exclude",
        type=lambda v: parse_id_list(v, "exclude"),
        default=[],
        help="Comma-separated type ids to exclude, e.g. Q1549591,Q515",
    )
    parser.add_argument("--lang", default=None, help="Label language (default: from config)")
    parser.add_argument(
        "--interval",
        type=lambda v: parse_positive_float(v, "interval"),
        default=None,
        help="Seconds between remote calls (default: from config)",
    )
    parser.add_argument(
        "--max-candidates",
        type=int,
        default=None,
        help="Candidates kept per term (default: from config)",
    )
    parser.add_argument(
        "--preflight",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Check that Wikidata is reachable before linking",
    )

    # Output options
    parser.add_argument("--out", required=True, help="Output table (.csv or .jsonl)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    return parser.parse_args(argv)


def cell_text(value: Any) -> str:
    """Render a table cell as a mention string."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value if v is not None)
    return str(value)


def collect_column(rows: list[dict[str, Any]], column: str) -> list[str]:
    """
    Return the text of `column` for every row.

    Raises:
        ValueError: If no row has the column
    """
    if rows and not any(column in row for row in rows):
        raise ValueError(f"Column {column!r} not found in input table")
    return [cell_text(row.get(column)) for row in rows]
