"""Local table I/O utilities (CSV and JSONL)."""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Iterator

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".csv", ".jsonl")


def table_format(path: str | Path) -> str:
    """Return the table suffix of `path`, raising ValueError if unsupported."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported table format {suffix!r} for {path}. "
            f"Must be one of {list(SUPPORTED_SUFFIXES)}"
        )
    return suffix


def read_jsonl(path: Path) -> Iterator[dict]:
    """Stream JSON objects from a JSONL file, skipping blank lines."""
    with path.open(encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                yield json.loads(line)


def read_table(path: str | Path) -> list[dict[str, Any]]:
    """
    Read a CSV or JSONL table into a list of row dicts.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file extension is not supported
    """
    path = Path(path)
    suffix = table_format(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    if suffix == ".jsonl":
        rows = list(read_jsonl(path))
    else:
        with path.open(newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))

    logger.info("Read %d rows from %s", len(rows), path)
    return rows


def write_table(
    rows: list[dict[str, Any]],
    path: str | Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """
    Write row dicts to a CSV or JSONL table, creating parent directories.

    CSV columns are `fieldnames`, or the key order of the first row. A CSV
    with no rows still gets a header when `fieldnames` is given.

    Returns:
        Path to the written file.
    """
    path = Path(path)
    suffix = table_format(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", newline="", encoding="utf-8") as f:
        if suffix == ".jsonl":
            for row in rows:
                f.write(json.dumps(row, default=str, ensure_ascii=False) + "\n")
        elif fieldnames or rows:
            writer = csv.DictWriter(f, fieldnames=fieldnames or list(rows[0].keys()))
            writer.writeheader()
            writer.writerows(rows)

    logger.info("Saved %d rows to %s", len(rows), path)
    return path
