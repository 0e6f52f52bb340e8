"""CLI for linking location mentions to Wikidata entities."""

from __future__ import annotations

import dataclasses
import logging
import sys
from typing import Sequence

from dotenv import load_dotenv

from common.cli_helpers import setup_logging
from common.local_io import read_table, table_format, write_table
from common.serialization import serialize_dataclass
from common.throttle import FixedIntervalThrottle
from link_places.config import LinkConfig, load_config
from link_places.helpers import collect_column, parse_link_places_args
from link_places.link_places import link_places
from link_places.models import LinkageResult
from wikidata_client.client import WikidataClient
from wikidata_client.models import SetupError

logger = logging.getLogger(__name__)

OUTPUT_COLUMNS = ["term", "wikidata_qid", "candidates", "excluded"]


def _apply_overrides(config: LinkConfig, args) -> LinkConfig:
    """Return config with CLI flags applied (re-validated)."""
    overrides = {}
    if args.lang is not None:
        overrides["language"] = args.lang
    if args.column is not None:
        overrides["mention_column"] = args.column
    if args.spacy_model is not None:
        overrides["spacy_model"] = args.spacy_model
    if args.interval is not None:
        overrides["request_interval"] = args.interval
    if args.max_candidates is not None:
        overrides["max_candidates"] = args.max_candidates
    if args.exclude:
        exclusions = dict(config.exclusions)
        for qid in args.exclude:
            exclusions.setdefault(qid, "exclude this type")
        overrides["exclusions"] = exclusions
    return dataclasses.replace(config, **overrides)


def _to_row(result: LinkageResult, flat: bool) -> dict:
    """CSV rows join id lists and leave unresolved ids empty; JSONL keeps them as is."""
    if not flat:
        return serialize_dataclass(result)
    return {
        "term": result.term,
        "wikidata_qid": result.wikidata_qid or "",
        "candidates": ",".join(result.candidates),
        "excluded": ",".join(result.excluded),
    }


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_link_places_args(argv)

    load_dotenv()
    setup_logging("DEBUG" if args.verbose else "INFO")

    try:
        config = _apply_overrides(load_config(args.config), args)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1

    if not args.verbose:
        setup_logging(config.log_level)

    try:
        table_format(args.out)
        rows = read_table(args.input)
        mentions = collect_column(rows, config.mention_column)
        if args.text_column:
            from link_places.extract_mentions import extract_place_mentions

            texts = collect_column(rows, args.text_column)
            mentions.extend(extract_place_mentions(texts, config.spacy_model))
    except (OSError, ValueError) as exc:
        logger.error("Cannot read input: %s", exc)
        return 1

    with WikidataClient(
        sparql_url=config.sparql_url,
        api_url=config.api_url,
        user_agent=config.user_agent,
        timeout=config.request_timeout,
    ) as client:
        if args.preflight:
            try:
                client.check_connection()
            except SetupError as exc:
                logger.error("Preflight failed: %s", exc)
                return 1

        results = link_places(
            mentions,
            config.exclusions,
            config.language,
            client,
            throttle=FixedIntervalThrottle(config.request_interval),
            max_candidates=config.max_candidates,
            search_limit=config.search_limit,
        )

    flat = not args.out.lower().endswith(".jsonl")
    try:
        filepath = write_table(
            [_to_row(result, flat) for result in results.values()],
            args.out,
            fieldnames=OUTPUT_COLUMNS,
        )
    except OSError as exc:
        logger.error("Cannot write output: %s", exc)
        return 1

    unresolved = [term for term, result in results.items() if not result.resolved]
    if unresolved:
        logger.warning("Unresolved terms: %s", ", ".join(unresolved))
    logger.info(
        "Wrote %d linked terms (%d unresolved) to %s",
        len(results),
        len(unresolved),
        filepath,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
