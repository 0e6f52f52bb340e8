"""Search Wikidata for places matching a term and rank them."""

from __future__ import annotations

import logging

from link_places.models import PlaceCandidate
from wikidata_client.client import WikidataClient
from wikidata_client.queries import build_place_search_query, entity_id_from_uri

logger = logging.getLogger(__name__)

DEFAULT_MAX_CANDIDATES = 3
DEFAULT_SEARCH_LIMIT = 50


def resolve_candidates(
    term: str,
    language: str,
    client: WikidataClient,
    max_candidates: int = DEFAULT_MAX_CANDIDATES,
    search_limit: int = DEFAULT_SEARCH_LIMIT,
) -> list[str] | None:
    """
    Find up to `max_candidates` places whose label in `language` matches `term`.

    Only items with a coordinate location qualify and disambiguation pages
    are left out. Candidates are ranked by sitelink count, ties by numeric id.

    Returns:
        Ranked entity ids, or None if nothing matched or the search failed
    """
    query = build_place_search_query(term, language, limit=search_limit)
    result = client.run_sparql(query)
    if not result.ok:
        logger.warning("Candidate search failed for %r: %s", term, result.error)
        return None

    candidates = _parse_candidates(result.value)
    if not candidates:
        logger.info("No place candidates found for %r", term)
        return None

    ranked = _rank_candidates(candidates)[:max_candidates]
    logger.debug(
        "Candidates for %r: %s",
        term,
        ", ".join(f"{c.wikidata_qid} ({c.sitelinks})" for c in ranked),
    )
    return [c.wikidata_qid for c in ranked]


def _parse_candidates(bindings: list[dict]) -> list[PlaceCandidate]:
    """Convert SPARQL bindings to candidates, one per entity id."""
    by_qid: dict[str, PlaceCandidate] = {}
    for binding in bindings:
        if not isinstance(binding, dict):
            continue
        uri = _binding_value(binding, "item")
        qid = entity_id_from_uri(uri) if isinstance(uri, str) else None
        if qid is None:
            logger.debug("Skipping non-entity search result %r", uri)
            continue

        raw_count = _binding_value(binding, "sitelinks") or 0
        try:
            sitelinks = int(raw_count)
        except (TypeError, ValueError):
            sitelinks = 0

        existing = by_qid.get(qid)
        if existing is None or sitelinks > existing.sitelinks:
            by_qid[qid] = PlaceCandidate(wikidata_qid=qid, sitelinks=sitelinks)
    return list(by_qid.values())


def _binding_value(binding: dict, name: str):
    cell = binding.get(name)
    return cell.get("value") if isinstance(cell, dict) else None


def _rank_candidates(candidates: list[PlaceCandidate]) -> list[PlaceCandidate]:
    """Sort by sitelinks (descending), then by numeric id (ascending)."""
    return sorted(candidates, key=lambda c: (-c.sitelinks, int(c.wikidata_qid[1:])))
