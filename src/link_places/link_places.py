"""Link location mentions to Wikidata places."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from common.throttle import FixedIntervalThrottle, RequestThrottle
from link_places.fetch_types import fetch_types
from link_places.models import LinkageResult
from link_places.normalize_terms import normalize_terms
from link_places.resolve_candidates import (
    DEFAULT_MAX_CANDIDATES,
    DEFAULT_SEARCH_LIMIT,
    resolve_candidates,
)
from wikidata_client.client import WikidataClient
from wikidata_client.queries import LANGUAGE_PATTERN, is_entity_id

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_INTERVAL = 1.0


def link_places(
    mentions: Iterable[str | None],
    exclusions: Mapping[str, str] | Iterable[str] | None,
    language: str,
    client: WikidataClient,
    throttle: RequestThrottle | None = None,
    max_candidates: int = DEFAULT_MAX_CANDIDATES,
    search_limit: int = DEFAULT_SEARCH_LIMIT,
) -> dict[str, LinkageResult]:
    """
    Link each distinct place name in `mentions` to one Wikidata entity.

    Each term is searched once; the types of all candidates are then
    fetched and the highest-ranked candidate without an excluded type wins.
    Remote failures for one term or entity never stop the batch; they
    leave that term unresolved or the entity untyped.

    Args:
        mentions: Raw location strings, possibly comma-separated
        exclusions: {type_id: description} (or plain type ids) to filter out
        language: Language code of the labels to search
        client: Wikidata client
        throttle: Paces remote calls (default: one call per second)
        max_candidates: Candidates kept per term
        search_limit: Search hits requested per term before ranking

    Returns:
        {term: LinkageResult} with one entry per distinct term

    Raises:
        ValueError: If the language, exclusions or limits are invalid
    """
    if not LANGUAGE_PATTERN.match(language):
        raise ValueError(f"Invalid language code: {language!r}")
    if max_candidates < 1:
        raise ValueError(f"max_candidates must be positive, got {max_candidates}")
    excluded_types = _exclusion_ids(exclusions)
    throttle = throttle or FixedIntervalThrottle(DEFAULT_REQUEST_INTERVAL)

    terms = normalize_terms(mentions)
    logger.info("Resolving %d distinct terms", len(terms))

    candidates: dict[str, list[str] | None] = {}
    for term in terms:
        throttle.acquire()
        candidates[term] = resolve_candidates(
            term,
            language,
            client,
            max_candidates=max_candidates,
            search_limit=search_limit,
        )

    candidate_ids = _collect_candidate_ids(candidates)
    logger.info("Fetching types for %d candidate entities", len(candidate_ids))

    properties: dict[str, set[str]] = {}
    for qid in candidate_ids:
        throttle.acquire()
        properties[qid] = fetch_types(qid, language, client)

    results: dict[str, LinkageResult] = {}
    for term in terms:
        ranked = candidates[term] or []
        chosen, excluded = _select_candidate(ranked, properties, excluded_types)
        results[term] = LinkageResult(
            term=term,
            wikidata_qid=chosen,
            candidates=list(ranked),
            excluded=excluded,
        )

    resolved = sum(1 for result in results.values() if result.resolved)
    logger.info(
        "Linked %d terms (%d resolved, %d unresolved)",
        len(results),
        resolved,
        len(results) - resolved,
    )
    return results


def _exclusion_ids(exclusions: Mapping[str, str] | Iterable[str] | None) -> set[str]:
    if not exclusions:
        return set()
    ids = set(exclusions.keys() if isinstance(exclusions, Mapping) else exclusions)
    invalid = sorted(i for i in ids if not is_entity_id(i))
    if invalid:
        raise ValueError(f"Invalid excluded type ids: {', '.join(invalid)}")
    return ids


def _collect_candidate_ids(candidates: Mapping[str, list[str] | None]) -> list[str]:
    """Flatten candidate lists into distinct ids, in first-seen order."""
    seen: dict[str, None] = {}
    for ranked in candidates.values():
        for qid in ranked or []:
            seen.setdefault(qid, None)
    return list(seen)


def _select_candidate(
    ranked: list[str],
    properties: Mapping[str, set[str]],
    excluded_types: set[str],
) -> tuple[str | None, list[str]]:
    """
    Pick the first candidate with no excluded type.

    Returns:
        (chosen id or None, candidates skipped before a choice was made)
    """
    skipped: list[str] = []
    for qid in ranked:
        if properties.get(qid, set()) & excluded_types:
            skipped.append(qid)
            continue
        return qid, skipped
    return None, skipped
