"""Fetch the "instance of" types of an entity."""

from __future__ import annotations

import logging

from wikidata_client.client import WikidataClient
from wikidata_client.queries import INSTANCE_OF

logger = logging.getLogger(__name__)


def fetch_types(qid: str, language: str, client: WikidataClient) -> set[str]:
    """
    Return the ids of the P31 (instance of) values of `qid`.

    A failed lookup yields an empty set, so the entity counts as having
    no excluded type.
    """
    result = client.get_entity(qid, language)
    if not result.ok:
        logger.warning("Type lookup failed for %s: %s", qid, result.error)
        return set()

    types = _instance_of_ids(result.value)
    logger.debug("Types of %s: %s", qid, ", ".join(sorted(types)) or "none")
    return types


def _instance_of_ids(entity: dict) -> set[str]:
    claims = entity.get("claims") or {}
    statements = claims.get(INSTANCE_OF) if isinstance(claims, dict) else None
    types: set[str] = set()
    for claim in statements if isinstance(statements, list) else []:
        if not isinstance(claim, dict):
            continue
        # novalue/somevalue snaks carry no datavalue
        mainsnak = claim.get("mainsnak")
        datavalue = mainsnak.get("datavalue") if isinstance(mainsnak, dict) else None
        value = datavalue.get("value") if isinstance(datavalue, dict) else None
        if isinstance(value, dict) and isinstance(value.get("id"), str) and value["id"]:
            types.add(value["id"])
    return types
