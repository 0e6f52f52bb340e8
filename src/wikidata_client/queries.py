"""SPARQL templates and identifier helpers for Wikidata."""

from __future__ import annotations

import re

ENTITY_URI_PREFIX = "http://www.wikidata.org/entity/"
ENTITY_ID_PATTERN = re.compile(r"^[A-Z]\d+$")
LANGUAGE_PATTERN = re.compile(r"^[a-z]{2,3}(-[a-z0-9]+)*$")

INSTANCE_OF = "P31"
COORDINATE_LOCATION = "P625"
DISAMBIGUATION_PAGE = "Q4167410"

# Entity search restricted to items with coordinates, minus disambiguation
# pages, ranked by number of sitelinks.
PLACE_SEARCH_QUERY = """
SELECT ?item (COUNT(DISTINCT ?sitelink) AS ?sitelinks) WHERE {{
  SERVICE wikibase:mwapi {{
    bd:serviceParam wikibase:api "EntitySearch" ;
                    wikibase:endpoint "www.wikidata.org" ;
                    mwapi:search "{term}" ;
                    mwapi:language "{language}" .
    ?item wikibase:apiOutputItem mwapi:item .
  }}
  ?item wdt:{coordinate_property} ?coordinates .
  MINUS {{ ?item wdt:{instance_of} wd:{disambiguation_page} . }}
  OPTIONAL {{ ?sitelink schema:about ?item . }}
}}
GROUP BY ?item
ORDER BY DESC(?sitelinks)
LIMIT {limit}
"""

CONNECTION_CHECK_QUERY = "SELECT ?item WHERE { BIND(wd:Q2 AS ?item) }"


def escape_literal(value: str) -> str:
    """Escape a string for use inside a double-quoted SPARQL literal."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )


def build_place_search_query(term: str, language: str, limit: int = 50) -> str:
    """
    Build the SPARQL query searching places whose label matches `term`.

    Raises:
        ValueError: If the language code or limit is invalid
    """
    if not LANGUAGE_PATTERN.match(language):
        raise ValueError(f"Invalid language code: {language!r}")
    if limit < 1:
        raise ValueError(f"Search limit must be positive, got {limit}")
    return PLACE_SEARCH_QUERY.format(
        term=escape_literal(term),
        language=language,
        coordinate_property=COORDINATE_LOCATION,
        instance_of=INSTANCE_OF,
        disambiguation_page=DISAMBIGUATION_PAGE,
        limit=limit,
    )


def entity_id_from_uri(uri: str) -> str | None:
    """Return the id of an entity URI (or bare id), None if it isn't one."""
    entity_id = uri.rsplit("/", 1)[-1] if uri.startswith(ENTITY_URI_PREFIX) else uri
    return entity_id if ENTITY_ID_PATTERN.match(entity_id) else None


def is_entity_id(value: str) -> bool:
    """Return True if the value looks like an entity id (Q123, P31)."""
    return bool(ENTITY_ID_PATTERN.match(value))
