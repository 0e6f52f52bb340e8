"""HTTP client for the Wikidata query service and entity API."""

from __future__ import annotations

import logging
from typing import Any

import requests

from wikidata_client.models import FetchError, FetchResult, SetupError
from wikidata_client.queries import CONNECTION_CHECK_QUERY

logger = logging.getLogger(__name__)

DEFAULT_SPARQL_URL = "https://query.wikidata.org/sparql"
DEFAULT_API_URL = "https://www.wikidata.org/w/api.php"
DEFAULT_USER_AGENT = "place-linker/0.1 (https://github.com/place-linker/place-linker)"
DEFAULT_TIMEOUT = 30


class WikidataClient:
    """
    Read-only access to Wikidata.

    Every call returns a FetchResult instead of raising, so callers can
    decide per item how to treat a failure.
    """

    def __init__(
        self,
        sparql_url: str = DEFAULT_SPARQL_URL,
        api_url: str = DEFAULT_API_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.sparql_url = sparql_url
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

    def __enter__(self) -> WikidataClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def run_sparql(self, query: str) -> FetchResult[list[dict]]:
        """Run a SELECT query and return its result bindings."""
        result = self._get_json(
            self.sparql_url,
            params={"query": query, "format": "json"},
            headers={"Accept": "application/sparql-results+json"},
        )
        if not result.ok:
            return result

        try:
            bindings = result.value["results"]["bindings"]
        except (KeyError, TypeError):
            return FetchResult(
                error=FetchError("malformed", "SPARQL response has no results.bindings")
            )
        if not isinstance(bindings, list):
            return FetchResult(
                error=FetchError("malformed", "SPARQL results.bindings is not a list")
            )
        return FetchResult(value=[b for b in bindings if isinstance(b, dict)])

    def get_entity(self, qid: str, language: str) -> FetchResult[dict]:
        """Fetch the claims document of one entity."""
        result = self._get_json(
            self.api_url,
            params={
                "action": "wbgetentities",
                "ids": qid,
                "languages": language,
                "props": "claims",
                "format": "json",
            },
        )
        if not result.ok:
            return result

        payload = result.value
        if not isinstance(payload, dict):
            return FetchResult(error=FetchError("malformed", "Entity response is not an object"))
        if "error" in payload:
            error = payload["error"]
            if not isinstance(error, dict):
                return FetchResult(error=FetchError("api", str(error)))
            return FetchResult(
                error=FetchError("api", f"{error.get('code')}: {error.get('info')}")
            )

        entities = payload.get("entities") or {}
        if not isinstance(entities, dict):
            return FetchResult(
                error=FetchError("malformed", "Entity response has no entities object")
            )
        entity = entities.get(qid)
        if entity is None and len(entities) == 1:
            # Redirected ids come back keyed by their target
            entity = next(iter(entities.values()))
        if isinstance(entity, dict) and "missing" in entity:
            entity = None
        if entity is None:
            return FetchResult(error=FetchError("api", f"Entity {qid} not found"))
        if not isinstance(entity, dict) or not isinstance(entity.get("claims") or {}, dict):
            return FetchResult(
                error=FetchError("malformed", f"Entity {qid} is not a claims document")
            )
        return FetchResult(value=entity)

    def check_connection(self) -> None:
        """
        Verify both remote services answer.

        Raises:
            SetupError: If either service cannot be used
        """
        sparql = self.run_sparql(CONNECTION_CHECK_QUERY)
        if not sparql.ok:
            raise SetupError(f"Query service {self.sparql_url} unavailable: {sparql.error}")

        entity = self.get_entity("Q2", "en")
        if not entity.ok:
            raise SetupError(f"Entity API {self.api_url} unavailable: {entity.error}")

        logger.info("Connected to %s and %s", self.sparql_url, self.api_url)

    def _get_json(
        self,
        url: str,
        params: dict[str, str],
        headers: dict[str, str] | None = None,
    ) -> FetchResult[Any]:
        logger.debug("GET %s %s", url, params)
        try:
            response = self.session.get(
                url, params=params, headers=headers, timeout=self.timeout
            )
            response.raise_for_status()
        except requests.Timeout as exc:
            return FetchResult(error=FetchError("timeout", str(exc)))
        except requests.HTTPError as exc:
            status = getattr(exc.response, "status_code", None)
            return FetchResult(error=FetchError("http", str(exc), status_code=status))
        except requests.RequestException as exc:
            return FetchResult(error=FetchError("network", str(exc)))

        try:
            payload = response.json()
        except ValueError as exc:
            return FetchResult(error=FetchError("malformed", f"Invalid JSON: {exc}"))
        return FetchResult(value=payload)
