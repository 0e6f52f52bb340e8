"""YAML configuration loader for place linking."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from common.config import find_config_path, load_yaml
from wikidata_client.client import DEFAULT_API_URL, DEFAULT_SPARQL_URL, DEFAULT_USER_AGENT
from wikidata_client.queries import LANGUAGE_PATTERN, is_entity_id

CONFIG_DIR = Path(__file__).parent / "configs"
CONFIG_ENV_VAR = "LINK_PLACES_CONFIG"
USER_AGENT_ENV_VAR = "WIKIDATA_USER_AGENT"


@dataclass
class LinkConfig:
    """Configuration for the place linking pipeline."""

    language: str = "en"
    log_level: str = "INFO"

    # Remote services
    sparql_url: str = DEFAULT_SPARQL_URL
    api_url: str = DEFAULT_API_URL
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = 30
    request_interval: float = 1.0  # seconds between remote calls

    # Linking
    max_candidates: int = 3
    search_limit: int = 50
    exclusions: dict[str, str] = field(default_factory=dict)

    # Input
    mention_column: str = "location"
    spacy_model: str = "en_core_web_sm"

    def __post_init__(self) -> None:
        if not self.language or not LANGUAGE_PATTERN.match(self.language):
            raise ValueError(f"Invalid language: {self.language!r}")

        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")

        if self.request_interval < 0:
            raise ValueError(
                f"request_interval must not be negative, got {self.request_interval}"
            )

        if self.max_candidates < 1:
            raise ValueError(f"max_candidates must be at least 1, got {self.max_candidates}")

        if self.search_limit < self.max_candidates:
            raise ValueError(
                f"search_limit ({self.search_limit}) must not be smaller than "
                f"max_candidates ({self.max_candidates})"
            )

        invalid = sorted(qid for qid in self.exclusions if not is_entity_id(qid))
        if invalid:
            raise ValueError(f"Invalid exclusion ids: {', '.join(invalid)}")

        if not self.mention_column:
            raise ValueError("mention_column must not be empty")


def _parse_exclusions(value: object) -> dict[str, str]:
    """Accept {id: description} or a list of ids."""
    if not value:
        return {}
    if isinstance(value, dict):
        return {str(k): str(v) for k, v in value.items()}
    if isinstance(value, list):
        return {str(qid): "exclude this type" for qid in value}
    raise ValueError(f"exclusions must be a mapping or a list, got {type(value).__name__}")


def _parse_config(data: dict) -> LinkConfig:
    """Parse config dictionary into LinkConfig object."""
    wikidata = data.get("wikidata", {}) or {}
    linking = data.get("linking", {}) or {}
    input_data = data.get("input", {}) or {}

    user_agent = os.environ.get(
        USER_AGENT_ENV_VAR, wikidata.get("user_agent", DEFAULT_USER_AGENT)
    )

    return LinkConfig(
        language=data.get("language", "en"),
        log_level=data.get("log_level", "INFO"),
        sparql_url=wikidata.get("sparql_url", DEFAULT_SPARQL_URL),
        api_url=wikidata.get("api_url", DEFAULT_API_URL),
        user_agent=user_agent,
        request_timeout=wikidata.get("request_timeout", 30),
        request_interval=wikidata.get("request_interval", 1.0),
        max_candidates=linking.get("max_candidates", 3),
        search_limit=linking.get("search_limit", 50),
        exclusions=_parse_exclusions(linking.get("exclusions")),
        mention_column=input_data.get("mention_column", "location"),
        spacy_model=input_data.get("spacy_model", "en_core_web_sm"),
    )


def load_config(config_name: str | None = None) -> LinkConfig:
    """Load linking config by name (e.g. 'default') or path.

    Args:
        config_name: Config name without extension, or path to a YAML file.
                    If None, uses LINK_PLACES_CONFIG env var or "default".

    Returns:
        LinkConfig instance

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the config values are invalid
    """
    config_path = find_config_path(config_name, CONFIG_DIR, env_var=CONFIG_ENV_VAR)
    return _parse_config(load_yaml(config_path))
