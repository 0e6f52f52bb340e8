"""Data models for the place linking pipeline."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class PlaceCandidate:
    """Search hit for a term, scored by its number of sitelinks."""
    wikidata_qid: str
    sitelinks: int


@dataclass
class LinkageResult:
    """Outcome of linking one search term."""
    term: str
    wikidata_qid: Optional[str]  # None means unresolved
    candidates: list[str] = field(default_factory=list)
    excluded: list[str] = field(default_factory=list)  # candidates dropped by type

    @property
    def resolved(self) -> bool:
        """Whether a candidate survived exclusion filtering."""
        return self.wikidata_qid is not None
