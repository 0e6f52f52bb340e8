"""Tests for common.serialization module."""

from dataclasses import dataclass

from common.serialization import serialize_dataclass
from link_places.models import LinkageResult


@dataclass
class SampleData:
    name: str
    value: int


class TestSerializeDataclass:
    def test_basic_dataclass_to_dict(self) -> None:
        obj = SampleData(name="test", value=42)
        result = serialize_dataclass(obj)
        assert result == {"name": "test", "value": 42}

    def test_linkage_result(self) -> None:
        result = serialize_dataclass(
            LinkageResult(term="Atlantis", wikidata_qid=None, candidates=[], excluded=[])
        )
        assert result == {
            "term": "Atlantis",
            "wikidata_qid": None,
            "candidates": [],
            "excluded": [],
        }
