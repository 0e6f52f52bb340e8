"""Tests for link_places.extract_mentions module."""

from unittest.mock import MagicMock, patch

from link_places.extract_mentions import _clean_entity_text, extract_place_mentions


def _ent(text: str, label: str) -> MagicMock:
    ent = MagicMock()
    ent.text = text
    ent.label_ = label
    return ent


def _doc(*ents) -> MagicMock:
    doc = MagicMock()
    doc.ents = list(ents)
    return doc


class TestCleanEntityText:
    def test_strips_possessive(self) -> None:
        assert _clean_entity_text("Bavaria's") == "Bavaria"

    def test_removes_commas_and_newlines(self) -> None:
        assert _clean_entity_text("Washington,\nD.C.") == "Washington D.C"

    def test_strips_trailing_punctuation(self) -> None:
        assert _clean_entity_text("Augsburg!") == "Augsburg"


class TestExtractPlaceMentions:
    @patch("link_places.extract_mentions.spacy")
    def test_returns_one_mention_string_per_text(self, mock_spacy) -> None:
        nlp = MagicMock()
        nlp.pipe.return_value = [
            _doc(_ent("Augsburg", "GPE"), _ent("Angela Merkel", "PERSON"), _ent("Alps", "LOC")),
            _doc(),
            _doc(_ent("Berlin", "GPE"), _ent("Berlin", "GPE")),
        ]
        mock_spacy.load.return_value = nlp

        result = extract_place_mentions(
            ["Merkel visited Augsburg near the Alps.", "Nothing here.", "Berlin, Berlin"],
            model="de_core_news_sm",
            batch_size=8,
        )

        assert result == ["Augsburg, Alps", "", "Berlin"]
        mock_spacy.load.assert_called_once_with("de_core_news_sm")
        _, kwargs = nlp.pipe.call_args
        assert kwargs["batch_size"] == 8

    @patch("link_places.extract_mentions.spacy")
    def test_custom_labels(self, mock_spacy) -> None:
        nlp = MagicMock()
        nlp.pipe.return_value = [_doc(_ent("Augsburg", "GPE"), _ent("Lech", "LOC"))]
        mock_spacy.load.return_value = nlp

        assert extract_place_mentions(["x"], model="m", labels=["LOC"]) == ["Lech"]

    @patch("link_places.extract_mentions.spacy")
    def test_empty_texts_skip_model_loading(self, mock_spacy) -> None:
        assert extract_place_mentions(["", None], model="m") == ["", ""]
        mock_spacy.load.assert_not_called()
