"""Extract place mentions from free text using spaCy."""

from __future__ import annotations

import logging
import re
from typing import Iterable

import spacy

logger = logging.getLogger(__name__)

PLACE_LABELS = ("GPE", "LOC")


def _clean_entity_text(text: str) -> str:
    name = text.replace("\n", " ").replace(",", " ").strip()
    if name.endswith(("'s", "’s")):
        name = name[:-2]
    name = re.sub(r"[^\w]+$", "", name)
    return re.sub(r"\s+", " ", name).strip()


def extract_place_mentions(
    texts: Iterable[str | None],
    model: str,
    batch_size: int = 32,
    labels: Iterable[str] = PLACE_LABELS,
) -> list[str]:
    """
    Extract place names from each text.

    Args:
        texts: Free texts; None is treated as empty.
        model: spaCy model to load for NER.
        batch_size: Batch size for spaCy pipeline.
        labels: Entity labels that count as places.

    Returns:
        One comma-joined mention string per input text ("" if none found).
    """
    texts = [text or "" for text in texts]
    if not any(texts):
        logger.warning("No text available for place extraction")
        return [""] * len(texts)

    allowed_labels = set(labels)
    logger.info("Loading spaCy model: %s", model)
    nlp = spacy.load(model)

    mentions: list[str] = []
    total = 0
    for doc in nlp.pipe(texts, batch_size=batch_size):
        names: list[str] = []
        for ent in doc.ents:
            if ent.label_ not in allowed_labels:
                continue
            name = _clean_entity_text(ent.text)
            if name and name not in names:
                names.append(name)
        total += len(names)
        mentions.append(", ".join(names))

    logger.info("Extracted %d place mentions from %d texts", total, len(texts))
    return mentions
