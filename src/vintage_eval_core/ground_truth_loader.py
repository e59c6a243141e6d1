"""
Ground Truth Loader

Loads the curated ground-truth corpus from JSON files and provides lookup by item id.
"""

import json
from dataclasses import dataclass
from pathlib import Path

from vintage_eval_core.domain.entities import ExpectedIdentification, GroundTruthItem
from vintage_eval_core.domain.exceptions import CorpusLookupError
from vintage_eval_core.domain.value_objects import EraRange


@dataclass
class GroundTruthCorpus:
    """Ordered collection of ground-truth items"""
    corpus_id: str
    name: str
    description: str
    version: str
    items: list[GroundTruthItem]

    def __len__(self) -> int:
        return len(self.items)

    def find(self, item_id: str) -> GroundTruthItem:
        """
        Look up an item by id

        Raises:
            CorpusLookupError: If no item has this id
        """
        for item in self.items:
            if item.id == item_id:
                return item
        raise CorpusLookupError(item_id)

    def select(self, item_ids: list[str]) -> list[GroundTruthItem]:
        """
        Pick items by id, in the order given

        Raises:
            CorpusLookupError: If any id is unknown
        """
        return [self.find(item_id) for item_id in item_ids]


def _parse_expected(data: dict) -> ExpectedIdentification:
    """
    Create an ExpectedIdentification from dictionary data

    Args:
        data: The "expected" sub-record of an item

    Returns:
        ExpectedIdentification
    """
    era_range = data["era_range"]
    return ExpectedIdentification(
        name=data["name"],
        name_keywords=list(data["name_keywords"]),
        era=data["era"],
        era_range=EraRange(start=int(era_range["start"]), end=int(era_range["end"])),
        style=data["style"],
        category=data["category"],
        domain_expert=data["domain_expert"],
        origin_region=data["origin_region"],
        value_min=data["value_min"],
        value_max=data["value_max"],
        must_identify_features=list(data["must_identify_features"]),
        difficulty=data["difficulty"],
        # Optional fields
        maker=data.get("maker"),
        maker_alternatives=data.get("maker_alternatives"),
        style_alternatives=data.get("style_alternatives"),
        authentication_markers=data.get("authentication_markers"),
        red_flags=data.get("red_flags"),
        value_source=data.get("value_source", ""),
        test_reason=data.get("test_reason", ""),
    )


def parse_item(data: dict) -> GroundTruthItem:
    """
    Create a GroundTruthItem from dictionary data

    Raises:
        KeyError: If a required field is missing
        ValueError: If the record violates an invariant (e.g. value_min > value_max)
    """
    return GroundTruthItem(
        id=data["id"],
        expected=_parse_expected(data["expected"]),
        image_url=data.get("image_url", ""),
        image_description=data.get("image_description", ""),
    )


def load_corpus(file_path: str | Path) -> GroundTruthCorpus:
    """
    Load a ground-truth corpus JSON

    Args:
        file_path: Path to the corpus JSON file

    Returns:
        GroundTruthCorpus: Corpus with items in file order

    Raises:
        FileNotFoundError: If the file does not exist
        KeyError: If a required field is missing
        ValueError: If item ids are duplicated or the corpus has no items
    """
    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    required_fields = ["corpus_id", "name", "items"]
    for field in required_fields:
        if field not in data:
            raise KeyError(f"Required field '{field}' is missing: {file_path}")

    items = [parse_item(item_data) for item_data in data["items"]]
    if not items:
        raise ValueError(f"Corpus contains no items: {file_path}")

    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"Duplicate item id '{item.id}': {file_path}")
        seen.add(item.id)

    return GroundTruthCorpus(
        corpus_id=data["corpus_id"],
        name=data["name"],
        description=data.get("description", ""),
        version=data.get("version", "1.0"),
        items=items,
    )
