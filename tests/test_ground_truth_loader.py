"""
Tests for ground_truth_loader.py
"""

import json

import pytest

from vintage_eval_core.domain.constants import SMOKE_TEST_ITEM_IDS
from vintage_eval_core.domain.exceptions import CorpusLookupError
from vintage_eval_core.ground_truth_loader import load_corpus, parse_item


def _record(item_id="x-001", **expected_overrides):
    expected = {
        "name": "Sterling Silver Tea Service",
        "name_keywords": ["tea", "service", "sterling"],
        "era": "1920s",
        "era_range": {"start": 1920, "end": 1929},
        "style": "Art Deco",
        "category": "antique",
        "domain_expert": "silver",
        "origin_region": "USA",
        "value_min": 800,
        "value_max": 1500,
        "must_identify_features": ["Hallmarks"],
        "difficulty": "medium",
    }
    expected.update(expected_overrides)
    return {"id": item_id, "image_url": "https://example.org/x.jpg", "expected": expected}


def _write(tmp_path, data):
    path = tmp_path / "corpus.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadCoreCorpus:
    """The shipped core corpus"""

    def test_load(self, corpus_path):
        corpus = load_corpus(corpus_path)
        assert corpus.corpus_id == "ground_truth_core"
        assert len(corpus) == 8
        assert corpus.items[0].id == "furn-001"

    def test_smoke_items_present(self, corpus_path):
        corpus = load_corpus(corpus_path)
        assert [item.id for item in corpus.select(SMOKE_TEST_ITEM_IDS)] == SMOKE_TEST_ITEM_IDS

    def test_item_fields(self, corpus_path):
        item = load_corpus(corpus_path).find("furn-001")
        assert item.expected.maker == "Herman Miller"
        assert item.expected.era_range.start == 1956
        assert item.expected.value_min <= item.expected.value_max
        assert item.image_url.startswith("https://")

    def test_find_unknown(self, corpus_path):
        with pytest.raises(CorpusLookupError, match="Item not found: nope"):
            load_corpus(corpus_path).find("nope")


class TestParseItem:
    """parse_item"""

    def test_optional_fields_default(self):
        item = parse_item(_record())
        assert item.expected.maker is None
        assert item.expected.maker_alternatives is None
        assert item.expected.authentication_markers is None
        assert item.expected.value_source == ""
        assert item.image_description == ""

    def test_missing_required_field(self):
        record = _record()
        del record["expected"]["style"]
        with pytest.raises(KeyError):
            parse_item(record)

    def test_inverted_value_range(self):
        with pytest.raises(ValueError, match="must not exceed"):
            parse_item(_record(value_min=2000, value_max=100))

    def test_invalid_category(self):
        with pytest.raises(ValueError, match="Invalid category"):
            parse_item(_record(category="antiquities"))


class TestLoadCorpusErrors:
    """load_corpus error handling"""

    def test_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_corpus(tmp_path / "missing.json")

    def test_missing_top_level_field(self, tmp_path):
        path = _write(tmp_path, {"corpus_id": "c", "items": [_record()]})
        with pytest.raises(KeyError, match="name"):
            load_corpus(path)

    def test_empty_corpus(self, tmp_path):
        path = _write(tmp_path, {"corpus_id": "c", "name": "C", "items": []})
        with pytest.raises(ValueError, match="no items"):
            load_corpus(path)

    def test_duplicate_ids(self, tmp_path):
        path = _write(tmp_path, {"corpus_id": "c", "name": "C", "items": [_record("a"), _record("a")]})
        with pytest.raises(ValueError, match="Duplicate item id 'a'"):
            load_corpus(path)

    def test_defaults(self, tmp_path):
        path = _write(tmp_path, {"corpus_id": "c", "name": "C", "items": [_record()]})
        corpus = load_corpus(path)
        assert corpus.version == "1.0"
        assert corpus.description == ""
