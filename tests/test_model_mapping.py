import json

import pytest

from poe_gateway.services.model_mapping import ModelMappingTable


def test_resolve_forward_reverse_and_unknown(mapping):
    assert mapping.resolve("gpt-4o") == "GPT-4o"
    assert mapping.resolve("claude-3-5-sonnet") == "Claude-3.5-Sonnet"
    # Already an upstream id
    assert mapping.resolve("Claude-3.5-Sonnet") == "Claude-3.5-Sonnet"
    assert mapping.resolve("some-unknown-model") == "some-unknown-model"


def test_reverse_map_last_write_wins(mapping):
    assert mapping.reverse["GPT-4o"] == "gpt-4"
    assert mapping.forward["gpt-4o"] == "GPT-4o"


def test_model_ids_are_deduplicated_in_order():
    table = ModelMappingTable({"a": "A", "b": "A", "A": "x"})
    assert table.model_ids() == ["a", "b", "A", "x"]


def test_table_is_read_only(mapping):
    with pytest.raises(TypeError):
        mapping.forward["new"] = "value"
    with pytest.raises(TypeError):
        mapping.reverse["new"] = "value"


def test_load_from_file(tmp_path):
    path = tmp_path / "models.json"
    path.write_text(json.dumps({"gpt-4o": "GPT-4o"}), encoding="utf-8")

    table = ModelMappingTable.load(str(path))

    assert len(table) == 1
    assert table.resolve("gpt-4o") == "GPT-4o"


def test_load_missing_file_gives_empty_table(tmp_path, caplog):
    table = ModelMappingTable.load(str(tmp_path / "missing.json"))

    assert len(table) == 0
    assert table.model_ids() == []
    assert table.resolve("gpt-4o") == "gpt-4o"
    assert "Could not load model mapping" in caplog.text


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]", '{"gpt-4o": 5}'])
def test_load_bad_document_gives_empty_table(tmp_path, content):
    path = tmp_path / "models.json"
    path.write_text(content, encoding="utf-8")

    table = ModelMappingTable.load(str(path))

    assert len(table) == 0
    assert table.resolve("gpt-4o") == "gpt-4o"
