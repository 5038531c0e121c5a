"""Tests for JSON file bootstrapping, loading and output."""

import json

import pytest

from settings_matcher.config.loader import init_config, init_records, write_output
from settings_matcher.config.models import (
    MatcherConfig,
    MatchResult,
    MetricKind,
    MetricSpec,
    Record
)
from settings_matcher.core.errors import ConfigError, StorageError


class TestInitConfig:
    """Tests for the settings file."""

    def test_creates_default_file(self, tmp_path):
        path = tmp_path / "settings.json"

        config = init_config(path)

        assert config == MatcherConfig()
        data = json.loads(path.read_text())
        assert data["num_threads"] == 2
        assert data["similarities_types"][0] == {"Hamming": 100}
        assert data["similarities_types"][3] == {"OsaDistance": 100}
        assert len(data["similarities_types"]) == 9

    def test_default_file_is_pretty_printed(self, tmp_path):
        path = tmp_path / "settings.json"
        init_config(path)
        assert path.read_text().startswith('{\n  "num_threads": 2,')

    def test_loads_existing_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({
            "num_threads": 6,
            "similarities_types": [{"SorensenDice": 0.7}]
        }))

        config = init_config(path)

        assert config.worker_count == 6
        assert config.metrics == (MetricSpec(MetricKind.SORENSEN_DICE, 0.7),)

    def test_existing_file_not_overwritten(self, tmp_path):
        path = tmp_path / "settings.json"
        contents = '{"num_threads": 1, "similarities_types": [{"Jaro": 0.5}]}'
        path.write_text(contents)

        init_config(path)

        assert path.read_text() == contents

    def test_empty_metric_list(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text('{"num_threads": 1, "similarities_types": []}')

        with pytest.raises(ConfigError, match="Similarity types settings not found"):
            init_config(path)

    def test_malformed_content_names_file(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text('{"num_threads": 2, "similarities_types": [{"Hamming": "x"}]}')

        with pytest.raises(ConfigError) as info:
            init_config(path)

        assert "Hamming threshold must be a number" in str(info.value)
        assert str(path) in str(info.value)

    def test_zero_threads_accepted(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text('{"num_threads": 0, "similarities_types": [{"Levenshtein": 0}]}')

        assert init_config(path).worker_count == 0

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json")

        with pytest.raises(StorageError) as info:
            init_config(path)

        assert info.value.path == path
        assert "settings" in str(info.value)

    def test_unreadable_path(self, tmp_path):
        with pytest.raises(StorageError, match="Read settings file"):
            init_config(tmp_path)

    def test_missing_directory(self, tmp_path):
        with pytest.raises(StorageError, match="Write settings file"):
            init_config(tmp_path / "missing" / "settings.json")


class TestInitRecords:
    """Tests for the products file."""

    def test_creates_empty_file(self, tmp_path):
        path = tmp_path / "products.json"

        records = init_records(path)

        assert records == []
        assert json.loads(path.read_text()) == []

    def test_loads_records(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text(json.dumps([
            {"id": "u1", "name": "applesauce", "settings_id": []},
            {"id": "s1", "name": "applesause", "settings_id": ["catA"]},
        ]))

        records = init_records(path)

        assert [r.identifier for r in records] == ["u1", "s1"]
        assert records[1].settings == ("catA",)

    def test_malformed_record_names_file(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text('[{"id": "u1", "name": "applesauce"}]')

        with pytest.raises(ConfigError, match="products.json"):
            init_records(path)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text('{"id": "u1"}')

        with pytest.raises(ConfigError, match="Records must be a list"):
            init_records(path)


class TestWriteOutput:
    """Tests for the output file."""

    def test_writes_results(self, tmp_path):
        path = tmp_path / "output.json"
        results = [
            MatchResult("u1", "applesauce", ("catB",)),
            MatchResult("u2", "tea", ("catA", "catC")),
        ]

        assert write_output(results, path) == path

        assert json.loads(path.read_text()) == [
            {"id": "u1", "name": "applesauce", "settings_id": ["catB"]},
            {"id": "u2", "name": "tea", "settings_id": ["catA", "catC"]},
        ]

    def test_overwrites_previous_output(self, tmp_path):
        path = tmp_path / "output.json"
        path.write_text("previous content that is much longer than the new one" * 10)

        write_output([MatchResult("u1", "tea", ("a",))], path)

        assert json.loads(path.read_text()) == [
            {"id": "u1", "name": "tea", "settings_id": ["a"]}
        ]

    def test_output_readable_as_records(self, tmp_path):
        path = tmp_path / "output.json"
        write_output([MatchResult("u1", "tea", ("a",))], path)

        assert init_records(path) == [Record("u1", "tea", ("a",))]
