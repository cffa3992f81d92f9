"""Tests for tunable configuration dataclasses."""

import json

from streetwise.config import FetchConfig, QualityScoreWeights, TopicWeights


class TestFromEnv:
    """Tests for environment overrides."""

    def test_defaults_without_env(self, monkeypatch):
        monkeypatch.delenv("STREETWISE_FETCH_MAX_RETRIES", raising=False)

        config = FetchConfig.from_env()

        assert config.max_retries == 2
        assert config.min_quality_score == 30
        assert config.low_quality_delay == 2.0
        assert config.network_error_delay == 3.0

    def test_int_and_float_overrides(self, monkeypatch):
        monkeypatch.setenv("STREETWISE_FETCH_MAX_RETRIES", "4")
        monkeypatch.setenv("STREETWISE_FETCH_LOW_QUALITY_DELAY", "0.5")

        config = FetchConfig.from_env()

        assert config.max_retries == 4
        assert config.low_quality_delay == 0.5

    def test_invalid_value_keeps_default(self, monkeypatch):
        monkeypatch.setenv("STREETWISE_TOPIC_PHRASE_MULTIPLIER", "lots")

        assert TopicWeights.from_env().phrase_multiplier == 1.2


class TestFileRoundTrip:
    """Tests for JSON file loading and saving."""

    def test_missing_file_gives_defaults(self, tmp_path):
        weights = QualityScoreWeights.from_file(str(tmp_path / "missing.json"))

        assert weights.to_dict() == QualityScoreWeights().to_dict()

    def test_top_level_values(self, tmp_path):
        path = tmp_path / "weights.json"
        path.write_text(json.dumps({"has_h1": 12, "unknown": 1}))

        weights = QualityScoreWeights.from_file(str(path))

        assert weights.has_h1 == 12
        assert weights.has_h2 == 7

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "topic.json"
        TopicWeights(heading=9).save_to_file(str(path))

        saved = json.loads(path.read_text())
        assert saved["thresholds"]["heading"] == 9
        assert TopicWeights.from_file(str(path)).heading == 9
