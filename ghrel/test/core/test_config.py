"""Tests for core/config.py."""

from __future__ import annotations

from pathlib import Path

from ghrel.core.config import (
    DEFAULT_API_URL,
    DEFAULT_TAG_MESSAGE,
    Config,
    LabelPolicy,
    load_config,
)
from ghrel.core.result import Err, Ok


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "ghrel.toml"
    path.write_text(text, encoding="utf-8")
    return path


class TestConfigFromDict:
    def test_defaults(self) -> None:
        config = Config.from_dict({})

        assert config.github.api_url == DEFAULT_API_URL
        assert config.github.per_page == 100
        assert config.labels.major == "major"
        assert config.labels.policy is LabelPolicy.LATEST_PR
        assert config.release.tag_prefix == ""
        assert config.release.tag_message == DEFAULT_TAG_MESSAGE

    def test_overrides(self) -> None:
        config = Config.from_dict(
            {
                "github": {"api_url": "https://ghe.example.com/api/v3/", "per_page": 50},
                "labels": {"major": "breaking", "policy": "strongest_label"},
                "release": {"tag_prefix": "v"},
            }
        )

        assert config.github.api_url == "https://ghe.example.com/api/v3"
        assert config.github.per_page == 50
        assert config.labels.major == "breaking"
        assert config.labels.minor == "minor"
        assert config.labels.policy is LabelPolicy.STRONGEST_LABEL
        assert config.release.tag_prefix == "v"


class TestLoadConfig:
    def test_load_valid_file(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            '[github]\ntimeout = 5\n\n[labels]\npatch = "fix"\n',
        )

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.github.timeout == 5.0
        assert result.value.labels.patch == "fix"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "nope.toml")

        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        result = load_config(_write(tmp_path, "[github\n"))

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message

    def test_unknown_policy_is_rejected(self, tmp_path: Path) -> None:
        result = load_config(_write(tmp_path, '[labels]\npolicy = "newest"\n'))

        assert isinstance(result, Err)
        assert "labels.policy" in result.error.message

    def test_per_page_out_of_range(self, tmp_path: Path) -> None:
        result = load_config(_write(tmp_path, "[github]\nper_page = 500\n"))

        assert isinstance(result, Err)
        assert "per_page" in result.error.message

    def test_duplicate_label_names(self, tmp_path: Path) -> None:
        result = load_config(_write(tmp_path, '[labels]\nmajor = "bump"\nminor = "bump"\n'))

        assert isinstance(result, Err)
        assert "distinct" in result.error.message
