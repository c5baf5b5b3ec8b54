"""Tests for HarvesterConfig."""

from __future__ import annotations

from pathlib import Path

import pytest

from net_harvester.config import HarvesterConfig


class TestDefaults:
    """Tests for default configuration values."""

    def test_defaults(self) -> None:
        config = HarvesterConfig()
        assert config.interval == 1.0
        assert config.flush_every == 60
        assert config.duration == 0
        assert config.provider == "auto"
        assert config.sysfs_root == "/sys/class/net"
        assert config.filter_patterns == []
        assert config.is_list_ignored is True
        assert config.start_paused is False

    def test_output_dir_coerced_to_path(self, tmp_path: Path) -> None:
        config = HarvesterConfig(output_dir=str(tmp_path))  # type: ignore[arg-type]
        assert isinstance(config.output_dir, Path)
        assert config.output_dir == tmp_path


class TestValidation:
    """Tests for __post_init__ validation."""

    @pytest.mark.parametrize("interval", [0, -1.5])
    def test_non_positive_interval(self, interval: float) -> None:
        with pytest.raises(ValueError, match="interval"):
            HarvesterConfig(interval=interval)

    def test_flush_every_below_one(self) -> None:
        with pytest.raises(ValueError, match="flush_every"):
            HarvesterConfig(flush_every=0)

    def test_negative_duration(self) -> None:
        with pytest.raises(ValueError, match="duration"):
            HarvesterConfig(duration=-1)

    def test_unknown_provider(self) -> None:
        with pytest.raises(ValueError, match="unknown provider 'sysinfo'"):
            HarvesterConfig(provider="sysinfo")


class TestBuildFilter:
    """Tests for HarvesterConfig.build_filter()."""

    def test_no_patterns_means_no_filter(self) -> None:
        assert HarvesterConfig().build_filter() is None

    def test_patterns_compiled_in_order(self) -> None:
        config = HarvesterConfig(filter_patterns=["^lo$", "^docker"])
        rules = config.build_filter()
        assert rules is not None
        assert [p.pattern for p in rules.patterns] == ["^lo$", "^docker"]
        assert rules.is_list_ignored

    def test_allow_list_polarity(self) -> None:
        config = HarvesterConfig(filter_patterns=["^eth"], is_list_ignored=False)
        rules = config.build_filter()
        assert rules is not None
        assert rules.includes("eth0")
        assert not rules.includes("wlan0")

    def test_invalid_pattern(self) -> None:
        config = HarvesterConfig(filter_patterns=["(unclosed"])
        with pytest.raises(ValueError, match="invalid interface pattern"):
            config.build_filter()
