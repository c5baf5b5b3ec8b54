"""Tests for provider selection."""

from __future__ import annotations

import sys

import pytest

from net_harvester.providers import (
    BITS_PER_UNIT,
    PROVIDER_CHOICES,
    PROVIDERS,
    PsutilProvider,
    SysfsProvider,
    default_provider_name,
    select_provider,
)


class TestDefaultProviderName:
    """Tests for default_provider_name()."""

    def test_linux_uses_sysfs(self) -> None:
        assert default_provider_name("linux") == "sysfs"

    @pytest.mark.parametrize("platform", ["win32", "darwin", "freebsd13"])
    def test_other_platforms_use_psutil(self, platform: str) -> None:
        assert default_provider_name(platform) == "psutil"

    def test_defaults_to_this_host(self) -> None:
        expected = "sysfs" if sys.platform.startswith("linux") else "psutil"
        assert default_provider_name() == expected


class TestSelectProvider:
    """Tests for select_provider()."""

    def test_sysfs_by_name(self, tmp_path) -> None:
        provider = select_provider("sysfs", sysfs_root=str(tmp_path))
        assert isinstance(provider, SysfsProvider)
        assert provider.read_counters() == []

    def test_psutil_by_name(self) -> None:
        assert isinstance(select_provider("psutil"), PsutilProvider)

    def test_auto_matches_platform(self) -> None:
        provider = select_provider("auto")
        expected = SysfsProvider if sys.platform.startswith("linux") else PsutilProvider
        assert isinstance(provider, expected)

    def test_unknown_name_raises(self) -> None:
        with pytest.raises(ValueError, match="unknown provider 'heim'"):
            select_provider("heim")

    def test_choices_include_auto(self) -> None:
        assert PROVIDER_CHOICES == ["auto", "sysfs", "psutil"]

    def test_every_provider_unit_converts_to_bits(self) -> None:
        for cls in (SysfsProvider, PsutilProvider):
            assert cls.unit in BITS_PER_UNIT


class TestProviderRegistry:
    """Tests for the PROVIDERS factory table."""

    def test_every_factory_builds_a_provider(self, tmp_path) -> None:
        for name, factory in PROVIDERS.items():
            provider = factory(str(tmp_path))
            assert provider.unit in BITS_PER_UNIT, name
            assert callable(provider.read_counters), name

    def test_sysfs_factory_uses_given_root(self, tmp_path) -> None:
        stats_dir = tmp_path / "eth7" / "statistics"
        stats_dir.mkdir(parents=True)
        (stats_dir / "rx_bytes").write_text("3\n")
        (stats_dir / "tx_bytes").write_text("4\n")

        (sample,) = PROVIDERS["sysfs"](str(tmp_path)).read_counters()
        assert (sample.name, sample.rx, sample.tx) == ("eth7", 3, 4)

    def test_psutil_factory_ignores_root(self, tmp_path) -> None:
        assert isinstance(PROVIDERS["psutil"](str(tmp_path)), PsutilProvider)
