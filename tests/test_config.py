"""Tests for startup configuration validation."""

import pytest

from portwatch.config import ConfigError, MonitorConfig, parse_hosts
from portwatch.models import HostConfig


class TestParseHosts:
    """Test host list splitting."""

    def test_space_delimited(self):
        """Test hosts are split on spaces."""
        assert parse_hosts("alpha beta") == ("alpha", "beta")

    def test_surrounding_whitespace_trimmed(self):
        """Test leading, trailing and mixed whitespace is ignored."""
        assert parse_hosts("   alpha \t beta\n") == ("alpha", "beta")

    def test_empty_and_blank(self):
        """Test empty, blank and missing input give no hosts."""
        assert parse_hosts("") == ()
        assert parse_hosts("    ") == ()
        assert parse_hosts(None) == ()

    def test_duplicates_keep_first_position(self):
        """Test duplicate hosts collapse to their first position."""
        assert parse_hosts("beta alpha beta") == ("beta", "alpha")


class TestMonitorConfig:
    """Test MonitorConfig validation rules."""

    def test_valid_config(self):
        """Test a valid host list, port and interval are kept."""
        config = MonitorConfig.from_values("alpha beta", 22, 2000)

        assert config.hosts == ("alpha", "beta")
        assert config.port == 22
        assert config.interval_ms == 2000
        assert config.interval_seconds == 2.0

    def test_defaults(self):
        """Test port 80 and a 5000ms interval are the defaults."""
        config = MonitorConfig.from_values("alpha")

        assert config.port == 80
        assert config.interval_ms == 5000

    def test_empty_host_list_fails(self):
        """Test an empty host list fails validation."""
        with pytest.raises(ConfigError, match="No hosts provided"):
            MonitorConfig.from_values("", 22, 2000)

        with pytest.raises(ConfigError, match="No hosts provided"):
            MonitorConfig.from_values("   ", 22, 2000)

    @pytest.mark.parametrize("port", [0, -1, 65536, 70000])
    def test_out_of_range_port_fails(self, port):
        """Test ports outside 1-65535 fail validation."""
        with pytest.raises(ConfigError, match="Invalid port provided"):
            MonitorConfig.from_values("alpha", port, 2000)

    @pytest.mark.parametrize("port", [1, 65535])
    def test_port_bounds_inclusive(self, port):
        """Test ports 1 and 65535 are accepted."""
        assert MonitorConfig.from_values("alpha", port, 2000).port == port

    def test_interval_at_minimum_fails(self):
        """Test a 1000ms interval is rejected."""
        with pytest.raises(ConfigError, match="Invalid interval provided"):
            MonitorConfig.from_values("alpha", 22, 1000)

    def test_interval_above_minimum_succeeds(self):
        """Test a 1001ms interval is accepted."""
        assert MonitorConfig.from_values("alpha", 22, 1001).interval_ms == 1001

    def test_config_error_is_value_error(self):
        """Test ConfigError can be caught as ValueError."""
        with pytest.raises(ValueError):
            MonitorConfig(hosts=(), port=22, interval_ms=2000)

    def test_host_configs(self):
        """Test one HostConfig is built per host with the session port."""
        config = MonitorConfig.from_values("alpha beta", 22, 2000)

        assert config.host_configs() == (HostConfig("alpha", 22), HostConfig("beta", 22))
