import pytest

from nanoedge.broker_options import (
    PARALLEL,
    BrokerConfig,
    BrokerError,
    parse_broker_opts,
    usage_text,
)


def test_defaults_without_options():
    config = parse_broker_opts([])
    assert config == BrokerConfig()
    assert config.parallel == PARALLEL == 32


def test_file_and_url_options():
    config = parse_broker_opts(
        ["--conf", "a.conf", "--bridge", "b.conf", "--url", "broker+tcp://0.0.0.0:1883"]
    )
    assert config.conf_file == "a.conf"
    assert config.bridge_file == "b.conf"
    assert config.url == "broker+tcp://0.0.0.0:1883"


def test_integer_options():
    config = parse_broker_opts(
        ["-n", "8", "-t", "4", "-T", "16", "-s", "64", "-S", "256", "-D", "10", "-p", "9000"]
    )
    assert config.parallel == 8
    assert config.num_taskq_thread == 4
    assert config.max_taskq_thread == 16
    assert config.property_size == 64
    assert config.msq_len == 256
    assert config.qos_duration == 10
    assert config.http_port == 9000


def test_integer_parsing_is_lenient():
    assert parse_broker_opts(["-n", "12abc"]).parallel == 12
    assert parse_broker_opts(["-n", "abc"]).parallel == 0


def test_flags():
    config = parse_broker_opts(["-d", "--http", "yes"])
    assert config.daemon is True
    assert config.http_enable is True


def test_existing_config_is_updated():
    config = BrokerConfig(conf_file="keep.conf")
    result = parse_broker_opts(["-d"], config)
    assert result is config
    assert result.conf_file == "keep.conf"
    assert result.daemon is True


def test_help_stops_parsing():
    config = parse_broker_opts(["-h", "-n", "5"])
    assert config.show_help is True
    assert config.parallel == PARALLEL


def test_invalid_option():
    with pytest.raises(BrokerError, match="is invalid"):
        parse_broker_opts(["--bogus"])


def test_ambiguous_option():
    with pytest.raises(BrokerError, match="ambiguous"):
        parse_broker_opts(["--p", "1"])


def test_missing_argument():
    with pytest.raises(BrokerError, match="requires argument"):
        parse_broker_opts(["-n"])


def test_usage_text_mentions_options():
    text = usage_text()
    assert text.startswith("Usage: nanomq broker")
    for word in ("--conf", "--bridge", "--url", "--qos_duration", "--msq_len"):
        assert word in text