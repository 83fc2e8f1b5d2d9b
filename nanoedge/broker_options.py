"""Command line options and usage text for the broker."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto

from nanoedge.options import (
    AmbiguousOption,
    MissingArgument,
    OptionError,
    OptSpec,
    parse_options,
)

PARALLEL = 32
_HINT = "Try 'nanomq broker --help' for more information."
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class BrokerError(Exception):
    """The broker cannot act on what it was given."""


@dataclass
class BrokerConfig:
    """Broker settings that the command line can change."""

    conf_file: str | None = None
    bridge_file: str | None = None
    parallel: int = PARALLEL
    daemon: bool = False
    num_taskq_thread: int = 0
    max_taskq_thread: int = 0
    property_size: int = 0
    msq_len: int = 0
    qos_duration: int = 0
    url: str | None = None
    http_enable: bool = False
    http_port: int = 8081
    show_help: bool = False


class _Opt(Enum):
    HELP = auto()
    CONFFILE = auto()
    PARALLEL = auto()
    BRIDGEFILE = auto()
    DAEMON = auto()
    THREADS = auto()
    MAX_THREADS = auto()
    PROPERTY_SIZE = auto()
    MSQ_LEN = auto()
    QOS_DURATION = auto()
    URL = auto()
    HTTP_ENABLE = auto()
    HTTP_PORT = auto()


_SPECS = (
    OptSpec("help", _Opt.HELP, "h"),
    OptSpec("conf", _Opt.CONFFILE, None, True),
    OptSpec("bridge", _Opt.BRIDGEFILE, None, True),
    OptSpec("daemon", _Opt.DAEMON, "d"),
    OptSpec("tq_thread", _Opt.THREADS, "t", True),
    OptSpec("max_tq_thread", _Opt.MAX_THREADS, "T", True),
    OptSpec("parallel", _Opt.PARALLEL, "n", True),
    OptSpec("property_size", _Opt.PROPERTY_SIZE, "s", True),
    OptSpec("msq_len", _Opt.MSQ_LEN, "S", True),
    OptSpec("qos_duration", _Opt.QOS_DURATION, "D", True),
    OptSpec("url", _Opt.URL, None, True),
    # The http switch takes an argument, which is ignored.
    OptSpec("http", _Opt.HTTP_ENABLE, None, True),
    OptSpec("port", _Opt.HTTP_PORT, "p", True),
)

_INT_FIELDS = {
    _Opt.PARALLEL: "parallel",
    _Opt.THREADS: "num_taskq_thread",
    _Opt.MAX_THREADS: "max_taskq_thread",
    _Opt.PROPERTY_SIZE: "property_size",
    _Opt.MSQ_LEN: "msq_len",
    _Opt.QOS_DURATION: "qos_duration",
    _Opt.HTTP_PORT: "http_port",
}


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def usage_text() -> str:
    """Return the broker usage text."""
    return (
        "Usage: nanomq broker { { start | restart [--conf <path>] "
        "[--url <url>] [-d, --daemon]\n                     "
        "[-t, --tq_thread <num>] [-T, -max_tq_thread <num>] [-n, "
        "--parallel <num>]\n"
        "                     [-D, --qos_duration <num>] [--http] "
        "[-p, --port] "
        " } | stop }\n\n"
        "  --conf <path>              the path of a specified nanomq "
        "configuration file \n"
        "  --bridge <path>            the path of a specified bridge "
        "configuration file \n"
        "  --url <url>                the format of "
        "'broker+tcp://ip_addr:host' for TCP and "
        "'nmq+ws://ip_addr:host' for WebSocket\n"
        "  --http                     enable http server (default: "
        "disable)\n"
        "  -p, --port <num>           the port of http server (default: "
        "8081)\n"
        "  -t, --tq_thread <num>      the number of taskq threads used, "
        "`num` greater than 0 and less than 256\n"
        "  -T, --max_tq_thread <num>  the maximum number of taskq threads "
        "used, `num` greater than 0 and less than 256\n"
        "  -n, --parallel <num>       the maximum number of outstanding "
        "requests we can handle\n"
        "  -s, --property_size <num>  the max size for a MQTT user "
        "property\n"
        "  -S, --msq_len <num>        the queue length for resending "
        "messages\n"
        "  -D, --qos_duration <num>   the interval of the qos timer\n"
    )


def parse_broker_opts(
    argv: Sequence[str], config: BrokerConfig | None = None
) -> BrokerConfig:
    """Apply broker command line options to ``config`` and return it.

    When help is asked for, ``show_help`` is set and parsing stops.
    Raises BrokerError on an invalid, ambiguous or incomplete option.
    """
    if config is None:
        config = BrokerConfig()
    try:
        parsed, _rest = parse_options(argv, _SPECS)
    except AmbiguousOption as exc:
        raise BrokerError(
            f"Option {exc.option} is ambiguous (specify in full).\n{_HINT}"
        ) from exc
    except MissingArgument as exc:
        raise BrokerError(
            f"Option {exc.option} requires argument.\n{_HINT}"
        ) from exc
    except OptionError as exc:
        raise BrokerError(f"Option {exc.option} is invalid.\n{_HINT}") from exc

    for opt, arg in parsed:
        if opt is _Opt.HELP:
            config.show_help = True
            return config
        if opt in _INT_FIELDS:
            setattr(config, _INT_FIELDS[opt], _atoi(arg))
        elif opt is _Opt.CONFFILE:
            config.conf_file = arg
        elif opt is _Opt.BRIDGEFILE:
            config.bridge_file = arg
        elif opt is _Opt.DAEMON:
            config.daemon = True
        elif opt is _Opt.URL:
            config.url = arg
        elif opt is _Opt.HTTP_ENABLE:
            config.http_enable = True
    return config