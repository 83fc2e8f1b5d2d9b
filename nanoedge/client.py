"""Command line options and MQTT messages for the pub, sub and conn clients."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum, auto

from nanoedge.bridge import (
    ConnectMessage,
    PublishMessage,
    SubscribeMessage,
    TopicQos,
)
from nanoedge.options import OptionError, OptSpec, parse_options

DEFAULT_URL = "mqtt-tcp://127.0.0.1:1883"


class ClientType(Enum):
    """The kind of client being started."""

    PUB = "pub"
    SUB = "sub"
    CONN = "conn"


class ClientError(Exception):
    """The client cannot run with the options it was given."""


@dataclass
class ClientOptions:
    """Everything the command line sets for a client."""

    type: ClientType = ClientType.CONN
    verbose: bool = False
    parallel: int = 1
    msg_count: int = 0
    interval: int = 0
    version: int = 4
    url: str | None = None
    topics: list[str] = field(default_factory=list)
    qos: int = 0
    retain: bool = False
    user: str | None = None
    password: str | None = None
    client_id: str | None = None
    keepalive: int = 60
    clean_session: bool = True
    msg: bytes | None = None
    will_msg: bytes | None = None
    will_qos: int = 0
    will_retain: bool = False
    will_topic: str | None = None
    enable_ssl: bool = False
    cacert: bytes | None = None
    cert: bytes | None = None
    key: bytes | None = None
    keypass: str | None = None
    show_help: bool = False


class _Opt(Enum):
    HELP = auto()
    VERBOSE = auto()
    PARALLEL = auto()
    MSGCOUNT = auto()
    INTERVAL = auto()
    VERSION = auto()
    URL = auto()
    TOPIC = auto()
    QOS = auto()
    RETAIN = auto()
    USER = auto()
    PASSWD = auto()
    CLIENTID = auto()
    KEEPALIVE = auto()
    CLEAN_SESSION = auto()
    WILL_MSG = auto()
    WILL_QOS = auto()
    WILL_RETAIN = auto()
    WILL_TOPIC = auto()
    SECURE = auto()
    CACERT = auto()
    CERTFILE = auto()
    KEYFILE = auto()
    KEYPASS = auto()
    MSG = auto()
    FILE = auto()


_SPECS = (
    OptSpec("help", _Opt.HELP, "h"),
    OptSpec("verbose", _Opt.VERBOSE, "v"),
    OptSpec("parallel", _Opt.PARALLEL, "n", True),
    OptSpec("interval", _Opt.INTERVAL, "i", True),
    OptSpec("count", _Opt.MSGCOUNT, "C", True),
    OptSpec("version", _Opt.VERSION, "V", True),
    OptSpec("url", _Opt.URL, None, True),
    OptSpec("topic", _Opt.TOPIC, "t", True),
    OptSpec("qos", _Opt.QOS, "q", True),
    OptSpec("retain", _Opt.RETAIN, "r"),
    OptSpec("user", _Opt.USER, "u", True),
    OptSpec("password", _Opt.PASSWD, "p", True),
    OptSpec("id", _Opt.CLIENTID, "I", True),
    OptSpec("keepalive", _Opt.KEEPALIVE, "k", True),
    OptSpec("clean_session", _Opt.CLEAN_SESSION, "c", True),
    OptSpec("will-msg", _Opt.WILL_MSG, None, True),
    OptSpec("will-qos", _Opt.WILL_QOS, None, True),
    OptSpec("will-retain", _Opt.WILL_RETAIN),
    OptSpec("will-topic", _Opt.WILL_TOPIC, None, True),
    OptSpec("secure", _Opt.SECURE, "s"),
    OptSpec("cacert", _Opt.CACERT, None, True),
    OptSpec("key", _Opt.KEYFILE, None, True),
    OptSpec("keypass", _Opt.KEYPASS, None, True),
    OptSpec("cert", _Opt.CERTFILE, "E", True),
    OptSpec("msg", _Opt.MSG, "m", True),
    OptSpec("file", _Opt.FILE, "f", True),
)


def int_arg(value: str, max_value: int) -> int:
    """Parse a non-negative decimal argument no larger than ``max_value``."""
    if not value:
        raise ClientError("Empty integer argument.")
    result = 0
    for ch in value:
        if not ("0" <= ch <= "9"):
            raise ClientError("Integer argument expected.")
        result = result * 10 + (ord(ch) - ord("0"))
        if result > max_value:
            raise ClientError("Integer argument too large.")
    return result


def load_file(path: str) -> bytes:
    """Read a whole file, or standard input when ``path`` is ``-``."""
    if path == "-":
        return sys.stdin.buffer.read()
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except OSError as exc:
        raise ClientError(f"Cannot open file {path}: {exc.strerror}") from exc


def _once(current: object, message: str) -> None:
    if current is not None:
        raise ClientError(message)


def parse_client_opts(argv, client_type: ClientType) -> ClientOptions:
    """Parse a client command line into options.

    When help is asked for, the returned options have ``show_help`` set
    and nothing further is checked.
    """
    opts = ClientOptions(type=client_type)
    try:
        parsed, _rest = parse_options(argv, _SPECS)
    except OptionError as exc:
        raise ClientError(str(exc)) from exc

    data_once = "Data (--file, --data) may be specified only once."
    for opt, arg in parsed:
        if opt is _Opt.HELP:
            opts.show_help = True
            return opts
        if opt is _Opt.VERBOSE:
            opts.verbose = True
        elif opt is _Opt.PARALLEL:
            opts.parallel = int_arg(arg, 1024000)
        elif opt is _Opt.INTERVAL:
            opts.interval = int_arg(arg, 10240000)
        elif opt is _Opt.MSGCOUNT:
            opts.msg_count = int_arg(arg, 10240000)
        elif opt is _Opt.VERSION:
            opts.version = int_arg(arg, 4)
        elif opt is _Opt.URL:
            _once(opts.url, "URL (--url) may be specified only once.")
            opts.url = arg
        elif opt is _Opt.TOPIC:
            opts.topics.append(arg)
        elif opt is _Opt.QOS:
            opts.qos = int_arg(arg, 2)
        elif opt is _Opt.RETAIN:
            opts.retain = True
        elif opt is _Opt.USER:
            _once(opts.user, "User (-u, --user) may be specified only once.")
            opts.user = arg
        elif opt is _Opt.PASSWD:
            _once(
                opts.password,
                "Password (-p, --password) may be specified only once.",
            )
            opts.password = arg
        elif opt is _Opt.CLIENTID:
            _once(
                opts.client_id,
                "Identifier (-I, --identifier) may be specified only once.",
            )
            opts.client_id = arg
        elif opt is _Opt.KEEPALIVE:
            opts.keepalive = int_arg(arg, 65535)
        elif opt is _Opt.CLEAN_SESSION:
            opts.clean_session = arg.lower() == "true"
        elif opt is _Opt.WILL_MSG:
            _once(
                opts.will_msg,
                "Will_msg (--will-msg) may be specified only once.",
            )
            opts.will_msg = arg.encode()
        elif opt is _Opt.WILL_QOS:
            opts.will_qos = int_arg(arg, 2)
        elif opt is _Opt.WILL_RETAIN:
            opts.will_retain = True
        elif opt is _Opt.WILL_TOPIC:
            _once(
                opts.will_topic,
                "Will_topic (--will-topic) may be specified only once.",
            )
            opts.will_topic = arg
        elif opt is _Opt.SECURE:
            opts.enable_ssl = True
        elif opt is _Opt.CACERT:
            _once(
                opts.cacert,
                "CA Certificate (--cacert) may be specified only once.",
            )
            opts.cacert = load_file(arg)
        elif opt is _Opt.CERTFILE:
            _once(opts.cert, "Cert (--cert) may be specified only once.")
            opts.cert = load_file(arg)
        elif opt is _Opt.KEYFILE:
            _once(opts.key, "Key (--key) may be specified only once.")
            opts.key = load_file(arg)
        elif opt is _Opt.KEYPASS:
            _once(
                opts.keypass,
                "Key Password (--keypass) may be specified only once.",
            )
            opts.keypass = arg
        elif opt is _Opt.MSG:
            _once(opts.msg, data_once)
            opts.msg = arg.encode()
        elif opt is _Opt.FILE:
            _once(opts.msg, data_once)
            opts.msg = load_file(arg)

    if opts.url is None:
        opts.url = DEFAULT_URL

    if client_type in (ClientType.PUB, ClientType.SUB) and not opts.topics:
        raise ClientError(
            "Missing required option: '(-t, --topic) <topic>'\n"
            f"Try 'nanomq {client_type.value} --help' for more information. "
        )
    if client_type is ClientType.PUB and opts.msg is None:
        raise ClientError(
            "Missing required option: '(-m, --msg) <message>' or "
            "'(-f, --file) <file>'\n"
            "Try 'nanomq pub --help' for more information. "
        )

    # A bounded publish count needs a pause between sends.
    if opts.interval == 0 and opts.msg_count > 0:
        opts.interval = 1
    return opts


def help_text(client_type: ClientType) -> str:
    """Return the usage text for a client type."""
    usage = {
        ClientType.PUB: "Usage: nanomq pub { start | stop } <addr> "
        "[<topic>...] [<opts>...] [<src>]",
        ClientType.SUB: "Usage: nanomq sub { start | stop } <addr> "
        "[<topic>...] [<opts>...]",
        ClientType.CONN: "Usage: nanomq conn { start | stop } <addr> [<opts>...]",
    }
    pub = client_type is ClientType.PUB
    lines = [
        usage[client_type],
        "",
        "<addr> must be one or more of:",
        "  --url <url>                      The url for mqtt broker "
        "('mqtt-tcp://host:port' or 'tls+mqtt-tcp://host:port') ",
        "                                   [default: "
        "mqtt-tcp://127.0.0.1:1883]",
    ]
    if client_type in (ClientType.PUB, ClientType.SUB):
        lines += [
            "",
            "<topic> must be set:",
            "  -t, --topic <topic>              Topic for publish or subscribe",
        ]
    lines += [
        "",
        "<opts> may be any of:",
        "  -V, --version <version: 3|4|5>   The MQTT version used by the "
        "client [default: 4]",
        "  -n, --parallel             \t   The number of parallel for "
        "client [default: 1]",
        "  -v, --verbose              \t   Enable verbose mode",
        "  -u, --user <user>                The username for authentication",
        "  -p, --password <password>        The password for authentication",
        "  -k, --keepalive <keepalive>      A keep alive of the client "
        "(in seconds) [default: 60]",
    ]
    if pub:
        lines += [
            "  -m, --msg <message>              The message to publish",
            "  -C, --count <num>                Max count of publishing "
            "message [default: 1]",
            "  -i, --interval <ms>              Interval of publishing "
            "message (ms) [default: 0]",
            "  -I, --identifier <identifier>    The client identifier "
            "UTF-8 String (default randomly generated string)",
        ]
    lines += [
        "  -q, --qos <qos>                  Quality of service for the "
        "corresponding topic [default: 0]",
        "  -r, --retain                     The message will be retained "
        "[default: false]",
        "  -c, --clean_session <true|false> Define a clean start for the "
        "connection [default: true]",
        "  --will-qos <qos>                 Quality of service level for "
        "the will message [default: 0]",
        "  --will-msg <message>             The payload of the will message",
        "  --will-topic <topic>             The topic of the will message",
        "  --will-retain                    Will message as retained "
        "message [default: false]",
        "  -s, --secure                     Enable TLS/SSL mode",
        "      --cacert <file>              CA certificates file path",
        "      -E, --cert <file>            Certificate file path",
        "      --key <file>                 Private key file path",
        "      --keypass <key password>     Private key password",
    ]
    if pub:
        lines += [
            "",
            "<src> may be one of:",
            "  -m, --msg  <data>                ",
            "  -f, --file <file>                ",
        ]
    return "\n".join(lines) + "\n"


def publish_msg(opts: ClientOptions) -> PublishMessage:
    """Build the PUBLISH message for the first topic."""
    if not opts.topics:
        raise ClientError("no topic to publish to")
    return PublishMessage(
        topic=opts.topics[0],
        payload=opts.msg or b"",
        qos=opts.qos,
        retain=opts.retain,
    )


def connect_msg(opts: ClientOptions) -> ConnectMessage:
    """Build the CONNECT message for the client."""
    return ConnectMessage(
        keep_alive=opts.keepalive,
        proto_ver=opts.version,
        clean_session=opts.clean_session,
        client_id=opts.client_id,
        username=opts.user,
        password=opts.password,
        will_topic=opts.will_topic,
        will_qos=opts.will_qos,
        will_msg=opts.will_msg,
        will_retain=opts.will_retain,
    )


def subscribe_msg(opts: ClientOptions) -> SubscribeMessage:
    """Build the SUBSCRIBE message covering every topic at the chosen QoS."""
    return SubscribeMessage(topics=[TopicQos(topic, opts.qos) for topic in opts.topics])