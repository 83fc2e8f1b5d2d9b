"""MQTT bridge messages and topic filter matching."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TopicQos:
    """A topic filter with its requested quality of service."""

    topic: str
    qos: int = 0


@dataclass
class PublishMessage:
    """An MQTT PUBLISH packet."""

    topic: str
    payload: bytes = b""
    dup: bool = False
    qos: int = 0
    retain: bool = False


@dataclass
class ConnectMessage:
    """An MQTT CONNECT packet."""

    keep_alive: int = 60
    proto_ver: int = 4
    clean_session: bool = True
    client_id: str | None = None
    username: str | None = None
    password: str | None = None
    will_topic: str | None = None
    will_qos: int = 0
    will_msg: bytes | None = None
    will_retain: bool = False


@dataclass
class SubscribeMessage:
    """An MQTT SUBSCRIBE packet."""

    topics: list[TopicQos] = field(default_factory=list)


@dataclass
class BridgeConfig:
    """Settings for the upstream bridge connection."""

    address: str
    bridge_mode: bool = False
    parallel: int = 1
    keepalive: int = 60
    proto_ver: int = 4
    clean_start: bool = True
    clientid: str | None = None
    username: str | None = None
    password: str | None = None
    forwards: list[str] = field(default_factory=list)
    sub_list: list[TopicQos] = field(default_factory=list)


def _levels(topic: str) -> list[str]:
    # Empty levels are skipped, as a tokenizer on "/" would do.
    return [level for level in topic.split("/") if level]


def topic_filter(origin: str, topic: str) -> bool:
    """Tell whether ``topic`` matches the filter ``origin``.

    ``+`` matches a single level and ``#`` the rest of the topic.
    Comparison stops when either side runs out of levels.
    """
    if origin == topic:
        return True
    for wanted, actual in zip(_levels(origin), _levels(topic)):
        if wanted == actual:
            continue
        if wanted == "#":
            return True
        if wanted != "+":
            return False
    return True


def bridge_publish_msg(
    topic: str, payload: bytes, dup: bool, qos: int, retain: bool
) -> PublishMessage:
    """Build the PUBLISH message forwarded to the upstream broker."""
    return PublishMessage(
        topic=topic, payload=bytes(payload), dup=dup, qos=qos, retain=retain
    )


def bridge_connect_msg(config: BridgeConfig) -> ConnectMessage:
    """Build the CONNECT message for the bridge connection."""
    return ConnectMessage(
        keep_alive=config.keepalive,
        proto_ver=config.proto_ver,
        clean_session=config.clean_start,
        client_id=config.clientid,
        username=config.username,
        password=config.password,
    )


def bridge_subscribe_msg(config: BridgeConfig) -> SubscribeMessage:
    """Build the SUBSCRIBE message sent once the bridge is connected."""
    return SubscribeMessage(
        topics=[TopicQos(item.topic, item.qos) for item in config.sub_list]
    )


def forward_matches(config: BridgeConfig, topic: str) -> bool:
    """Tell whether a message on ``topic`` is forwarded over the bridge."""
    return config.bridge_mode and any(
        topic_filter(forward, topic) for forward in config.forwards
    )