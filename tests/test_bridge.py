import pytest

from nanoedge.bridge import (
    BridgeConfig,
    ConnectMessage,
    PublishMessage,
    SubscribeMessage,
    TopicQos,
    bridge_connect_msg,
    bridge_publish_msg,
    bridge_subscribe_msg,
    forward_matches,
    topic_filter,
)


@pytest.mark.parametrize("topic", ["a", "a/b/c", "/x//y", "sensor/+/temp"])
def test_filter_matches_itself(topic):
    assert topic_filter(topic, topic)


@pytest.mark.parametrize("topic", ["a", "a/b/c", "x/y"])
def test_hash_matches_everything(topic):
    assert topic_filter("#", topic)


def test_plus_matches_single_level():
    assert topic_filter("a/+/c", "a/b/c")


def test_hash_matches_remaining_levels():
    assert topic_filter("a/#", "a/b/c/d")


def test_mismatched_level_fails():
    assert not topic_filter("a/b", "a/c")
    assert not topic_filter("+/b", "x/y")


def test_shorter_side_stops_comparison():
    assert topic_filter("a/b/c", "a/b")


def test_empty_levels_are_skipped():
    assert topic_filter("a//b", "a/b")


def test_publish_msg_fields():
    msg = bridge_publish_msg("t/1", bytearray(b"payload"), True, 1, False)
    assert msg == PublishMessage(
        topic="t/1", payload=b"payload", dup=True, qos=1, retain=False
    )
    assert isinstance(msg.payload, bytes)


def test_connect_msg_copies_config():
    password = "password"
    config = BridgeConfig(
        address="mqtt-tcp://localhost:1883",
        keepalive=30,
        proto_ver=5,
        clean_start=False,
        clientid="bridge-client",
        username="user",
        password=password,
    )
    assert bridge_connect_msg(config) == ConnectMessage(
        keep_alive=30,
        proto_ver=5,
        clean_session=False,
        client_id="bridge-client",
        username="user",
        password=password,
    )


def test_subscribe_msg_lists_topics_in_order():
    subs = [TopicQos("a/#", 1), TopicQos("b/+", 2)]
    config = BridgeConfig(address="mqtt-tcp://localhost:1883", sub_list=subs)
    msg = bridge_subscribe_msg(config)
    assert msg == SubscribeMessage(topics=subs)
    assert msg.topics is not config.sub_list


def test_forward_matches_requires_bridge_mode():
    config = BridgeConfig(
        address="mqtt-tcp://localhost:1883", forwards=["a/#"], bridge_mode=False
    )
    assert not forward_matches(config, "a/b")
    config.bridge_mode = True
    assert forward_matches(config, "a/b")
    assert not forward_matches(config, "c/d")