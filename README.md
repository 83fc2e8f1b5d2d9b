# nanoedge

Building blocks for tools at the edge of an MQTT network. The package is a library with no dependencies outside the standard library.

## Modules

- `nanoedge.bridge`: MQTT topic-filter matching with `+` and `#` (`topic_filter`, `forward_matches`). It also has the message dataclasses `PublishMessage`, `ConnectMessage`, `SubscribeMessage` and `TopicQos`, and `BridgeConfig` with the builders `bridge_publish_msg`, `bridge_connect_msg` and `bridge_subscribe_msg`.
- `nanoedge.options`: long and short option parsing (`parse_options` with `OptSpec`). Long names may be given as unambiguous prefixes. It raises `InvalidOption`, `AmbiguousOption` or `MissingArgument`, all of them subclasses of `OptionError`.
- `nanoedge.client`: command-line handling for publish, subscribe and connect clients.
  - `parse_client_opts` returns a `ClientOptions` for a `ClientType` and raises `ClientError` on bad input.
  - `help_text` gives the usage text.
  - `publish_msg`, `connect_msg` and `subscribe_msg` build the messages.
  - `int_arg` and `load_file` are the argument helpers.
- `nanoedge.broker_options`: broker command-line handling. `parse_broker_opts` fills a `BrokerConfig`, and `usage_text` gives the usage text. Errors raise `BrokerError`.
- `nanoedge.pidfile`: `store_pid` writes the current process id. `status_check` returns the pid of a live process named in a pid file, or `None`. When the file names no live process, it removes the file.
- `nanoedge.broker`: `broker_stop` sends SIGTERM to the instance named in the pid file. `broker_dflt` prints the usage text.
- `nanoedge.base64codec`: `encode`, `decode`, `encoded_size` and `decoded_size`. `decode` stops at the first `=` and raises `ValueError` on a bad length or character.
- `nanoedge.cjson_parse`: `parse` and `parse_with_end`. Objects come back as `JsonObject`, and failures raise `JsonParseError` with a `position`.
- `nanoedge.cjson_print`: `dumps` gives formatted (tab-indented) or compact output. Also `format_number` and `minify`.
- `nanoedge.cjson_tree`: `JsonObject` is an ordered object that allows duplicate keys. Its lookups can ignore ASCII case. `compare` tests structural equality.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

```python
from nanoedge.bridge import topic_filter
from nanoedge.base64codec import encode, decode
from nanoedge.cjson_parse import parse
from nanoedge.cjson_print import dumps, minify
from nanoedge.client import ClientType, parse_client_opts, subscribe_msg

topic_filter("sensors/+/temp", "sensors/kitchen/temp")  # True
encode(b"hello")                                        # "aGVsbG8="
decode("aGVsbG8=")                                      # b"hello"

doc = parse('{"a": [1, 2.5, "x"]}')
print(dumps(doc, False))                                # {"a":[1,2.5,"x"]}
print(minify('{ "a" : 1 /* note */ }'))                 # {"a":1}

opts = parse_client_opts(["-t", "sensors/#", "-q", "1"], ClientType.SUB)
subscribe_msg(opts)  # SubscribeMessage(topics=[TopicQos(topic='sensors/#', qos=1)])
```

## What it does not do

- The package installs no command. There is no dispatcher that starts a broker or client by name.
- It opens no network connections and runs no MQTT broker or client. The message classes are plain data, and nothing in the package sends them.
- Broker configuration files are not read. `BrokerConfig` records only the file paths that the command line gives.