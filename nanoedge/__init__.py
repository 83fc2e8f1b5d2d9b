"""MQTT edge tooling: option parsing, bridge helpers, pid files, base64 and JSON."""

__version__ = "0.1.0"