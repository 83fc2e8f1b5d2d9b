[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nanoedge"
version = "0.1.0"
description = "MQTT edge tooling: option handling for broker and client commands, bridge topic filtering, pid files, base64 and a JSON toolkit"
requires-python = ">=3.10"
dependencies = []
keywords = ["mqtt", "broker", "bridge", "json", "base64", "edge"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nanoedge"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
