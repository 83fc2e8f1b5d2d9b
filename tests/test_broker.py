import os
import signal
from unittest import mock

import pytest

from nanoedge.broker import broker_dflt, broker_stop
from nanoedge.broker_options import BrokerError, usage_text


def test_dflt_prints_usage(capsys):
    assert broker_dflt([]) == 0
    assert capsys.readouterr().out == usage_text()


def test_stop_rejects_arguments(tmp_path):
    with pytest.raises(BrokerError) as info:
        broker_stop(["extra"], tmp_path / "nanomq.pid")
    assert str(info.value) == usage_text()


def test_stop_without_instance(tmp_path):
    with pytest.raises(BrokerError, match="no running NanoMQ instance"):
        broker_stop([], tmp_path / "nanomq.pid")


def test_stop_signals_running_instance(tmp_path, capsys):
    pid_path = tmp_path / "nanomq.pid"
    pid = os.getpid()
    pid_path.write_text(str(pid))
    with mock.patch("os.kill") as kill:
        assert broker_stop([], pid_path) == pid
    kill.assert_any_call(pid, signal.SIGTERM)
    assert "NanoMQ stopped." in capsys.readouterr().err