"""
Tests for the collectd-wire-decode command line.
"""
import json

import pytest

from collectd_wire import main as cli
from collectd_wire.models import PartType
from wire_builders import header, number_part, text_part


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch, captured_logs):
    """Keep the CLI from reconfiguring logging for the rest of the test run"""
    calls = []
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: calls.append((args, kwargs)))
    return calls


def test_prints_parts(tmp_path, sample_packet, capsys, no_logging_setup):
    datagram = tmp_path / "cpu_disk.dat"
    datagram.write_bytes(sample_packet)

    assert cli.main([str(datagram)]) == 0

    document = json.loads(capsys.readouterr().out)
    assert document["file"] == str(datagram)
    assert document["size"] == len(sample_packet)
    assert document["parts"][0] == {
        "type": "HOST",
        "type_code": 0,
        "length": 14,
        "text": "localhost",
    }
    assert no_logging_setup[0][0] == ("decode",)


def test_prints_records(tmp_path, sample_packet, capsys):
    datagram = tmp_path / "cpu_disk.dat"
    datagram.write_bytes(sample_packet)

    assert cli.main([str(datagram), "--records"]) == 0

    document = json.loads(capsys.readouterr().out)
    assert len(document["records"]) == 26
    assert document["records"][0]["source"] == "localhost/disk-sda1/disk_octets"


def test_legacy_flag(tmp_path, capsys):
    datagram = tmp_path / "legacy.dat"
    datagram.write_bytes(number_part(PartType.TIME, 42))

    assert cli.main([str(datagram)]) == 0
    assert json.loads(capsys.readouterr().out)["parts"] == []

    assert cli.main([str(datagram), "--legacy"]) == 0
    assert json.loads(capsys.readouterr().out)["parts"][0]["value"] == 42


def test_malformed_file_exits_nonzero(tmp_path, capsys):
    good = tmp_path / "good.dat"
    good.write_bytes(text_part(PartType.HOST, "h"))
    bad = tmp_path / "bad.dat"
    bad.write_bytes(header(PartType.HOST, 3))

    assert cli.main([str(bad), str(good)]) == 1

    out = capsys.readouterr().out
    assert json.loads(out)["file"] == str(good)


def test_missing_file_exits_nonzero(tmp_path, capsys):
    assert cli.main([str(tmp_path / "absent.dat")]) == 1
    assert capsys.readouterr().out == ""


def test_failure_logged_with_details(tmp_path, captured_logs):
    bad = tmp_path / "bad.dat"
    bad.write_bytes(header(PartType.HOST, 3))

    cli.main([str(bad)])

    failures = [entry for entry in captured_logs if entry["event"] == "file_decode_failed"]
    assert len(failures) == 1
    assert failures[0]["file"] == str(bad)
    assert failures[0]["offset"] == 0
    assert failures[0]["length"] == 3


def test_log_level_is_case_insensitive(tmp_path, sample_packet, capsys, no_logging_setup):
    datagram = tmp_path / "cpu_disk.dat"
    datagram.write_bytes(sample_packet)

    assert cli.main([str(datagram), "--log-level", "debug"]) == 0

    assert no_logging_setup[0][1] == {"level": "DEBUG"}
    assert json.loads(capsys.readouterr().out)["size"] == len(sample_packet)
