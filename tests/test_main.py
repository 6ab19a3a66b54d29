"""End-to-end tests for the command-line entry point."""

import io
import json
import logging

import pytest

from main import Config, EnigmaSession, main
from suites import NAVAL

MESSAGES = """\
* B Beta III IV I AXLE (HQ) (EX) (IP) (TR) (BY)
FROM HIS SHOULDER HIAWATHA
"""


@pytest.fixture
def conf_file(tmp_path):
    path = tmp_path / "naval.conf"
    path.write_text(NAVAL, encoding="utf-8")
    return path


class TestSession:
    """Line protocol without the CLI."""

    def test_setup_then_message(self):
        session = EnigmaSession.from_path(None, Config())
        assert session.feed("* B Beta III IV I AXLE (HQ) (EX) (IP) (TR) (BY)") is None
        assert session.feed("FROM HIS SHOULDER HIAWATHA") == "QVPQS OKOIL PUBKJ ZPISF XDW"

    def test_message_before_setup(self):
        session = EnigmaSession.from_path(None, Config())
        with pytest.raises(ValueError, match="no configuration line"):
            session.feed("HELLO")

    def test_reconfigure_mid_stream(self):
        session = EnigmaSession.from_path(None, Config())
        lines = MESSAGES.splitlines() + MESSAGES.splitlines()
        out = list(session.process(lines))
        assert out == ["QVPQS OKOIL PUBKJ ZPISF XDW"] * 2

    def test_empty_message_line(self):
        session = EnigmaSession.from_path(None, Config())
        out = list(session.process(["* B Beta III IV I AXLE", ""]))
        assert out == [""]

    def test_verbose_trace(self, caplog):
        caplog.set_level(logging.DEBUG, logger="ENIGMA.trace")
        session = EnigmaSession.from_path(None, Config(verbose=True))
        list(session.process(MESSAGES.splitlines()))
        lines = [r.getMessage() for r in caplog.records if r.name == "ENIGMA.trace"]
        assert len(lines) == 23
        assert lines[0] == "[AXLF] F -> F -> Q"

    def test_block_size(self):
        session = EnigmaSession.from_path(None, Config(block=4))
        out = list(session.process(MESSAGES.splitlines()))
        assert out == ["QVPQ SOKO ILPU BKJZ PISF XDW"]


class TestCli:
    """`main()` with files and standard streams."""

    def test_files(self, conf_file, tmp_path):
        inp = tmp_path / "in.txt"
        out = tmp_path / "out.txt"
        inp.write_text(MESSAGES, encoding="utf-8")

        assert main([str(conf_file), str(inp), str(out)]) == 0
        assert out.read_text(encoding="utf-8") == "QVPQS OKOIL PUBKJ ZPISF XDW\n"

    def test_stdin_stdout_with_builtin_catalog(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(MESSAGES))
        assert main([]) == 0
        assert capsys.readouterr().out == "QVPQS OKOIL PUBKJ ZPISF XDW\n"

    def test_decrypts_back(self, conf_file, monkeypatch, capsys):
        cipher = "* B Beta III IV I AXLE (HQ) (EX) (IP) (TR) (BY)\nQVPQS OKOIL PUBKJ ZPISF XDW\n"
        monkeypatch.setattr("sys.stdin", io.StringIO(cipher))
        assert main([str(conf_file)]) == 0
        assert capsys.readouterr().out == "FROMH ISSHO ULDER HIAWA THA\n"

    def test_error_exit(self, conf_file, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("HELLO\n"))
        assert main([str(conf_file)]) == 1
        err = capsys.readouterr().err
        assert "Error: no configuration line before message" in err

    def test_bad_character_exit(self, conf_file, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("* B Beta III IV I AXLE\nHELLO1\n"))
        assert main([str(conf_file)]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_missing_config_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.conf")]) == 1
        assert "Error:" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "payload",
        [
            [1, 2],
            {"alphabet": "AB", "num_rotors": None, "pawls": 1, "rotors": {}},
            {"alphabet": "AB", "num_rotors": 2, "pawls": 1, "rotors": {"X": "R"}},
            {"alphabet": "AB", "num_rotors": 2, "pawls": 1, "rotors": []},
        ],
    )
    def test_malformed_json_config(self, tmp_path, monkeypatch, capsys, payload):
        path = tmp_path / "machine.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        assert main([str(path)]) == 1
        assert capsys.readouterr().err.startswith("Error: ")

    def test_bad_block(self, capsys):
        assert main(["--block", "0"]) == 1
        assert "block size" in capsys.readouterr().err

    def test_army_suite(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("* UKW-B I II III AAA\nAAAAA\n"))
        assert main(["--suite", "army"]) == 0
        assert capsys.readouterr().out == "BDZGO\n"

    def test_naval_rotors_absent_from_army_suite(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("* B Beta III IV AXL\nHELLO\n"))
        assert main(["--suite", "army"]) == 1
        assert "Bad rotor name" in capsys.readouterr().err

    def test_unknown_suite(self):
        with pytest.raises(ValueError, match="Unknown suite"):
            EnigmaSession.from_path(None, Config(), "swiss")

    def test_verbose_trace_to_log_file(self, tmp_path, monkeypatch, caplog, capsys):
        caplog.set_level(logging.DEBUG, logger="ENIGMA.trace")
        log = tmp_path / "trace.log"
        monkeypatch.setattr("sys.stdin", io.StringIO(MESSAGES))
        assert main(["--verbose", "--log-file", str(log)]) == 0
        assert capsys.readouterr().out == "QVPQS OKOIL PUBKJ ZPISF XDW\n"

        text = log.read_text(encoding="utf-8")
        assert "[ENIGMA.trace]: [AXLF] F -> F -> Q" in text
        assert sum("[ENIGMA.trace]" in line for line in text.splitlines()) == 23
