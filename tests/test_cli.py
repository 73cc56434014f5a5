import io
import json

import pytest

from verse_tune.app import VerseTuneApp
from verse_tune.app.app import _parse_range, main
from verse_tune.config import VerseTuneConfig
from verse_tune.melody import Pitch


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("LOG_LEVEL", "DICT_PATH", "SCALE", "ROOT", "REGISTER", "INTENSITY"):
        monkeypatch.delenv(f"VERSE_TUNE_{name}", raising=False)


def test_rhyme_command_prints_analysis(cmudict_file, capsys):
    exit_code = main(["--dictionary", str(cmudict_file), "rhyme", "A cat", "A hat", "A tree"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["scheme"] == "AAB"
    assert payload["labels"] == ["A", "A", "B"]


def test_rhyme_command_reads_stdin(cmudict_file, capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("the mat\nthe hat\n"))

    assert main(["--dictionary", str(cmudict_file), "rhyme"]) == 0
    assert json.loads(capsys.readouterr().out)["scheme"] == "AA"


def test_melody_command(capsys):
    assert main(["melody", "4", "--range", "C..G"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload == {"length": 4, "pitches": ["C", "E", "F", "C"]}


def test_melody_command_reports_domain_errors(capsys):
    assert main(["melody", "4", "--scale", "bogus"]) == 2
    assert "unknown scale" in capsys.readouterr().err


def test_invalid_range_is_rejected_by_parser():
    with pytest.raises(SystemExit):
        main(["melody", "4", "--range", "C-G"])


def test_line_command(cmudict_file, capsys):
    assert main(["--dictionary", str(cmudict_file), "line", "The cat sat"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["stress_pattern"] == "011"
    assert payload["pitches"] == ["C", "F", "D"]


def test_parse_range():
    vocal_range = _parse_range("G,..d")

    assert vocal_range.low == Pitch("G", -1)
    assert vocal_range.high == Pitch("D", 1)
    assert _parse_range("") is None


def test_app_uses_config_defaults(cmudict_file):
    app = VerseTuneApp(
        VerseTuneConfig(
            dictionary_path=str(cmudict_file), scale="minor", root="A", register="high"
        )
    )

    report = app.melody_report(3)

    assert app.service.default_options.scale == "minor"
    assert report["pitches"] == ["A", "c", "A"]
