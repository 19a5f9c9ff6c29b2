"""Tests for the command-line entry point."""

import io
import json
import sys
from pathlib import Path

import pytest

import run

SAMPLE = Path(__file__).parent / "fixtures" / "sample_texts" / "patate_douce.txt"
CONFIG = Path(__file__).parent.parent / "config.yaml"


class TestMain:
    def test_parses_file_to_json(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        monkeypatch.setattr(sys, "argv", ["run.py", str(SAMPLE), "--config", str(CONFIG)])

        assert run.main() == 0

        output = json.loads(capsys.readouterr().out)
        assert output["draft"]["title"] == "Patate douce rôtie au four"
        assert output["slug"] == "patate-douce-rotie-au-four"
        assert output["steps"][0]["instruction"] == "Préchauffer le four à 200°C."
        assert output["ingredients"][0]["quantity"] == 2
        assert "Histoire / contexte culturel" not in output["missing_fields"]

    def test_reads_stdin(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
        tmp_path: Path,
    ) -> None:
        monkeypatch.setattr(sys, "argv", ["run.py", "--config", str(tmp_path / "none.yaml")])
        monkeypatch.setattr(sys, "stdin", io.StringIO(""))

        assert run.main() == 0

        output = json.loads(capsys.readouterr().out)
        assert output["draft"]["tags"] == []
        assert output["slug"] == ""
        assert output["steps"] == []
        assert "Description" in output["missing_fields"]

    def test_missing_file_returns_error(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(sys, "argv", ["run.py", str(tmp_path / "absent.txt"), "--config", str(CONFIG)])
        assert run.main() == 1

