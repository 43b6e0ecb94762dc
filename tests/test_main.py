import json

import pytest

from newslens import main as cli


@pytest.fixture(autouse=True)
def _quiet_cli(monkeypatch, tmp_path):
    # Keep log lines out of captured stdout and ignore any local .env
    monkeypatch.setenv("LOG_OUTPUT", "file")
    monkeypatch.setenv("LOG_FILE_PATH", str(tmp_path / "logs" / "newslens.log"))
    monkeypatch.setattr("dotenv.load_dotenv", lambda **kw: False)


def test_classify_prints_verdict(capsys):
    assert cli.main(["--classify", "wealth tax green new deal wealth tax"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["label"] == "left"
    assert out["keywords"] == ["wealth tax", "green new deal"]
    assert out["topics"] == ["wealth", "tax", "green", "new", "deal"]


def test_fetch_now_without_key_uses_samples(capsys):
    assert cli.main(["--fetch-now", "--store", "memory"]) == 0
    assert "processed 2 articles" in capsys.readouterr().out


def test_stats_on_empty_json_store(capsys, tmp_path):
    path = tmp_path / "articles.json"
    assert cli.main(["--stats", "--store", "json", "--store-path", str(path)]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["total"] == 0
    assert out["bias"] == {"left": 0, "center": 0, "right": 0, "neutral": 0}


def test_invalid_config_exits_non_zero(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("ingest:\n  categories: [weather]\n", encoding="utf-8")
    assert cli.main(["--config", str(path), "--fetch-now"]) == 1


def test_malformed_numeric_env_exits_non_zero(monkeypatch):
    monkeypatch.setenv("FETCH_TARGET_TOTAL", "abc")
    assert cli.main(["--fetch-now", "--store", "memory"]) == 1


def test_corrupt_json_store_does_not_crash_stats(capsys, tmp_path):
    path = tmp_path / "articles.json"
    path.write_text('{"foo": 1}', encoding="utf-8")
    assert cli.main(["--stats", "--store", "json", "--store-path", str(path)]) == 0
    assert json.loads(capsys.readouterr().out)["total"] == 0
