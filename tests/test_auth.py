from pathlib import Path

import pytest

from aocapi.exceptions import ConfigError
from aocapi.models import default_session


def test_no_session_id(test_token: Path, capsys: pytest.CaptureFixture[str]) -> None:
    test_token.unlink()
    with pytest.raises(ConfigError("Missing session ID")):  # type: ignore[call-overload] # using pytest-raisin
        default_session()
    out, err = capsys.readouterr()
    assert out == ""
    assert "ERROR: AoC session ID is needed to get your puzzle data!" in err


def test_empty_token_file(test_token: Path) -> None:
    test_token.write_text("\n")
    with pytest.raises(ConfigError("Missing session ID")):  # type: ignore[call-overload]
        default_session()


def test_get_session_id_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AOC_SESSION", "tokenfromenv1")
    session = default_session()
    assert session.token == "tokenfromenv1"


def test_get_session_id_from_file(test_token: Path) -> None:
    test_token.write_text("tokenfromfile\n")
    session = default_session()
    assert session.token == "tokenfromfile"


def test_env_takes_priority_over_file(monkeypatch: pytest.MonkeyPatch, test_token: Path) -> None:
    monkeypatch.setenv("AOC_SESSION", "tokenfromenv2")
    session = default_session()
    assert session.token == "tokenfromenv2"


def test_malformed_token_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AOC_SESSION", "token;with;semicolons")
    with pytest.raises(ConfigError):
        default_session()


def test_default_session_cache_dir(tmp_path: Path, cache_dir: Path) -> None:
    assert default_session().cache_dir == cache_dir
    assert default_session(cache_dir=tmp_path).cache_dir == tmp_path


def test_problem_loading_session_id_is_left_unhandled(test_token: Path) -> None:
    test_token.unlink()
    test_token.mkdir()
    with pytest.raises(OSError):
        default_session()
