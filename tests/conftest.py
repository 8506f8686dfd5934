import pook as pook_mod
import pytest

from aocapi.models import Session


@pytest.fixture(autouse=True)
def mocked_sleep(mocker):
    no_sleep_till_brooklyn = mocker.patch("time.sleep")
    # nerf the rate-limiter - tests don't actually talk to AoC server at all
    mocker.patch("aocapi.utils.HttpClient._max_t", -1.0)
    return no_sleep_till_brooklyn


@pytest.fixture
def aocapi_config_dir(tmp_path):
    config_dir = tmp_path / ".config" / "aocapi"
    config_dir.mkdir(parents=True)
    return config_dir


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "input"


@pytest.fixture(autouse=True)
def remove_user_env(aocapi_config_dir, cache_dir, monkeypatch):
    monkeypatch.setattr("aocapi.models.AOC_API_DIR", aocapi_config_dir)
    monkeypatch.setattr("aocapi.models.AOC_API_CACHE_DIR", cache_dir)
    monkeypatch.delenv("AOC_SESSION", raising=False)
    monkeypatch.delenv("http_proxy", raising=False)
    monkeypatch.delenv("https_proxy", raising=False)


@pytest.fixture(autouse=True)
def test_token(aocapi_config_dir):
    token_file = aocapi_config_dir / "token"
    token_file.write_text("thetesttoken")
    return token_file


@pytest.fixture(autouse=True)
def pook():
    # any request without a registered mock fails instead of hitting the network
    pook_mod.on()
    yield pook_mod
    pook_mod.off()
    pook_mod.reset()


@pytest.fixture
def session(cache_dir):
    return Session.with_cookie("thetesttoken", cache_dir=cache_dir)
