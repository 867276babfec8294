import pytest

from lifetrack import configuration
from lifetrack.remote.factory import build_session, build_storage_client
from lifetrack.remote.local import LocalStorageClient
from lifetrack.remote.postgrest import PostgrestStorageClient
from lifetrack.repository.configuration import ConfigurationRepository


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_path)
    return config_path


def test_missing_keys_are_filled_with_defaults(config_file):
    config_file.write_text("backend: postgrest\nuser_id: alice\n")
    config = ConfigurationRepository().get_config()
    assert config["backend"] == "postgrest"
    assert config["user_id"] == "alice"
    assert config["day_badge_cap"] == 5
    assert config["timeline_page_months"] == 12


def test_update_and_flush(config_file):
    config_file.write_text("")
    repo = ConfigurationRepository()
    repo.update_config(first_weekday="monday", access_token="secret")
    assert repo.flush()
    assert not repo.flush()

    reloaded = ConfigurationRepository().get_config()
    assert reloaded["first_weekday"] == "monday"
    assert reloaded["access_token"] == "secret"

    repo.update_config(remove_access_token=True)
    assert repo.get_config()["access_token"] is None


def test_build_storage_client(tmp_path):
    config = configuration.get_default_config()
    config["data_path"] = str(tmp_path)
    local = build_storage_client(config)
    assert isinstance(local, LocalStorageClient)
    assert local.data_path == tmp_path

    config["backend"] = "postgrest"
    with pytest.raises(ValueError):
        build_storage_client(config)

    config["backend_url"] = "https://db.example.com"
    config["api_key"] = "anon-key"
    assert isinstance(build_storage_client(config), PostgrestStorageClient)


def test_build_session():
    config = configuration.get_default_config()
    assert build_session(config) == {"user_id": "local", "access_token": None}
    config["user_id"] = None
    assert build_session(config) is None
