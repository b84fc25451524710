"""Tests for settings defaults and environment overrides."""

from account_relay.config import Settings


def test_defaults():
    config = Settings(_env_file=None)

    assert config.IDENTITY_TOOLKIT_URL == "https://identitytoolkit.googleapis.com/v1"
    assert config.VEHICLE_SAVE_BATCH_SIZE == 3
    assert config.VEHICLE_SAVE_DELAY == 0.5
    assert config.GENERATED_ID_LENGTH == 10
    assert config.CLONE_PRESERVE_EXTRA_DATA is True
    assert config.PORT == 10000


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FIREBASE_API_KEY", "from-env")
    monkeypatch.setenv("VEHICLE_SAVE_BATCH_SIZE", "5")
    monkeypatch.setenv("CLONE_PRESERVE_EXTRA_DATA", "false")

    config = Settings(_env_file=None)

    assert config.FIREBASE_API_KEY == "from-env"
    assert config.VEHICLE_SAVE_BATCH_SIZE == 5
    assert config.CLONE_PRESERVE_EXTRA_DATA is False


def test_unknown_environment_keys_ignored(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("SOMETHING_ELSE=1\nSAVE_VEHICLE_FUNCTION=SaveCarsV2\n")

    config = Settings(_env_file=env_file)

    assert config.SAVE_VEHICLE_FUNCTION == "SaveCarsV2"
