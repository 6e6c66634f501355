from pathlib import Path

import pytest

from orbgen.config import ConfigurationError, WizardConfig, load_wizard_config


def test_load_wizard_config_prefers_environment_over_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
        wizard:
          allow_random_values: true
          recipient_prefix: cosmos
          log_level: debug
        """
    )

    env_map = {
        "ORBGEN_ALLOW_RANDOM": "0",
        "ORBGEN_RECIPIENT_PREFIX": "noble",
    }

    config = load_wizard_config(config_path=config_path, env=env_map)

    assert isinstance(config, WizardConfig)
    assert config.allow_random_values is False
    assert config.recipient_prefix == "noble"
    assert config.log_level == "DEBUG"


def test_load_wizard_config_reads_default_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / ".orbgen.yaml"
    monkeypatch.setattr("orbgen.config.DEFAULT_CONFIG_PATH", config_path)

    config_path.write_text(
        """
        wizard:
          allow_random_values: no
          log_level: info
        """
    )

    config = load_wizard_config(env={})

    assert config.allow_random_values is False
    assert config.recipient_prefix is None
    assert config.log_level == "INFO"


def test_load_wizard_config_defaults_without_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("orbgen.config.DEFAULT_CONFIG_PATH", tmp_path / "absent.yaml")

    config = load_wizard_config(env={})

    assert config == WizardConfig()
    assert config.log_level_number == 30


def test_overrides_win_over_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("orbgen.config.DEFAULT_CONFIG_PATH", tmp_path / "absent.yaml")

    config = load_wizard_config(
        env={"ORBGEN_LOG_LEVEL": "error", "ORBGEN_ALLOW_RANDOM": "yes"},
        overrides={"log_level": "DEBUG", "allow_random_values": False},
    )

    assert config.log_level == "DEBUG"
    assert config.allow_random_values is False


def test_config_path_from_environment(tmp_path: Path) -> None:
    config_path = tmp_path / "env.yaml"
    config_path.write_text("wizard:\n  recipient_prefix: noble\n")

    config = load_wizard_config(env={"ORBGEN_CONFIG": str(config_path)})

    assert config.recipient_prefix == "noble"


def test_explicit_config_path_must_exist(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_wizard_config(config_path=tmp_path / "missing.yaml", env={})


@pytest.mark.parametrize(
    "body",
    [
        "- not\n- a mapping\n",
        "wizard: [1, 2]\n",
        "wizard:\n  allow_random_values: maybe\n",
        "wizard:\n  log_level: loud\n",
        "wizard:\n  recipient_prefix: 42\n",
    ],
)
def test_invalid_config_values_are_rejected(tmp_path: Path, body: str) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(body)

    with pytest.raises(ConfigurationError):
        load_wizard_config(config_path=config_path, env={})
