import pytest

from sdkgen import utils
from sdkgen.data_types import OperationType
from sdkgen.settings import GeneratorSettings
from tests.utils import config


def test_default_config_contents(config):
    assert config["generator"]["module_name"] == "bugtags"
    assert config["generator"]["default_operation"] == "network"
    assert config["generator"]["db_default_return_type"] == "()"
    assert config["output"]["rustfmt"] is False
    assert config["logging"]["console_level"] == "WARNING"


def test_merge_configs_prefers_user_values():
    default = {"generator": {"module_name": "bugtags", "project_path": ""}, "output": {"rustfmt": False}}
    user = {"generator": {"module_name": "im"}, "extra": 1}

    merged = utils._merge_configs(user, default)

    assert merged == {
        "generator": {"module_name": "im", "project_path": ""},
        "output": {"rustfmt": False},
        "extra": 1,
    }


def test_merge_configs_type_mismatch():
    with pytest.raises(TypeError, match="Type mismatch for key 'generator'"):
        utils._merge_configs({"generator": "im"}, {"generator": {"module_name": "bugtags"}})


def test_try_load_config_explicit_file(tmp_path):
    config_file = tmp_path / "custom.toml"
    config_file.write_text('[generator]\nmodule_name = "im"\ndb_default_return_type = "bool"\n')

    config = utils.try_load_config(str(config_file))

    assert config["generator"]["module_name"] == "im"
    assert config["generator"]["db_default_return_type"] == "bool"
    assert config["generator"]["default_operation"] == "network"


def test_try_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        utils.try_load_config(str(tmp_path / "missing.toml"))


def test_try_load_config_from_env(tmp_path, monkeypatch):
    config_file = tmp_path / "env.toml"
    config_file.write_text('[output]\nrustfmt = true\n')
    monkeypatch.setenv("SDKGEN_CONFIG", str(config_file))

    config = utils.try_load_config()

    assert config["output"]["rustfmt"] is True


def test_try_load_config_env_missing_file(tmp_path, monkeypatch):
    monkeypatch.setenv("SDKGEN_CONFIG", str(tmp_path / "nope.toml"))
    with pytest.raises(FileNotFoundError, match="SDKGEN_CONFIG"):
        utils.try_load_config()


def test_try_load_config_from_cwd(tmp_path, monkeypatch):
    (tmp_path / "sdkgen.toml").write_text('[generator]\nproject_path = "~/work/im-sdk"\n')
    monkeypatch.delenv("SDKGEN_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)

    config = utils.try_load_config()

    assert config["generator"]["project_path"] == "~/work/im-sdk"


def test_settings_from_default_config(config):
    settings = GeneratorSettings.from_config(config)
    assert settings == GeneratorSettings()


def test_settings_from_empty_config():
    assert GeneratorSettings.from_config({}) == GeneratorSettings()
    assert GeneratorSettings.from_config(None) == GeneratorSettings()


def test_settings_from_custom_config():
    settings = GeneratorSettings.from_config({
        "generator": {
            "module_name": "im",
            "default_operation": "Database",
            "db_default_return_type": "bool",
            "project_path": "/src/sdk",
        },
        "output": {"rustfmt": True},
    })
    assert settings.module_name == "im"
    assert settings.default_operation == OperationType.DATABASE
    assert settings.db_default_return_type == "bool"
    assert settings.project_path == "/src/sdk"
    assert settings.rustfmt is True


def test_settings_bad_default_operation():
    with pytest.raises(ValueError, match="Unknown operation type"):
        GeneratorSettings.from_config({"generator": {"default_operation": "rpc"}})
