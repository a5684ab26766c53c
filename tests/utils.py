import pytest

from sdkgen.generator import build_function_spec
from sdkgen.settings import GeneratorSettings
from sdkgen.utils import load_default_config


@pytest.fixture
def config():
    return load_default_config()


@pytest.fixture
def settings(config):
    return GeneratorSettings.from_config(config)


def network_spec(**overrides):
    kwargs = {
        "function_name": "setStatus",
        "function_params": "status: i32",
        "request_body_name": "SetStatusRequest",
        "operation_type": "network",
    }
    kwargs.update(overrides)
    return build_function_spec(kwargs.pop("function_name"), kwargs.pop("function_params"), **kwargs)


def database_spec(**overrides):
    kwargs = {
        "function_name": "deleteMessages",
        "function_params": "target_id: &str, count: i32",
        "operation_type": "database",
    }
    kwargs.update(overrides)
    return build_function_spec(kwargs.pop("function_name"), kwargs.pop("function_params"), **kwargs)
