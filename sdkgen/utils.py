import os
import subprocess
import tempfile
from collections import namedtuple
from pathlib import Path
from typing import Sequence

import tomli as toml

from sdkgen import logging as sdkgen_logging
from sdkgen.thirdparty.rustfmt import RustFmt

logger = sdkgen_logging.get_logger(__name__)

ProcessResult = namedtuple("ProcessResult", ["stdout", "stderr", "returncode"])


def run_command(
    cmd: Sequence[str | os.PathLike[str]],
    *,
    capture_output: bool = True,
    text: bool = True,
    timeout: float | None = None,
    cwd: str | os.PathLike[str] | None = None,
    check: bool = False,
) -> ProcessResult:
    completed = subprocess.run(
        cmd,
        stdout=subprocess.PIPE if capture_output else None,
        stderr=subprocess.PIPE if capture_output else None,
        cwd=cwd,
        text=text,
        timeout=timeout,
        check=False,
    )
    stdout = completed.stdout if capture_output and completed.stdout is not None else ""
    stderr = completed.stderr if capture_output and completed.stderr is not None else ""
    result = ProcessResult(stdout, stderr, completed.returncode)
    if check and result.returncode != 0:
        raise subprocess.CalledProcessError(result.returncode, cmd, stdout, stderr)
    return result


def save_code(path, code, *, rustfmt: bool = False):
    path_dir = os.path.dirname(path)
    if path_dir:
        os.makedirs(path_dir, exist_ok=True)
    with open(path, "w") as f:
        f.write(code)
    if not rustfmt:
        return
    formatter = RustFmt(path)
    try:
        formatter.format()
    except OSError:
        logger.warning("Cannot format %s with rustfmt", path)  # keep the unformatted code


def format_rust_snippet(code: str) -> str:
    """Return the rustfmt-formatted version of `code` when possible."""

    if RustFmt.check_requirements():
        logger.warning("rustfmt is not installed; leaving snippets unformatted")
        return code
    with tempfile.TemporaryDirectory() as td:
        path = os.path.join(td, "snippet.rs")
        save_code(path, code, rustfmt=True)
        with open(path, "r") as f:
            return f.read().rstrip()


def _merge_configs(config, default_config):
    config_out = {}

    for key, default_value in default_config.items():
        if key in config:
            if isinstance(config[key], dict) and isinstance(default_value, dict):
                config_out[key] = _merge_configs(config[key], default_value)
            elif isinstance(config[key], dict) or isinstance(default_value, dict):
                raise TypeError(f"Type mismatch for key '{key}': "
                                f"config has {type(config[key])}, default_config has {type(default_value)}")
            # Otherwise, config[key] takes precedence
            else:
                config_out[key] = config[key]
        else:
            config_out[key] = default_value

    # Add keys that are only in config
    for key, value in config.items():
        if key not in default_config:
            config_out[key] = value

    return config_out


def load_default_config():
    """Load the bundled default configuration from packaged resources."""
    resource_dir = Path(__file__).resolve().parent / "_resources"
    candidate = resource_dir / "sdkgen.default.toml"
    if candidate.is_file():
        with open(candidate, "rb") as f:
            return toml.load(f)

    raise FileNotFoundError("Could not load _resources/sdkgen.default.toml")


def try_load_config(config_file=None):
    """Load user configuration merged with defaults.

    Resolution order:
    1. Explicit `config_file` argument.
    2. `SDKGEN_CONFIG` environment variable.
    3. `./sdkgen.toml` relative to current working directory.
    4. `sdkgen.toml` inside the repository checkout (development mode).
    If none are found, return the default config alone.
    """
    default_config = load_default_config()

    def _load_user_config(path: Path) -> dict:
        with open(path, "rb") as f:
            return toml.load(f)

    if config_file:
        candidate = Path(config_file).expanduser()
        if not candidate.is_file():
            raise FileNotFoundError(f"Could not find config file {candidate}")
        user_config = _load_user_config(candidate)
        return _merge_configs(user_config, default_config)

    env_candidate = os.environ.get("SDKGEN_CONFIG")
    if env_candidate:
        env_path = Path(env_candidate).expanduser()
        if not env_path.is_file():
            raise FileNotFoundError(f"SDKGEN_CONFIG={env_candidate} does not point to a readable file")
        user_config = _load_user_config(env_path)
        return _merge_configs(user_config, default_config)

    cwd_candidate = Path.cwd() / "sdkgen.toml"
    if cwd_candidate.is_file():
        user_config = _load_user_config(cwd_candidate)
        return _merge_configs(user_config, default_config)

    # Load from repository root if in development mode
    package_dir = Path(__file__).resolve().parent
    repo_candidate = package_dir.parent / "sdkgen.toml"
    if repo_candidate.is_file():
        user_config = _load_user_config(repo_candidate)
        return _merge_configs(user_config, default_config)

    logger.debug("No user config found; falling back to default configuration only")
    return default_config
