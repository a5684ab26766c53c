import argparse
import os

import pytest

from sdkgen import __main__ as cli
from sdkgen.utils import load_default_config


@pytest.fixture
def generate_parser():
    parser = argparse.ArgumentParser()
    cli.parse_generate(parser)
    return parser


@pytest.fixture
def params_parser():
    parser = argparse.ArgumentParser()
    cli.parse_params_command(parser)
    return parser


@pytest.fixture
def patched_cli(monkeypatch):
    config = load_default_config()
    monkeypatch.setattr(cli.utils, "try_load_config", lambda _: config)
    monkeypatch.setattr(cli, "_configure_logging_from_args", lambda *args, **kwargs: None)
    return config


def _run_generate(parser, argv):
    args = parser.parse_args(argv)
    cli.generate(parser, args)


def test_generate_defaults(generate_parser):
    args = generate_parser.parse_args(["setStatus", "status: i32"])
    assert args.return_type == ""
    assert args.request_body == ""
    assert args.operation is None
    assert args.pass_params is False
    assert args.db_functions is False
    assert args.only is None
    assert args.out_dir is None
    assert args.rustfmt is None


def test_generate_rejects_unknown_operation(generate_parser):
    with pytest.raises(SystemExit):
        generate_parser.parse_args(["setStatus", "status: i32", "--operation", "grpc"])


def test_generate_prints_every_non_empty_artifact(patched_cli, generate_parser, capsys):
    _run_generate(generate_parser, ["setStatus", "status: i32", "-b", "SetStatusRequest"])
    out = capsys.readouterr().out

    for name in ["engine_sync", "engine_async", "module", "request_builder", "request_struct", "test_method"]:
        assert f"// ===== {name} =====" in out
    assert "// ===== db_agent =====" not in out
    assert "pub fn set_status<CB>(&self, status: i32, cb: CB)" in out


def test_generate_only_filters_artifacts(patched_cli, generate_parser, capsys):
    _run_generate(generate_parser, [
        "deleteMessages", "final String targetId",
        "--operation", "database",
        "--db-functions",
        "--only", "db_agent",
        "--only", "db_worker",
    ])
    out = capsys.readouterr().out

    assert "// ===== db_agent =====" in out
    assert "// ===== db_worker =====" in out
    assert "// ===== engine_sync =====" not in out
    assert "target_id: &str" in out


def test_generate_uses_configured_default_operation(patched_cli, generate_parser, capsys):
    patched_cli["generator"] = dict(patched_cli["generator"], default_operation="database")
    _run_generate(generate_parser, ["deleteMessages", "count: i32", "-b", "DeleteMessagesRequest"])
    out = capsys.readouterr().out

    assert "// ===== request_builder =====" not in out
    assert "// ===== request_struct =====" not in out


def test_generate_empty_name_exits_with_error(patched_cli, generate_parser, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_generate(generate_parser, ["", "status: i32"])
    assert excinfo.value.code == 1
    assert "❌ Error: function name must not be empty" in capsys.readouterr().err


def test_generate_writes_files_into_out_dir(patched_cli, generate_parser, tmp_path, capsys):
    _run_generate(generate_parser, [
        "setStatus", "status: i32",
        "-b", "SetStatusRequest",
        "--out-dir", str(tmp_path),
    ])
    out = capsys.readouterr().out

    written = sorted(os.listdir(tmp_path))
    assert written == sorted([
        "engine_sync.rs",
        "engine_async.rs",
        "module.rs",
        "request_builder.rs",
        "set_status_request.rs",
        "test_method.rs",
    ])
    assert "✅ request_struct written to" in out
    content = (tmp_path / "set_status_request.rs").read_text()
    assert "pub(crate) struct SetStatusRequest<CB>" in content
    assert content.endswith("\n")


def test_relative_out_dir_resolves_against_project_path(patched_cli, generate_parser, tmp_path):
    patched_cli["generator"] = dict(patched_cli["generator"], project_path=str(tmp_path))
    _run_generate(generate_parser, [
        "setStatus", "status: i32",
        "--only", "module",
        "--out-dir", "src/generated",
    ])
    assert (tmp_path / "src" / "generated" / "module.rs").is_file()


def test_params_command_shows_projections(patched_cli, params_parser, capsys):
    args = params_parser.parse_args(["final String userId, int count"])
    cli.show_params(params_parser, args)
    out = capsys.readouterr().out

    assert "user_id: &str, count: i32" in out
    assert "&user_id, count" in out
    assert "user_id.as_str(), count" in out
    assert "let user_id = user_id.to_string();" in out
