import argparse
import os
import sys

from sdkgen import generator, utils
from sdkgen import logging as sdkgen_logging
from sdkgen.data_types import Artifact, InvalidFunctionInputError, OperationType
from sdkgen.params import normalize_params, parse_params, request_builder_declarations
from sdkgen.settings import GeneratorSettings

_ARTIFACT_CHOICES = [artifact.value for artifact in Artifact]
_OPERATION_CHOICES = [operation.value for operation in OperationType]


def _add_common_arguments(parser):
    parser.add_argument(
        '--config',
        '-c',
        type=str,
        dest='config_file',
        help='The configuration file to use'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        help='Console log level (DEBUG, INFO, WARNING, ...), overrides [logging].console_level'
    )

    parser.add_argument(
        '--log-dir',
        type=str,
        default=None,
        help='Also write a log file into this directory'
    )


def parse_generate(parser):
    parser.add_argument(
        'function_name',
        type=str,
        help='The Java-style method name, e.g. deleteUltraGroupMessages'
    )

    parser.add_argument(
        'function_params',
        type=str,
        help='The parameter list, either Rust-style ("user_id: &str, count: i32") or Java-style ("final String userId, int count")'
    )

    parser.add_argument(
        '--return-type',
        '-t',
        type=str,
        default='',
        help='The callback/result type, default to ()'
    )

    parser.add_argument(
        '--request-body',
        '-b',
        type=str,
        default='',
        help='The PascalCase request body struct name, only used for network operations'
    )

    parser.add_argument(
        '--request-file',
        type=str,
        default='',
        help='The file stem for the request struct, default to the snake_case request body name'
    )

    parser.add_argument(
        '--operation',
        '-o',
        choices=_OPERATION_CHOICES,
        default=None,
        help='Whether the function performs a network request or a database operation, default from [generator].default_operation'
    )

    parser.add_argument(
        '--pass-params',
        action='store_true',
        help='Embed the function parameters in the request struct'
    )

    parser.add_argument(
        '--db-functions',
        action='store_true',
        help='Also generate the db_agent/db_worker/db_sqlite chain'
    )

    parser.add_argument(
        '--only',
        choices=_ARTIFACT_CHOICES,
        action='append',
        default=None,
        help='Only output the given artifact, can be repeated'
    )

    parser.add_argument(
        '--out-dir',
        '-d',
        type=str,
        default=None,
        help='Write each artifact into this directory instead of printing it'
    )

    parser.add_argument(
        '--rustfmt',
        action='store_true',
        default=None,
        help='Format the artifacts with rustfmt, overrides [output].rustfmt'
    )

    _add_common_arguments(parser)


def parse_params_command(parser):
    parser.add_argument(
        'function_params',
        type=str,
        help='The parameter list to normalize'
    )

    _add_common_arguments(parser)


def _configure_logging_from_args(config, args):
    sdkgen_logging.configure_logging(
        config,
        console_level_override=args.log_level,
        log_dir_override=args.log_dir,
    )


def _resolve_out_dir(out_dir: str, settings: GeneratorSettings) -> str:
    if os.path.isabs(out_dir) or not settings.project_path:
        return os.path.abspath(out_dir)
    return os.path.join(os.path.expanduser(settings.project_path), out_dir)


def _artifact_file_name(artifact: Artifact, spec) -> str:
    if artifact == Artifact.REQUEST_STRUCT and spec.resolved_request_file_name:
        return f"{spec.resolved_request_file_name}.rs"
    return f"{artifact.value}.rs"


def generate(parser, args):
    config = utils.try_load_config(args.config_file)
    _configure_logging_from_args(config, args)
    settings = GeneratorSettings.from_config(config)

    try:
        spec = generator.build_function_spec(
            args.function_name,
            args.function_params,
            return_type=args.return_type,
            operation_type=args.operation or settings.default_operation,
            request_body_name=args.request_body,
            request_file_name=args.request_file,
            pass_params_to_request=args.pass_params,
            generate_db_functions=args.db_functions,
        )
    except InvalidFunctionInputError as e:
        print(f'❌ Error: {e}', file=sys.stderr)
        sys.exit(1)

    artifacts = generator.generate(spec, settings)
    selected = [
        artifact for artifact in artifacts.non_empty()
        if not args.only or artifact.value in args.only
    ]
    use_rustfmt = settings.rustfmt if args.rustfmt is None else args.rustfmt

    if args.out_dir:
        out_dir = _resolve_out_dir(args.out_dir, settings)
        for artifact in selected:
            path = os.path.join(out_dir, _artifact_file_name(artifact, spec))
            utils.save_code(path, artifacts.get(artifact) + "\n", rustfmt=use_rustfmt)
            print(f'✅ {artifact.value} written to {path}')
        return

    for artifact in selected:
        text = artifacts.get(artifact)
        if use_rustfmt:
            text = utils.format_rust_snippet(text)
        print(f'// ===== {artifact.value} =====')
        print(text)
        print()


def show_params(parser, args):
    config = utils.try_load_config(args.config_file)
    _configure_logging_from_args(config, args)

    normalized = normalize_params(args.function_params)
    params = parse_params(normalized)

    rows = [
        ('normalized', normalized),
        ('canonical', params.canonical()),
        ('borrowed', ', '.join(params.borrowed_declarations())),
        ('names', ', '.join(params.names())),
        ('engine call args', ', '.join(params.engine_call_args())),
        ('db worker call args', ', '.join(params.db_worker_call_args())),
        ('request builder', ', '.join(request_builder_declarations(params))),
        ('struct fields', ' '.join(params.struct_fields())),
        ('field inits', ', '.join(params.field_inits())),
        ('owned rebindings', ' '.join(params.owned_rebindings())),
        ('trace pairs', ', '.join(params.trace_pairs())),
        ('test definitions', ' '.join(params.test_definitions())),
    ]
    width = max(len(label) for label, _ in rows)
    for label, value in rows:
        print(f'{label.ljust(width)} : {value}')


def main():
    parser = argparse.ArgumentParser(
        description='sdkgen: generate coordinated Rust SDK snippets from a Java-style method description'
    )

    subparsers = parser.add_subparsers(
        dest='subcommand',
        description='valid subcommands for sdkgen',
        help='Use one of these subcommands followed by -h for additional help',
        required=True
    )

    generate_parser = subparsers.add_parser(
        'generate',
        help='Generate the engine, module, request, test and db snippets for one method'
    )

    params_parser = subparsers.add_parser(
        'params',
        help='Show how a parameter list is normalized and projected'
    )

    parse_generate(generate_parser)
    parse_params_command(params_parser)

    args = parser.parse_args()

    match args.subcommand:
        case 'generate':
            generate(parser, args)
        case 'params':
            show_params(parser, args)
        case _:
            parser.print_help()


if __name__ == '__main__':
    main()
