from typing import Optional

from sdkgen import logging as sdkgen_logging
from sdkgen.data_types import (FunctionSpec, GeneratedArtifactSet,
                               InvalidFunctionInputError, OperationType)
from sdkgen.naming import pascal_to_snake_case
from sdkgen.params import normalize_params, parse_params
from sdkgen.render import render_artifacts
from sdkgen.settings import GeneratorSettings

logger = sdkgen_logging.get_logger(__name__)


def validate_inputs(function_name: str, function_params: str) -> None:
    if not function_name:
        raise InvalidFunctionInputError("function name must not be empty")
    if not function_params:
        raise InvalidFunctionInputError("function parameters must not be empty")


def derive_request_file_name(request_body_name: str) -> str:
    return pascal_to_snake_case(request_body_name)


def build_function_spec(
    function_name: str,
    function_params: str,
    *,
    return_type: Optional[str] = None,
    operation_type: OperationType | str = OperationType.NETWORK,
    request_body_name: Optional[str] = None,
    request_file_name: Optional[str] = None,
    pass_params_to_request: bool = False,
    generate_db_functions: bool = False,
) -> FunctionSpec:
    """Validate raw form input and build a fresh :class:`FunctionSpec`.

    ``function_params`` may be Java- or Rust-style; it is normalized and
    parsed here. When ``request_file_name`` is not given it is derived from
    ``request_body_name``; an explicit value always wins.

    Raises:
        InvalidFunctionInputError: the name or the parameter string is empty.
    """
    validate_inputs(function_name, function_params)

    params = parse_params(normalize_params(function_params))
    if request_body_name and not request_file_name:
        request_file_name = derive_request_file_name(request_body_name)

    return FunctionSpec(
        raw_name=function_name,
        params=params,
        return_type=return_type or None,
        operation_type=OperationType.parse(operation_type),
        request_body_name=request_body_name or None,
        request_file_name=request_file_name or None,
        pass_params_to_request=pass_params_to_request,
        generate_db_functions=generate_db_functions,
    )


def generate(spec: FunctionSpec, settings: Optional[GeneratorSettings] = None) -> GeneratedArtifactSet:
    logger.debug(
        "Generating %s (%s, %d params)",
        spec.function_name,
        spec.operation_type.value,
        len(spec.params),
    )
    return render_artifacts(spec, settings)
