from .data_types import (Artifact, FunctionSpec, GeneratedArtifactSet,
                         InvalidFunctionInputError, OperationType)
from .generator import build_function_spec, generate
from .params import ParameterList, ParameterSpec, normalize_params, parse_params
from .session import GeneratorSession
from .settings import GeneratorSettings

__all__ = [
    'Artifact',
    'FunctionSpec',
    'GeneratedArtifactSet',
    'GeneratorSession',
    'GeneratorSettings',
    'InvalidFunctionInputError',
    'OperationType',
    'ParameterList',
    'ParameterSpec',
    'build_function_spec',
    'generate',
    'normalize_params',
    'parse_params',
]
