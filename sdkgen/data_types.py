from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, Optional

from sdkgen.naming import java_to_snake_case, pascal_to_snake_case
from sdkgen.params import ParameterList

UNIT_TYPE = "()"


class OperationType(Enum):
    DATABASE = "database"
    NETWORK = "network"

    @classmethod
    def parse(cls, value: "str | OperationType") -> "OperationType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown operation type: {value!r} (expected one of {choices})") from exc


class Artifact(Enum):
    ENGINE_SYNC = "engine_sync"
    ENGINE_ASYNC = "engine_async"
    MODULE = "module"
    REQUEST_BUILDER = "request_builder"
    REQUEST_STRUCT = "request_struct"
    TEST_METHOD = "test_method"
    DB_AGENT = "db_agent"
    DB_WORKER = "db_worker"
    DB_SQLITE = "db_sqlite"


class InvalidFunctionInputError(ValueError):
    pass


@dataclass(frozen=True)
class FunctionSpec:
    raw_name: str
    params: ParameterList
    return_type: Optional[str] = None
    operation_type: OperationType = OperationType.NETWORK
    request_body_name: Optional[str] = None
    request_file_name: Optional[str] = None
    pass_params_to_request: bool = False
    generate_db_functions: bool = False

    @property
    def function_name(self) -> str:
        return java_to_snake_case(self.raw_name)

    @property
    def callback_type(self) -> str:
        return self.return_type or UNIT_TYPE

    @property
    def has_request_body(self) -> bool:
        return bool(self.request_body_name)

    @property
    def pb_request_name(self) -> str:
        return f"Pb{self.request_body_name or ''}"

    @property
    def resolved_request_file_name(self) -> str:
        if self.request_file_name:
            return self.request_file_name
        return pascal_to_snake_case(self.request_body_name or "")


@dataclass(frozen=True)
class GeneratedArtifactSet:
    engine_sync: str = ""
    engine_async: str = ""
    module: str = ""
    request_builder: str = ""
    request_struct: str = ""
    test_method: str = ""
    db_agent: str = ""
    db_worker: str = ""
    db_sqlite: str = ""

    def get(self, artifact: Artifact) -> str:
        return getattr(self, artifact.value)

    def items(self) -> Iterator[tuple[Artifact, str]]:
        for artifact in Artifact:
            yield artifact, self.get(artifact)

    def non_empty(self) -> list[Artifact]:
        return [artifact for artifact, text in self.items() if text]

    def with_texts(self, texts: dict[Artifact, str]) -> "GeneratedArtifactSet":
        return replace(self, **{artifact.value: text for artifact, text in texts.items()})

    @classmethod
    def empty(cls) -> "GeneratedArtifactSet":
        return cls()
