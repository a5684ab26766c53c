"""The single place that decides which shape each artifact takes.

Every artifact has a rule saying when it is rendered at all, and a template
per operation type. Adding an operation type means adding rows here; the
render functions never branch on it themselves.
"""

from dataclasses import dataclass

from sdkgen import logging as sdkgen_logging
from sdkgen.data_types import Artifact, FunctionSpec, OperationType

logger = sdkgen_logging.get_logger(__name__)

_ALL_OPERATIONS = frozenset(OperationType)


@dataclass(frozen=True)
class ArtifactRule:
    operations: frozenset[OperationType] = _ALL_OPERATIONS
    requires_request_body: bool = False
    requires_db_functions: bool = False


_RULES: dict[Artifact, ArtifactRule] = {
    Artifact.ENGINE_SYNC: ArtifactRule(),
    Artifact.ENGINE_ASYNC: ArtifactRule(),
    Artifact.MODULE: ArtifactRule(),
    Artifact.REQUEST_BUILDER: ArtifactRule(
        operations=frozenset({OperationType.NETWORK}),
        requires_request_body=True,
    ),
    Artifact.REQUEST_STRUCT: ArtifactRule(
        operations=frozenset({OperationType.NETWORK}),
        requires_request_body=True,
    ),
    Artifact.TEST_METHOD: ArtifactRule(),
    Artifact.DB_AGENT: ArtifactRule(requires_db_functions=True),
    Artifact.DB_WORKER: ArtifactRule(requires_db_functions=True),
    Artifact.DB_SQLITE: ArtifactRule(requires_db_functions=True),
}

_NET = OperationType.NETWORK
_DB = OperationType.DATABASE

_TEMPLATES: dict[tuple[Artifact, OperationType], str] = {
    (Artifact.ENGINE_SYNC, _NET): "engine_sync_network.rs.j2",
    (Artifact.ENGINE_SYNC, _DB): "engine_sync_database.rs.j2",
    (Artifact.ENGINE_ASYNC, _NET): "engine_async_network.rs.j2",
    (Artifact.ENGINE_ASYNC, _DB): "engine_async_database.rs.j2",
    (Artifact.MODULE, _NET): "module_network.rs.j2",
    (Artifact.MODULE, _DB): "module_database.rs.j2",
    (Artifact.REQUEST_BUILDER, _NET): "request_builder.rs.j2",
    (Artifact.REQUEST_STRUCT, _NET): "request_struct.rs.j2",
    (Artifact.TEST_METHOD, _NET): "test_method_network.rs.j2",
    (Artifact.TEST_METHOD, _DB): "test_method_database.rs.j2",
    (Artifact.DB_AGENT, _NET): "db_agent.rs.j2",
    (Artifact.DB_AGENT, _DB): "db_agent.rs.j2",
    (Artifact.DB_WORKER, _NET): "db_worker.rs.j2",
    (Artifact.DB_WORKER, _DB): "db_worker.rs.j2",
    (Artifact.DB_SQLITE, _NET): "db_sqlite.rs.j2",
    (Artifact.DB_SQLITE, _DB): "db_sqlite.rs.j2",
}


def get_rule(artifact: Artifact) -> ArtifactRule:
    return _RULES[artifact]


def should_render(artifact: Artifact, spec: FunctionSpec) -> bool:
    rule = _RULES[artifact]
    if spec.operation_type not in rule.operations:
        return False
    if rule.requires_request_body and not spec.has_request_body:
        return False
    if rule.requires_db_functions and not spec.generate_db_functions:
        return False
    return True


def template_for(artifact: Artifact, operation_type: OperationType) -> str:
    try:
        return _TEMPLATES[(artifact, operation_type)]
    except KeyError as exc:
        raise ValueError(
            f"No {operation_type.value} template registered for {artifact.value}"
        ) from exc


def select_template(artifact: Artifact, spec: FunctionSpec) -> str | None:
    """Return the template name for ``artifact``, or None when it is skipped."""
    if not should_render(artifact, spec):
        logger.debug("Skipping %s for %s", artifact.value, spec.operation_type.value)
        return None
    return template_for(artifact, spec.operation_type)
