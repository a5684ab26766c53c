"""The nine artifact generators.

Each generator is a pure function of the function spec and settings. None
reads another's output, so they can run in any order.
"""

from typing import Callable, Optional

from sdkgen import logging as sdkgen_logging
from sdkgen.data_types import Artifact, FunctionSpec, GeneratedArtifactSet
from sdkgen.dispatch import select_template
from sdkgen.render.templates import ArtifactContext, render_template
from sdkgen.settings import GeneratorSettings

logger = sdkgen_logging.get_logger(__name__)


def _render(artifact: Artifact, spec: FunctionSpec, settings: Optional[GeneratorSettings]) -> str:
    template_name = select_template(artifact, spec)
    if template_name is None:
        return ""
    context = ArtifactContext.create(spec, settings or GeneratorSettings())
    return render_template(template_name, context)


def render_engine_sync(spec: FunctionSpec, settings: Optional[GeneratorSettings] = None) -> str:
    return _render(Artifact.ENGINE_SYNC, spec, settings)


def render_engine_async(spec: FunctionSpec, settings: Optional[GeneratorSettings] = None) -> str:
    return _render(Artifact.ENGINE_ASYNC, spec, settings)


def render_module(spec: FunctionSpec, settings: Optional[GeneratorSettings] = None) -> str:
    return _render(Artifact.MODULE, spec, settings)


def render_request_builder(spec: FunctionSpec, settings: Optional[GeneratorSettings] = None) -> str:
    return _render(Artifact.REQUEST_BUILDER, spec, settings)


def render_request_struct(spec: FunctionSpec, settings: Optional[GeneratorSettings] = None) -> str:
    return _render(Artifact.REQUEST_STRUCT, spec, settings)


def render_test_method(spec: FunctionSpec, settings: Optional[GeneratorSettings] = None) -> str:
    return _render(Artifact.TEST_METHOD, spec, settings)


def render_db_agent(spec: FunctionSpec, settings: Optional[GeneratorSettings] = None) -> str:
    return _render(Artifact.DB_AGENT, spec, settings)


def render_db_worker(spec: FunctionSpec, settings: Optional[GeneratorSettings] = None) -> str:
    return _render(Artifact.DB_WORKER, spec, settings)


def render_db_sqlite(spec: FunctionSpec, settings: Optional[GeneratorSettings] = None) -> str:
    return _render(Artifact.DB_SQLITE, spec, settings)


RENDERERS: dict[Artifact, Callable[[FunctionSpec, Optional[GeneratorSettings]], str]] = {
    Artifact.ENGINE_SYNC: render_engine_sync,
    Artifact.ENGINE_ASYNC: render_engine_async,
    Artifact.MODULE: render_module,
    Artifact.REQUEST_BUILDER: render_request_builder,
    Artifact.REQUEST_STRUCT: render_request_struct,
    Artifact.TEST_METHOD: render_test_method,
    Artifact.DB_AGENT: render_db_agent,
    Artifact.DB_WORKER: render_db_worker,
    Artifact.DB_SQLITE: render_db_sqlite,
}


def render_artifacts(
    spec: FunctionSpec,
    settings: Optional[GeneratorSettings] = None,
) -> GeneratedArtifactSet:
    texts = {artifact: renderer(spec, settings) for artifact, renderer in RENDERERS.items()}
    artifacts = GeneratedArtifactSet().with_texts(texts)
    logger.debug(
        "Rendered %s for %s",
        ", ".join(artifact.value for artifact in artifacts.non_empty()),
        spec.function_name,
    )
    return artifacts
