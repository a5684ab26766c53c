from .renderer import (RENDERERS, render_artifacts, render_db_agent,
                       render_db_sqlite, render_db_worker, render_engine_async,
                       render_engine_sync, render_module,
                       render_request_builder, render_request_struct,
                       render_test_method)
from .templates import ArtifactContext, render_template

__all__ = [
    "ArtifactContext",
    "RENDERERS",
    "render_artifacts",
    "render_template",
    "render_engine_sync",
    "render_engine_async",
    "render_module",
    "render_request_builder",
    "render_request_struct",
    "render_test_method",
    "render_db_agent",
    "render_db_worker",
    "render_db_sqlite",
]
