from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from sdkgen.data_types import UNIT_TYPE, FunctionSpec
from sdkgen.params import request_builder_declarations
from sdkgen.settings import GeneratorSettings

_TEMPLATE_DIR = Path(__file__).with_name("templates")

_BODY_INDENT = "    "
_TEST_INDENT = "\n        "


@lru_cache(maxsize=None)
def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(_TEMPLATE_DIR),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )


def _join_args(args: Iterable[str]) -> str:
    return ", ".join(args)


def _indented_block(lines: Iterable[str]) -> str:
    """Indent each line one level and terminate it, or return "" for no lines."""
    return "".join(f"{_BODY_INDENT}{line}\n" for line in lines)


@dataclass(frozen=True)
class ArtifactContext:
    """Template inputs shared by every artifact template.

    All lists are already joined and indented for the spot they fill, so the
    templates stay plain text with substitution points.
    """

    function_name: str
    module_name: str
    cb_type: str
    db_return_type: str
    ok_match_arm: str
    declarations: str
    borrowed_declarations: str
    names: str
    engine_call_args: str
    db_worker_call_args: str
    owned_rebindings: str
    build_args: str
    test_section: str
    test_call_prefix: str
    request_body_name: str
    pb_request_name: str
    builder_declarations: str
    request_new_args: str
    struct_fields: str
    new_params: str
    field_init: str

    @classmethod
    def create(cls, spec: FunctionSpec, settings: GeneratorSettings) -> "ArtifactContext":
        params = spec.params
        names = params.names()
        cb_type = spec.callback_type

        if cb_type == UNIT_TYPE:
            ok_match_arm = 'Ok(()) => "".to_string()'
        else:
            ok_match_arm = 'Ok(_) => "".to_string()'

        definitions = params.test_definitions()
        test_section = _TEST_INDENT.join(definitions) + _TEST_INDENT if definitions else ""

        # The request struct only carries the function's own parameters when
        # asked to; otherwise it holds just the payload and the callback.
        embed = spec.pass_params_to_request and bool(params)
        struct_lines = [f"pb_req: {spec.pb_request_name},", "cb: CB,"]
        new_params = [f"pb_req: {spec.pb_request_name}", "cb: CB"]
        field_inits = ["pb_req", "cb"]
        request_new_args = ["pb_req", "cb"]
        if embed:
            struct_lines.extend(params.struct_fields())
            new_params.extend(params.constructor_params())
            field_inits.extend(params.field_inits())
            # builder params are borrowed, the constructor wants declared types
            request_new_args.extend(
                f"{param.name}.to_string()" if param.type == "String" else param.name
                for param in params
            )

        return cls(
            function_name=spec.function_name,
            module_name=settings.module_name,
            cb_type=cb_type,
            db_return_type=spec.return_type or settings.db_default_return_type,
            ok_match_arm=ok_match_arm,
            declarations=_join_args(params.declarations()),
            borrowed_declarations=_join_args(params.borrowed_declarations()),
            names=_join_args(names),
            engine_call_args=_join_args(params.engine_call_args()),
            db_worker_call_args=_join_args(params.db_worker_call_args()),
            owned_rebindings=_indented_block(params.owned_rebindings()),
            build_args=_join_args([*names, "cb"]),
            test_section=test_section,
            test_call_prefix=f"{_join_args(names)}, " if names else "",
            request_body_name=spec.request_body_name or "",
            pb_request_name=spec.pb_request_name,
            builder_declarations=_join_args(request_builder_declarations(params)),
            request_new_args=_join_args(request_new_args),
            struct_fields="\n".join(f"{_BODY_INDENT}{line}" for line in struct_lines),
            new_params=_join_args(new_params),
            field_init=f"Self {{ {_join_args(field_inits)} }}",
        )

    def as_template_args(self) -> dict[str, Any]:
        return dict(self.__dict__)


def render_template(template_name: str, context: ArtifactContext) -> str:
    template = _get_env().get_template(template_name)
    return template.render(context.as_template_args())
