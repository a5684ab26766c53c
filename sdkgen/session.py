"""Form state for an interactive front end.

A :class:`GeneratorSession` owns everything that changes between user
actions: the raw field values, the last generated artifacts and the status
line. Generation itself is delegated to the pure functions in
:mod:`sdkgen.generator`; the session only swaps in their results.
"""

from dataclasses import dataclass, field, replace
from typing import Callable

from sdkgen import logging as sdkgen_logging
from sdkgen.data_types import (Artifact, GeneratedArtifactSet,
                               InvalidFunctionInputError, OperationType)
from sdkgen.generator import (build_function_spec, derive_request_file_name,
                              generate)
from sdkgen.params import normalize_params
from sdkgen.settings import GeneratorSettings

logger = sdkgen_logging.get_logger(__name__)

STATUS_CLEARED = "All inputs cleared"


@dataclass(frozen=True)
class FormState:
    project_path: str = ""
    function_name: str = ""
    function_params: str = ""
    return_type: str = ""
    request_body_name: str = ""
    request_file_name: str = ""
    operation_type: OperationType = OperationType.NETWORK
    pass_params_to_request: bool = False
    generate_db_functions: bool = False


@dataclass
class GeneratorSession:
    settings: GeneratorSettings = field(default_factory=GeneratorSettings)
    form: FormState = field(init=False)
    artifacts: GeneratedArtifactSet = field(default_factory=GeneratedArtifactSet)
    status: str = ""

    def __post_init__(self) -> None:
        self.form = self._default_form(self.settings.project_path)

    def _default_form(self, project_path: str) -> FormState:
        return FormState(
            project_path=project_path,
            operation_type=self.settings.default_operation,
        )

    def _update(self, **changes) -> None:
        self.form = replace(self.form, **changes)

    def set_project_path(self, path: str) -> None:
        self._update(project_path=path)

    def set_function_name(self, name: str) -> None:
        self._update(function_name=name)

    def set_function_params(self, params: str) -> None:
        # Java-style input is converted as it is entered, so the field always
        # shows what generation will use.
        self._update(function_params=normalize_params(params))

    def set_return_type(self, return_type: str) -> None:
        self._update(return_type=return_type)

    def set_request_body_name(self, name: str) -> None:
        self._update(
            request_body_name=name,
            request_file_name=derive_request_file_name(name),
        )

    def set_request_file_name(self, name: str) -> None:
        self._update(request_file_name=name)

    def select_operation_type(self, operation_type: OperationType | str) -> None:
        self._update(operation_type=OperationType.parse(operation_type))

    def set_pass_params_to_request(self, enabled: bool) -> None:
        self._update(pass_params_to_request=enabled)

    def set_generate_db_functions(self, enabled: bool) -> None:
        self._update(generate_db_functions=enabled)

    def generate(self) -> str:
        """Regenerate every artifact from the current form.

        On invalid input the previous artifacts are kept as they are and only
        the status line reports the problem.
        """
        form = self.form
        try:
            spec = build_function_spec(
                form.function_name,
                form.function_params,
                return_type=form.return_type,
                operation_type=form.operation_type,
                request_body_name=form.request_body_name,
                request_file_name=form.request_file_name,
                pass_params_to_request=form.pass_params_to_request,
                generate_db_functions=form.generate_db_functions,
            )
        except InvalidFunctionInputError as exc:
            self.status = f"Error: {exc}"
            logger.info(self.status)
            return self.status

        self.artifacts = generate(spec, self.settings)
        self.status = f"{len(self.artifacts.non_empty())} artifacts generated successfully"
        logger.info(self.status)
        return self.status

    def clear(self) -> str:
        self.form = self._default_form(self.form.project_path)
        self.artifacts = GeneratedArtifactSet.empty()
        self.status = STATUS_CLEARED
        logger.info(self.status)
        return self.status

    def copy(self, artifact: Artifact, writer: Callable[[str], bool]) -> str:
        """Hand one artifact's text to ``writer`` (e.g. a clipboard setter).

        ``writer`` returns whether the copy succeeded; an exception from it
        counts as a failure.
        """
        try:
            ok = writer(self.artifacts.get(artifact))
        except Exception:
            logger.warning("Copying %s failed", artifact.value, exc_info=True)
            ok = False
        if ok:
            self.status = f"{artifact.value} copied to clipboard"
        else:
            self.status = f"Error: failed to copy {artifact.value}"
        return self.status
