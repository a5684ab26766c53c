from dataclasses import dataclass
from typing import Any, Optional

from sdkgen.data_types import UNIT_TYPE, OperationType


@dataclass(frozen=True)
class GeneratorSettings:
    """Configuration knobs the renderer and the session read.

    Built from the ``[generator]`` and ``[output]`` tables of the merged
    configuration; the defaults match the bundled ``sdkgen.default.toml``.
    """

    module_name: str = "bugtags"
    default_operation: OperationType = OperationType.NETWORK
    db_default_return_type: str = UNIT_TYPE
    project_path: str = ""
    rustfmt: bool = False

    @classmethod
    def from_config(cls, config: Optional[dict[str, Any]]) -> "GeneratorSettings":
        if not config:
            return cls()
        generator_cfg = config.get("generator", {})
        output_cfg = config.get("output", {})
        defaults = cls()
        return cls(
            module_name=generator_cfg.get("module_name") or defaults.module_name,
            default_operation=OperationType.parse(
                generator_cfg.get("default_operation", defaults.default_operation)
            ),
            db_default_return_type=(
                generator_cfg.get("db_default_return_type") or defaults.db_default_return_type
            ),
            project_path=generator_cfg.get("project_path", defaults.project_path),
            rustfmt=bool(output_cfg.get("rustfmt", defaults.rustfmt)),
        )
