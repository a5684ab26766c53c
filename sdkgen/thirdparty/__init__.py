from .rustfmt import RustFmt
from .thirdparty import ThirdParty


def check_all_requirements() -> list[str]:
    return RustFmt.check_requirements()


__all__ = [
    'RustFmt',
    'ThirdParty',
    'check_all_requirements',
]
