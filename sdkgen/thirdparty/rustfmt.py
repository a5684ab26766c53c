import shutil
from typing_extensions import override

from .thirdparty import ThirdParty


class RustFmt(ThirdParty):
    def __init__(self, file_path, edition="2021"):
        self.file_path = file_path
        self.edition = edition

    @staticmethod
    @override
    def check_requirements() -> list[str]:
        if not shutil.which("rustfmt"):
            return ["rustfmt"]
        return []

    def format(self):
        from sdkgen import utils

        cmd = ["rustfmt", "--edition", self.edition, self.file_path]
        result = utils.run_command(cmd, capture_output=True)
        if result.returncode != 0:
            raise OSError(f"Failed to format the file: {self.file_path}")
