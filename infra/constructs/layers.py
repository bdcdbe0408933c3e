import logging
import subprocess
from pathlib import Path

import jsii
from aws_cdk import BundlingOptions, ILocalBundling
from aws_cdk import aws_lambda as _lambda
from constructs import Construct

logger = logging.getLogger(__name__)

LAYER_SOURCE_PATH = "layers/common_layer"
LAYER_RUNTIME = _lambda.Runtime.PYTHON_3_14


def _uv_command(requirements: Path, target: Path) -> list[str]:
    return ["uv", "pip", "install", "-r", str(requirements), "--target", str(target), "--quiet"]


def _pip_command(requirements: Path, target: Path) -> list[str]:
    return ["pip", "install", "-r", str(requirements), "-t", str(target), "--quiet"]


# 先頭から順に試すインストーラー
INSTALLERS = (
    ("uv", _uv_command),
    ("pip", _pip_command),
)


@jsii.implements(ILocalBundling)
class PythonLocalBundling:
    """Docker を使わずローカルで依存ライブラリを Layer 用に展開する"""

    def __init__(self, source_path: str, installers=INSTALLERS) -> None:
        self.source_path = source_path
        self.installers = installers

    def try_bundle(self, output_dir: str, options: BundlingOptions) -> bool:
        """ローカルでバンドリングを試行する。

        Returns:
            True: いずれかのインストーラーで成功（Docker をスキップ）
            False: すべて失敗（Docker にフォールバック）
        """
        del options
        requirements = Path(self.source_path) / "requirements.txt"
        if not requirements.exists():
            logger.warning("requirements.txt not found: %s", requirements)
            return False

        target = Path(output_dir) / "python"
        for name, build_command in self.installers:
            if self._run(name, build_command(requirements, target)):
                return True

        logger.warning("Local bundling failed, falling back to Docker")
        return False

    def _run(self, name: str, command: list[str]) -> bool:
        logger.info("Trying local bundling with %s...", name)
        try:
            subprocess.run(command, check=True)
        except FileNotFoundError:
            logger.debug("%s not found", name)
            return False
        except subprocess.CalledProcessError as e:
            logger.debug("%s install failed: %s", name, e)
            return False
        logger.info("Local bundling with %s succeeded", name)
        return True


class Layers(Construct):
    """Lambda Layers Construct"""

    def __init__(self, scope: Construct, id: str) -> None:
        super().__init__(scope, id)

        self.common_layer = _lambda.LayerVersion(
            self,
            "CommonLayer",
            code=_lambda.Code.from_asset(
                LAYER_SOURCE_PATH,
                bundling=BundlingOptions(
                    image=LAYER_RUNTIME.bundling_image,
                    command=[
                        "bash",
                        "-c",
                        "pip install -r requirements.txt -t /asset-output/python",
                    ],
                    local=PythonLocalBundling(LAYER_SOURCE_PATH),
                ),
            ),
            compatible_runtimes=[LAYER_RUNTIME],
            description="Hotel booking runtime dependencies (powertools, pydantic, httpx)",
        )
