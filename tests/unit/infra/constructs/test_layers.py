import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from infra.constructs.layers import PythonLocalBundling


@pytest.fixture
def layer_source(tmp_path: Path) -> Path:
    """requirements.txt を含む Layer ソースディレクトリ"""
    source_path = tmp_path / "source"
    source_path.mkdir()
    (source_path / "requirements.txt").write_text("aws-lambda-powertools>=3.0\n")
    return source_path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "output"
    path.mkdir()
    return path


class TestPythonLocalBundling:
    """PythonLocalBundlingのテスト"""

    def test_installs_into_python_directory_with_uv(self, layer_source, output_dir):
        """uvで成功した場合は pip を試さない"""
        bundling = PythonLocalBundling(str(layer_source))

        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)

            # Act
            result = bundling.try_bundle(str(output_dir), MagicMock())

        # Assert
        assert result is True
        mock_run.assert_called_once()
        command = mock_run.call_args[0][0]
        assert command[:3] == ["uv", "pip", "install"]
        assert command[command.index("--target") + 1] == str(output_dir / "python")

    @pytest.mark.parametrize(
        "uv_failure",
        [FileNotFoundError("uv not found"), subprocess.CalledProcessError(1, "uv")],
    )
    def test_falls_back_to_pip(self, layer_source, output_dir, uv_failure):
        """uvが使えない場合は pip で再試行する"""
        bundling = PythonLocalBundling(str(layer_source))

        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [uv_failure, MagicMock(returncode=0)]

            result = bundling.try_bundle(str(output_dir), MagicMock())

        assert result is True
        assert mock_run.call_args_list[1][0][0][0] == "pip"

    def test_returns_false_when_every_installer_fails(self, layer_source, output_dir):
        """すべて失敗した場合は Docker バンドリングに任せる"""
        bundling = PythonLocalBundling(str(layer_source))

        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [
                FileNotFoundError("uv not found"),
                subprocess.CalledProcessError(1, "pip"),
            ]

            result = bundling.try_bundle(str(output_dir), MagicMock())

        assert result is False
        assert mock_run.call_count == 2

    def test_returns_false_without_requirements(self, tmp_path: Path, output_dir):
        """requirements.txtが存在しない場合はインストーラーを呼ばない"""
        source_path = tmp_path / "empty"
        source_path.mkdir()
        bundling = PythonLocalBundling(str(source_path))

        with patch("subprocess.run") as mock_run:
            result = bundling.try_bundle(str(output_dir), MagicMock())

        assert result is False
        mock_run.assert_not_called()

    def test_custom_installers(self, layer_source, output_dir):
        """インストーラーの一覧は差し替えられる"""
        installers = (("poetry", lambda req, target: ["poetry", "run", "pip", str(target)]),)
        bundling = PythonLocalBundling(str(layer_source), installers=installers)

        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)

            result = bundling.try_bundle(str(output_dir), MagicMock())

        assert result is True
        assert mock_run.call_args[0][0][0] == "poetry"
