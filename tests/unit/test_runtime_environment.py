"""Tests for locating the ROS runtime."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from topicscope.core.errors import RuntimeNotFoundError, UnsupportedRuntimeError
from topicscope.runtime.environment import (
    find_setup_scripts,
    locate_runtime,
    parse_env_output,
    source_setup_script,
)


def _make_distro(root: Path, name: str) -> Path:
    script = root / name / "setup.bash"
    script.parent.mkdir(parents=True)
    script.write_text("# setup\n")
    return script


class TestAlreadySourced:
    def test_uses_given_environment(self, tmp_path: Path) -> None:
        runtime = locate_runtime(tmp_path, environ={"ROS_VERSION": "2", "ROS_DISTRO": "jazzy"})
        assert runtime.version == "2"
        assert runtime.distro == "jazzy"
        assert runtime.is_ros2
        assert runtime.setup_script is None

    def test_missing_distro_is_unknown(self, tmp_path: Path) -> None:
        runtime = locate_runtime(tmp_path, environ={"ROS_VERSION": "1"})
        assert runtime.distro == "unknown"

    def test_unsupported_version(self, tmp_path: Path) -> None:
        with pytest.raises(UnsupportedRuntimeError, match="Unsupported ROS_VERSION: '3'"):
            locate_runtime(tmp_path, environ={"ROS_VERSION": "3"})


class TestSourcing:
    def test_nothing_to_source(self, tmp_path: Path) -> None:
        with pytest.raises(RuntimeNotFoundError, match="No ROS found under"):
            locate_runtime(tmp_path, environ={})

    def test_sources_first_distro(self, tmp_path: Path) -> None:
        _make_distro(tmp_path, "noetic")
        first = _make_distro(tmp_path, "humble")

        with patch(
            "topicscope.runtime.environment.source_setup_script",
            return_value={"ROS_VERSION": "2", "ROS_DISTRO": "humble"},
        ) as mock_source:
            runtime = locate_runtime(tmp_path, environ={"PATH": "/usr/bin"})

        mock_source.assert_called_once_with(first)
        assert runtime.setup_script == first
        assert runtime.distro == "humble"

    def test_sourced_script_without_version(self, tmp_path: Path) -> None:
        _make_distro(tmp_path, "broken")
        with patch("topicscope.runtime.environment.source_setup_script", return_value={}):
            with pytest.raises(RuntimeNotFoundError):
                locate_runtime(tmp_path, environ={})

    def test_find_setup_scripts_skips_dirs_without_script(self, tmp_path: Path) -> None:
        (tmp_path / "empty").mkdir()
        script = _make_distro(tmp_path, "iron")
        assert find_setup_scripts(tmp_path) == [script]
        assert find_setup_scripts(tmp_path / "missing") == []


class TestSourceSetupScript:
    def test_captures_environment(self, tmp_path: Path) -> None:
        mock_run = MagicMock()
        mock_run.returncode = 0
        mock_run.stdout = "ROS_VERSION=2\0ROS_DISTRO=humble\0"

        with patch("subprocess.run", return_value=mock_run) as mock_subprocess:
            env = source_setup_script(tmp_path / "setup.bash")

        assert env == {"ROS_VERSION": "2", "ROS_DISTRO": "humble"}
        cmd = mock_subprocess.call_args[0][0]
        assert cmd[0] == "bash"
        assert cmd[-1] == str(tmp_path / "setup.bash")

    def test_output_decoded_leniently(self, tmp_path: Path) -> None:
        mock_run = MagicMock()
        mock_run.returncode = 0
        mock_run.stdout = ""

        with patch("subprocess.run", return_value=mock_run) as mock_subprocess:
            source_setup_script(tmp_path / "setup.bash")

        kwargs = mock_subprocess.call_args.kwargs
        assert kwargs["encoding"] == "utf-8"
        assert kwargs["errors"] == "replace"

    def test_failure_raises(self, tmp_path: Path) -> None:
        mock_run = MagicMock()
        mock_run.returncode = 1
        mock_run.stderr = "No such file"

        with patch("subprocess.run", return_value=mock_run):
            with pytest.raises(RuntimeNotFoundError, match="Could not source"):
                source_setup_script(tmp_path / "setup.bash")

    def test_missing_bash_raises(self, tmp_path: Path) -> None:
        with patch("subprocess.run", side_effect=FileNotFoundError("bash")):
            with pytest.raises(RuntimeNotFoundError):
                source_setup_script(tmp_path / "setup.bash")


class TestParseEnvOutput:
    def test_values_may_contain_equals_and_newlines(self) -> None:
        env = parse_env_output("A=1=2\0B=line1\nline2\0\0")
        assert env == {"A": "1=2", "B": "line1\nline2"}
