"""Тесты CommandRunner (subprocess замокан)."""

import subprocess
from pathlib import Path
from unittest.mock import patch

from blog_core.deploy.runner import EXIT_NOT_EXECUTABLE, EXIT_NOT_FOUND, CommandRunner
from blog_core.domain import StepStatus


def _completed(returncode: int) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode)


class TestCommandRunner:
    @patch("blog_core.deploy.runner.subprocess.run")
    def test_success(self, mock_run):
        mock_run.return_value = _completed(0)

        result = CommandRunner().run("build", ["hugo", "--environment", "production"])

        mock_run.assert_called_once_with(
            ["hugo", "--environment", "production"], cwd=None, check=False
        )
        assert result.status == StepStatus.OK
        assert result.returncode == 0
        assert result.dry_run is False
        assert result.duration_s >= 0

    @patch("blog_core.deploy.runner.subprocess.run")
    def test_output_is_not_captured(self, mock_run):
        mock_run.return_value = _completed(0)

        CommandRunner().run("build", ["hugo"], cwd=Path("/site"))

        kwargs = mock_run.call_args.kwargs
        assert kwargs["cwd"] == Path("/site")
        assert "capture_output" not in kwargs
        assert "stdout" not in kwargs

    @patch("blog_core.deploy.runner.subprocess.run")
    def test_failure_keeps_exit_code(self, mock_run):
        mock_run.return_value = _completed(23)

        result = CommandRunner().run("sync", ["rsync", "-avz"])

        assert result.status == StepStatus.FAILED
        assert result.returncode == 23
        assert not result.succeeded

    @patch("blog_core.deploy.runner.subprocess.run", side_effect=FileNotFoundError)
    def test_executable_not_found(self, mock_run):
        result = CommandRunner().run("build", ["hugo"])

        assert result.returncode == EXIT_NOT_FOUND
        assert result.status == StepStatus.FAILED

    @patch("blog_core.deploy.runner.subprocess.run", side_effect=PermissionError)
    def test_not_executable(self, mock_run):
        result = CommandRunner().run("build", ["./hugo"])

        assert result.returncode == EXIT_NOT_EXECUTABLE

    @patch("blog_core.deploy.runner.subprocess.run")
    def test_dry_run_does_not_execute(self, mock_run):
        result = CommandRunner(dry_run=True).run("sync", ["rsync", "public/", "a@b:~/"])

        mock_run.assert_not_called()
        assert result.dry_run is True
        assert result.returncode == 0
        assert result.status == StepStatus.OK

    @patch("blog_core.deploy.runner.subprocess.run")
    def test_arguments_are_stringified(self, mock_run):
        mock_run.return_value = _completed(0)

        result = CommandRunner().run("build", ["hugo", Path("out")])

        assert result.command == ["hugo", "out"]
        assert mock_run.call_args.args[0] == ["hugo", "out"]
