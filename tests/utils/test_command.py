"""Tests for kubejax.utils.command."""

import subprocess
from unittest.mock import patch

import pytest

from kubejax.utils.command import run_command


class TestRunCommand:
    """Test run_command function."""

    def test_simple_command_success(self):
        """Test running a simple successful command."""
        result = run_command(["echo", "hello"])

        assert result.returncode == 0
        assert result.stdout == "hello\n"

    def test_command_failure_with_check_true(self):
        """Test command failure raises CalledProcessError when check=True."""
        with pytest.raises(subprocess.CalledProcessError):
            run_command(["false"])

    def test_command_failure_with_check_false(self):
        """Test command failure doesn't raise when check=False."""
        assert run_command(["false"], check=False).returncode != 0

    def test_missing_executable(self):
        """Test that a missing executable raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            run_command(["kjx-no-such-binary-xyz"])

    @patch("subprocess.run")
    def test_env_is_merged(self, mock_run, monkeypatch):
        """Test that extra variables are merged into the process environment."""
        monkeypatch.setenv("KJX_TEST_BASE", "base")

        run_command(["kubectl", "version"], env={"KUBECONFIG": "/c/prod.yaml"}, timeout=3)

        kwargs = mock_run.call_args.kwargs
        assert kwargs["env"]["KUBECONFIG"] == "/c/prod.yaml"
        assert kwargs["env"]["KJX_TEST_BASE"] == "base"
        assert kwargs["timeout"] == 3
        assert kwargs["text"] is True
        assert kwargs["capture_output"] is True
