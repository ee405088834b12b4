"""Tests for shell integration."""

from unittest.mock import patch

import pytest

from kubejax.exceptions import KubeJaxIOError
from kubejax.shell import (
    SHELL_FUNCTION_MARKER,
    InstallResult,
    detect_profile_file,
    install_shell_function,
    render_shell_function,
)


class TestRenderShellFunction:
    """Tests for render_shell_function()."""

    def test_contains_wrapper_logic(self):
        """Test the pieces the wrapper relies on."""
        function = render_shell_function("/usr/local/bin/kjx")

        assert function.startswith(f"# {SHELL_FUNCTION_MARKER}")
        assert "kjx() {" in function
        assert 'local kjx_binary="/usr/local/bin/kjx"' in function
        assert '--output-config "$temp_file" "$@"' in function
        assert 'export KUBECONFIG="$new_kubeconfig"' in function
        assert 'rm -f "$temp_file"' in function

    @patch("kubejax.shell.shutil.which", return_value="/home/me/.local/bin/kjx")
    def test_default_binary_from_path(self, mock_which):
        """Test that the kjx found on PATH is used by default."""
        assert 'local kjx_binary="/home/me/.local/bin/kjx"' in render_shell_function()


class TestDetectProfileFile:
    """Tests for detect_profile_file()."""

    @pytest.mark.parametrize(
        ("shell", "profile"),
        [("/bin/zsh", ".zshrc"), ("/usr/local/bin/zsh", ".zshrc"), ("/bin/bash", ".bashrc")],
    )
    def test_supported(self, tmp_path, shell, profile):
        """Test zsh and bash profiles."""
        assert detect_profile_file({"SHELL": shell}, home=tmp_path) == tmp_path / profile

    @pytest.mark.parametrize("shell", ["/usr/bin/fish", "", "/bin/sh"])
    def test_unsupported(self, tmp_path, shell):
        """Test that other shells are not supported."""
        assert detect_profile_file({"SHELL": shell}, home=tmp_path) is None


class TestInstallShellFunction:
    """Tests for install_shell_function()."""

    def test_install_into_new_profile(self, tmp_path):
        """Test installing into a profile that does not exist yet."""
        profile = tmp_path / ".zshrc"

        assert install_shell_function(profile, binary="kjx") is InstallResult.INSTALLED
        content = profile.read_text()
        assert f"# {SHELL_FUNCTION_MARKER} (auto-generated)" in content
        assert "kjx() {" in content

    def test_appends_to_existing_profile(self, tmp_path):
        """Test that existing profile content is kept."""
        profile = tmp_path / ".bashrc"
        profile.write_text("export EDITOR=vim\n")

        install_shell_function(profile, binary="kjx")

        assert profile.read_text().startswith("export EDITOR=vim\n")

    def test_idempotent(self, tmp_path):
        """Test that a second install writes nothing."""
        profile = tmp_path / ".zshrc"
        install_shell_function(profile, binary="kjx")
        first = profile.read_text()

        assert install_shell_function(profile, binary="kjx") is InstallResult.ALREADY_INSTALLED
        assert profile.read_text() == first

    def test_unsupported_shell(self):
        """Test that no profile means an unsupported shell."""
        assert install_shell_function(None) is InstallResult.UNSUPPORTED_SHELL

    def test_unwritable_profile(self, tmp_path):
        """Test that a write failure raises KubeJaxIOError."""
        with pytest.raises(KubeJaxIOError):
            install_shell_function(tmp_path / "missing-dir" / ".zshrc", binary="kjx")
