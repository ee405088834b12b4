"""Tests for kjx runtime settings."""

from pathlib import Path

import pytest

from kubejax.config.settings import (
    FALLBACK_OUTPUT_CONFIG,
    KubeJaxSettings,
    active_kubeconfig_path,
)
from kubejax.exceptions import KubeJaxConfigurationError


class TestActiveKubeconfigPath:
    """Tests for active_kubeconfig_path()."""

    def test_default(self, isolated_environment):
        """Test fallback to ~/.kube/config when KUBECONFIG is unset."""
        assert active_kubeconfig_path() == isolated_environment / ".kube" / "config"

    def test_from_environment(self):
        """Test that KUBECONFIG wins."""
        assert active_kubeconfig_path({"KUBECONFIG": "/c/prod.yaml"}) == Path("/c/prod.yaml")

    def test_first_entry_of_list(self):
        """Test that only the first entry of a path list is used."""
        assert active_kubeconfig_path({"KUBECONFIG": "/c/a.yaml:/c/b.yaml"}) == Path("/c/a.yaml")

    def test_empty_value(self, isolated_environment):
        """Test that an empty KUBECONFIG is treated as unset."""
        assert active_kubeconfig_path({"KUBECONFIG": ""}) == isolated_environment / ".kube" / "config"


class TestKubeJaxSettings:
    """Tests for KubeJaxSettings."""

    def test_defaults(self, isolated_environment):
        """Test built-in defaults."""
        settings = KubeJaxSettings.from_environment({})

        assert settings.config_dir == isolated_environment / ".kube" / "configs"
        assert settings.output_config is None
        assert settings.output_config_path == FALLBACK_OUTPUT_CONFIG
        assert settings.state_file == isolated_environment / ".kube" / "kjx-state.yaml"
        assert settings.kubectl == "kubectl"
        assert settings.kubectl_timeout is None

    def test_from_environment(self):
        """Test that KJX_* variables override the defaults."""
        settings = KubeJaxSettings.from_environment(
            {
                "KJX_CONFIG_DIR": "/srv/configs",
                "KJX_OUTPUT_CONFIG": "/tmp/out",
                "KJX_STATE_FILE": "/tmp/state.yaml",
                "KJX_KUBECTL": "/usr/local/bin/kubectl",
                "KJX_KUBECTL_TIMEOUT": "2.5",
            }
        )

        assert settings.config_dir == Path("/srv/configs")
        assert settings.output_config_path == Path("/tmp/out")
        assert settings.state_file == Path("/tmp/state.yaml")
        assert settings.kubectl == "/usr/local/bin/kubectl"
        assert settings.kubectl_timeout == 2.5

    def test_reads_process_environment(self, monkeypatch):
        """Test that os.environ is used when no mapping is given."""
        monkeypatch.setenv("KJX_CONFIG_DIR", "/srv/other")

        assert KubeJaxSettings.from_environment().config_dir == Path("/srv/other")

    @pytest.mark.parametrize("value", ["soon", "0", "-1"])
    def test_invalid_timeout(self, value):
        """Test that a bad timeout raises KubeJaxConfigurationError."""
        with pytest.raises(KubeJaxConfigurationError) as exc_info:
            KubeJaxSettings.from_environment({"KJX_KUBECTL_TIMEOUT": value})
        assert "Invalid kjx settings" in str(exc_info.value)

    def test_output_config_overrides_fallback(self, tmp_path):
        """Test that an explicit output config replaces the fallback path."""
        settings = KubeJaxSettings(output_config=tmp_path / "out")

        assert settings.output_config_path == tmp_path / "out"
