"""Tests for live namespace listing."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from kubejax.exceptions import KubeJaxExternalToolError
from kubejax.namespaces import FALLBACK_NAMESPACES, KubectlNamespaceLister, parse_namespace_names
from kubejax.protocols import NamespaceLister


class TestParseNamespaceNames:
    """Tests for parse_namespace_names()."""

    def test_parse(self):
        """Test stripping the prefix and sorting."""
        output = "namespace/kube-system\nnamespace/default\nnamespace/payments\n"
        assert parse_namespace_names(output) == ["default", "kube-system", "payments"]

    def test_blank_lines_and_whitespace(self):
        """Test that blank lines and surrounding whitespace are ignored."""
        assert parse_namespace_names("\n  namespace/a  \n\n namespace/b\n") == ["a", "b"]

    def test_empty_output(self):
        """Test that no output means no namespaces."""
        assert parse_namespace_names("") == []

    def test_line_without_prefix(self):
        """Test that a bare name is kept as-is."""
        assert parse_namespace_names("default\n") == ["default"]


class TestKubectlNamespaceLister:
    """Tests for KubectlNamespaceLister."""

    def test_implements_protocol(self):
        """Test structural conformance with NamespaceLister."""
        assert isinstance(KubectlNamespaceLister(), NamespaceLister)

    @patch("kubejax.namespaces.run_command")
    def test_list_namespaces(self, mock_run):
        """Test the kubectl invocation and parsed result."""
        mock_run.return_value = MagicMock(stdout="namespace/kube-system\nnamespace/default\n")

        lister = KubectlNamespaceLister(kubectl="/opt/kubectl", timeout=5)

        assert lister.list_namespaces() == ["default", "kube-system"]
        mock_run.assert_called_once_with(
            ["/opt/kubectl", "get", "namespaces", "-o", "name", "--no-headers"],
            timeout=5,
        )

    @patch("kubejax.namespaces.run_command")
    def test_kubectl_missing(self, mock_run):
        """Test that a missing kubectl binary raises KubeJaxExternalToolError."""
        mock_run.side_effect = FileNotFoundError("kubectl")

        with pytest.raises(KubeJaxExternalToolError) as exc_info:
            KubectlNamespaceLister().list_namespaces()
        assert "failed to execute kubectl" in str(exc_info.value)

    @patch("kubejax.namespaces.run_command")
    def test_kubectl_fails(self, mock_run):
        """Test that a non-zero exit raises KubeJaxExternalToolError with stderr."""
        mock_run.side_effect = subprocess.CalledProcessError(
            1, ["kubectl"], output="", stderr="Unable to connect to the server\n"
        )

        with pytest.raises(KubeJaxExternalToolError) as exc_info:
            KubectlNamespaceLister().list_namespaces()
        assert "exit status 1" in str(exc_info.value)
        assert "Unable to connect to the server" in str(exc_info.value)

    @patch("kubejax.namespaces.run_command")
    def test_kubectl_timeout(self, mock_run):
        """Test that a timeout raises KubeJaxExternalToolError."""
        mock_run.side_effect = subprocess.TimeoutExpired(["kubectl"], 5)

        with pytest.raises(KubeJaxExternalToolError) as exc_info:
            KubectlNamespaceLister(timeout=5).list_namespaces()
        assert "timed out" in str(exc_info.value)


def test_fallback_namespaces():
    """Test the built-in namespaces offered when kubectl is unavailable."""
    assert FALLBACK_NAMESPACES == ("default", "kube-system", "kube-public", "kube-node-lease")
