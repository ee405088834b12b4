"""Live namespace listing through kubectl."""

import logging
import subprocess

from kubejax.exceptions import KubeJaxExternalToolError
from kubejax.utils.command import run_command

LOGGER = logging.getLogger("kubejax.namespaces")

NAMESPACE_PREFIX = "namespace/"

# Offered by the interactive picker when the cluster cannot be queried
FALLBACK_NAMESPACES = ("default", "kube-system", "kube-public", "kube-node-lease")


def parse_namespace_names(output: str) -> list[str]:
    """
    Parse ``kubectl get namespaces -o name`` output.

    Each non-empty line looks like ``namespace/<name>``; the prefix is dropped
    and the names are sorted.

    Example:
    -------
        >>> parse_namespace_names("namespace/kube-system\\nnamespace/default\\n")
        ['default', 'kube-system']

    """
    names = []
    for line in output.strip().splitlines():
        line = line.strip()
        if not line:
            continue
        name = line.removeprefix(NAMESPACE_PREFIX)
        if name:
            names.append(name)
    return sorted(names)


class KubectlNamespaceLister:
    """
    Lists namespaces of the cluster selected by the active kubeconfig.

    Implements the NamespaceLister protocol.

    Example:
    -------
        ```python
        lister = KubectlNamespaceLister()
        lister.list_namespaces()  # ['default', 'kube-system', ...]
        ```

    """

    def __init__(self, kubectl: str = "kubectl", timeout: float | None = None):
        self._kubectl = kubectl
        self._timeout = timeout

    def list_namespaces(self) -> list[str]:
        """
        Run kubectl and return the sorted namespace names.

        Raises
        ------
            KubeJaxExternalToolError: If kubectl is missing, fails, or times out

        """
        cmd = [self._kubectl, "get", "namespaces", "-o", "name", "--no-headers"]
        try:
            result = run_command(cmd, timeout=self._timeout)
        except FileNotFoundError as e:
            raise KubeJaxExternalToolError(f"failed to execute {self._kubectl}: {e}") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise KubeJaxExternalToolError(
                f"failed to execute {self._kubectl}: exit status {e.returncode}" + (f": {stderr}" if stderr else "")
            ) from e
        except subprocess.TimeoutExpired as e:
            raise KubeJaxExternalToolError(f"{self._kubectl} timed out after {e.timeout}s") from e

        namespaces = parse_namespace_names(result.stdout)
        LOGGER.debug(f"Found {len(namespaces)} namespace(s)")
        return namespaces
