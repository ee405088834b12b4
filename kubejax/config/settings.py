"""
KubeJax runtime settings.

Settings come from three places, later ones winning:
- Built-in defaults (``~/.kube/configs``, ``/tmp/kjx-config``, ...)
- ``KJX_*`` environment variables
- CLI flags (applied by ``kubejax.cli`` via ``model_copy``)
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from kubejax.exceptions import KubeJaxConfigurationError

FALLBACK_OUTPUT_CONFIG = Path("/tmp/kjx-config")

# Environment variables consumed by kjx
ENV_KUBECONFIG = "KUBECONFIG"
ENV_CONFIG_DIR = "KJX_CONFIG_DIR"
ENV_OUTPUT_CONFIG = "KJX_OUTPUT_CONFIG"
ENV_STATE_FILE = "KJX_STATE_FILE"
ENV_KUBECTL = "KJX_KUBECTL"
ENV_KUBECTL_TIMEOUT = "KJX_KUBECTL_TIMEOUT"


def default_config_dir() -> Path:
    """Directory scanned for kubeconfig files when nothing else is configured."""
    return Path.home() / ".kube" / "configs"


def default_kubeconfig_path() -> Path:
    """kubectl's own default kubeconfig location."""
    return Path.home() / ".kube" / "config"


def default_state_file() -> Path:
    """Where the switch-back record lives."""
    return Path.home() / ".kube" / "kjx-state.yaml"


def active_kubeconfig_path(environ: Mapping[str, str] | None = None) -> Path:
    """
    Get the kubeconfig file kubectl is currently using.

    Returns ``$KUBECONFIG`` when set, otherwise ``~/.kube/config``. Only the
    first entry of a ``:``-separated KUBECONFIG list is used.
    """
    environ = os.environ if environ is None else environ
    value = environ.get(ENV_KUBECONFIG, "")
    first = value.split(os.pathsep)[0] if value else ""
    return Path(first).expanduser() if first else default_kubeconfig_path()


class KubeJaxSettings(BaseModel):
    """
    Settings for a single kjx invocation.

    Example:
    -------
        ```python
        settings = KubeJaxSettings.from_environment()
        settings = settings.model_copy(update={"config_dir": Path("/tmp/configs")})
        ```

    """

    config_dir: Annotated[Path, Field(default_factory=default_config_dir, description="Kubeconfig directory")]
    output_config: Annotated[
        Path | None,
        Field(default=None, description="File receiving the selected config path (shell integration)"),
    ]
    fallback_output_config: Annotated[
        Path, Field(default=FALLBACK_OUTPUT_CONFIG, description="Used when output_config is not set")
    ]
    state_file: Annotated[Path, Field(default_factory=default_state_file, description="Switch-back record")]
    kubectl: Annotated[str, Field(default="kubectl", description="kubectl binary used to list namespaces")]
    kubectl_timeout: Annotated[
        float | None, Field(default=None, gt=0, description="Seconds before kubectl is abandoned; None waits")
    ]

    model_config = ConfigDict(frozen=True)

    @property
    def output_config_path(self) -> Path:
        """File the selected kubeconfig path is written to."""
        return self.output_config or self.fallback_output_config

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> "KubeJaxSettings":
        """
        Build settings from ``KJX_*`` environment variables.

        Raises
        ------
            KubeJaxConfigurationError: If a variable holds an invalid value

        """
        environ = os.environ if environ is None else environ
        values: dict[str, object] = {}

        if environ.get(ENV_CONFIG_DIR):
            values["config_dir"] = Path(environ[ENV_CONFIG_DIR]).expanduser()
        if environ.get(ENV_OUTPUT_CONFIG):
            values["output_config"] = Path(environ[ENV_OUTPUT_CONFIG]).expanduser()
        if environ.get(ENV_STATE_FILE):
            values["state_file"] = Path(environ[ENV_STATE_FILE]).expanduser()
        if environ.get(ENV_KUBECTL):
            values["kubectl"] = environ[ENV_KUBECTL]
        if environ.get(ENV_KUBECTL_TIMEOUT):
            values["kubectl_timeout"] = environ[ENV_KUBECTL_TIMEOUT]

        try:
            return cls(**values)
        except ValidationError as e:
            raise KubeJaxConfigurationError(f"Invalid kjx settings from environment: {e}") from e
