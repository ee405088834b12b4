"""KubeJax configuration management (kubeconfig files and kjx settings)."""

from kubejax.config.document import KubeConfigDocument, dump_document
from kubejax.config.loaders import (
    find_context_file,
    get_current_context,
    get_current_context_info,
    load_all_kube_configs,
    load_kube_config,
)
from kubejax.config.schemas import (
    DEFAULT_NAMESPACE,
    Cluster,
    ClusterDetail,
    ConfigEntry,
    Context,
    ContextDetail,
    CurrentContextInfo,
    KubeConfig,
    User,
    UserDetail,
)
from kubejax.config.settings import KubeJaxSettings, active_kubeconfig_path

__all__ = [
    # Documents
    "KubeConfigDocument",
    "dump_document",
    # Loaders
    "find_context_file",
    "get_current_context",
    "get_current_context_info",
    "load_all_kube_configs",
    "load_kube_config",
    # Schemas
    "DEFAULT_NAMESPACE",
    "Cluster",
    "ClusterDetail",
    "ConfigEntry",
    "Context",
    "ContextDetail",
    "CurrentContextInfo",
    "KubeConfig",
    "User",
    "UserDetail",
    # Settings
    "KubeJaxSettings",
    "active_kubeconfig_path",
]
