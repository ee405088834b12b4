"""
KubeJax - switch Kubernetes contexts across many kubeconfig files.

This package provides the ``kjx`` CLI and the pieces behind it:
- Discovery of kubeconfig files in a directory (``~/.kube/configs`` by default)
- Context and namespace switching that keeps unknown kubeconfig fields intact
- Production detection from context and config file names
- Shell integration that exports KUBECONFIG into the calling shell
"""

__version__ = "0.1.0"

# ============================================================================
# CORE EXPORTS
# ============================================================================

from kubejax.exceptions import (  # noqa: E402
    KubeJaxConfigurationError,
    KubeJaxContextNotFoundError,
    KubeJaxError,
    KubeJaxExternalToolError,
    KubeJaxIOError,
    KubeJaxNotFoundError,
    KubeJaxParseError,
)
from kubejax.production import (  # noqa: E402
    is_exact_word_match,
    is_production_combined,
    is_production_config_file,
    is_production_environment,
)
from kubejax.search import search, search_contexts  # noqa: E402

__all__ = [
    # Exceptions
    "KubeJaxError",
    "KubeJaxNotFoundError",
    "KubeJaxParseError",
    "KubeJaxIOError",
    "KubeJaxContextNotFoundError",
    "KubeJaxExternalToolError",
    "KubeJaxConfigurationError",
    # Production detection
    "is_exact_word_match",
    "is_production_environment",
    "is_production_config_file",
    "is_production_combined",
    # Search
    "search",
    "search_contexts",
    # Version
    "__version__",
]
