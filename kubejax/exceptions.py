"""
KubeJax exception classes.

This module defines custom exceptions for KubeJax so that callers can tell a
missing kubeconfig apart from a malformed one, a failed write, or a failed
``kubectl`` call without catching unrelated Python errors.

All KubeJax exceptions follow the naming convention KubeJax*Error.
"""


class KubeJaxError(Exception):
    """
    Base exception for all KubeJax errors.

    All KubeJax exceptions inherit from this, allowing the CLI to catch every
    KubeJax-specific failure with a single except clause and turn it into a
    readable message and a non-zero exit status.
    """

    pass


class KubeJaxNotFoundError(KubeJaxError):
    """
    Raised when a config directory or kubeconfig file does not exist.

    Example:
    -------
        >>> load_all_kube_configs(Path("/nonexistent"))
        KubeJaxNotFoundError: config directory does not exist: /nonexistent

    """

    pass


class KubeJaxParseError(KubeJaxError):
    """
    Raised when a kubeconfig document cannot be decoded or has an unexpected shape.

    This covers invalid YAML as well as documents whose structure does not match
    what a kubeconfig must look like (e.g. ``contexts`` is not a list).
    """

    pass


class KubeJaxIOError(KubeJaxError):
    """Raised when reading or writing a file fails."""

    pass


class KubeJaxContextNotFoundError(KubeJaxError):
    """
    Raised when a named context or namespace is absent from the known set.

    Example:
    -------
        >>> switcher.switch_to_context(entries, "staging")
        KubeJaxContextNotFoundError: context 'staging' not found

    """

    pass


class KubeJaxExternalToolError(KubeJaxError):
    """Raised when an external command (``kubectl``) is missing or fails."""

    pass


class KubeJaxConfigurationError(KubeJaxError):
    """
    Raised when KubeJax settings are invalid.

    This includes malformed ``KJX_*`` environment variables and an unreadable
    switch-back state file.
    """

    pass


__all__ = [
    "KubeJaxError",
    "KubeJaxNotFoundError",
    "KubeJaxParseError",
    "KubeJaxIOError",
    "KubeJaxContextNotFoundError",
    "KubeJaxExternalToolError",
    "KubeJaxConfigurationError",
]
