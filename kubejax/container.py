"""
Dependency injection container for KubeJax.

Wires settings, the picker, the namespace lister and the switch-back store
into the two switchers. Tests override single providers (usually ``picker``
and ``namespace_lister``) instead of patching modules.
"""

import sys

from dependency_injector import containers, providers

from kubejax.config.settings import KubeJaxSettings
from kubejax.namespaces import KubectlNamespaceLister
from kubejax.orchestrator import ContextSwitcher, NamespaceSwitcher
from kubejax.picker import PromptPicker
from kubejax.state import SwitchSession, SwitchStateStore


def _stdout():
    return sys.stdout


class KubeJaxContainer(containers.DeclarativeContainer):
    """
    Inversion of Control (IoC) container for KubeJax.

    Example:
    -------
        ```python
        from kubejax.container import KubeJaxContainer

        container = KubeJaxContainer()
        exit_code = container.context_switcher().run(SwitchMode.LIST)

        # Tests swap collaborators
        container.picker.override(providers.Object(MagicMock()))
        ```

    """

    # Singleton: settings from KJX_* variables, overridden by the CLI with flag values
    settings = providers.Singleton(KubeJaxSettings.from_environment)

    # sys.stdout is looked up per call, not at import
    output = providers.Callable(_stdout)

    picker = providers.Singleton(PromptPicker, out=output)

    namespace_lister = providers.Singleton(
        KubectlNamespaceLister,
        kubectl=settings.provided.kubectl,
        timeout=settings.provided.kubectl_timeout,
    )

    state_store = providers.Singleton(SwitchStateStore, path=settings.provided.state_file)

    # Singleton: one session per invocation, shared by the mutator calls
    session = providers.Singleton(SwitchSession, settings=settings, store=state_store, out=output)

    context_switcher = providers.Factory(ContextSwitcher, session=session, picker=picker)

    namespace_switcher = providers.Factory(
        NamespaceSwitcher,
        session=session,
        picker=picker,
        namespaces=namespace_lister,
    )


# Global container instance
container = KubeJaxContainer()


def get_context_switcher() -> ContextSwitcher:
    """Get a ContextSwitcher bound to the container's session."""
    return container.context_switcher()


def get_namespace_switcher() -> NamespaceSwitcher:
    """Get a NamespaceSwitcher bound to the container's session."""
    return container.namespace_switcher()
