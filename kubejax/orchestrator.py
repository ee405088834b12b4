"""
Selection orchestration for ``kjx`` and ``kjx ns``.

ContextSwitcher and NamespaceSwitcher turn a CLI mode (current, search,
list, interactive, direct) into exactly one target, hand it to the mutator,
and report to the session's output stream. Every entry point returns an exit
status; KubeJax errors are printed, never raised.
"""

import logging
from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from kubejax.config.loaders import (
    find_context_file,
    get_current_context,
    get_current_context_info,
    load_all_kube_configs,
    load_kube_config,
)
from kubejax.config.schemas import ConfigEntry
from kubejax.config.settings import active_kubeconfig_path
from kubejax.exceptions import KubeJaxContextNotFoundError, KubeJaxError
from kubejax.mutator import NamespaceUpdate, set_current_context, set_namespace
from kubejax.namespaces import FALLBACK_NAMESPACES
from kubejax.production import (
    is_production_combined,
    is_production_config_file,
    is_production_environment,
    production_reasons,
)
from kubejax.protocols import NamespaceLister, Picker
from kubejax.search import matches_filter, search, search_contexts
from kubejax.state import SwitchSession
from kubejax.types import ProductionReason

LOGGER = logging.getLogger("kubejax.orchestrator")

PREVIOUS = "-"
CURRENT_MARKER = "🔹"
PRODUCTION_MARKER = " 🔴"

EXIT_OK = 0
EXIT_FAILURE = 1


class SwitchMode(Enum):
    """What a kjx invocation was asked to do."""

    CURRENT = "current"
    SEARCH = "search"
    LIST = "list"
    INTERACTIVE = "interactive"
    DIRECT = "direct"

    @classmethod
    def from_flags(
        cls, current: bool, search: bool, list_: bool, interactive: bool, argument: str | None
    ) -> "SwitchMode":
        """
        Resolve CLI flags into a single mode.

        Precedence: --current, --search, --list, then interactive when no
        argument was given or --interactive is set, otherwise the direct
        argument.
        """
        if current:
            return cls.CURRENT
        if search:
            return cls.SEARCH
        if list_:
            return cls.LIST
        if interactive or argument is None:
            return cls.INTERACTIVE
        return cls.DIRECT


def show_production_warning(session: SwitchSession, context_name: str, config_file: Path | None) -> None:
    """Print the pre-switch production banner with the reasons that triggered it."""
    reasons = production_reasons(context_name, config_file)

    session.echo("⚠️  WARNING: PRODUCTION ENVIRONMENT DETECTED!")
    session.echo(f"🔴 You are selecting context: '{context_name}'")
    if ProductionReason.CONTEXT_NAME in reasons:
        session.echo("🔴 Context name contains production keywords")
    if ProductionReason.CONFIG_FILE in reasons and config_file is not None:
        session.echo(f"🔴 Config file '{config_file.name}' contains production keywords")
    session.echo("🔴 This appears to be a PRODUCTION cluster.")
    session.echo("🔴 Please be extra careful with any changes!")
    session.echo()


class ContextSwitcher:
    """
    Drives ``kjx``: pick a context across every kubeconfig file and activate it.

    Example:
    -------
        ```python
        switcher = ContextSwitcher(session=session, picker=PromptPicker())
        exit_code = switcher.run(SwitchMode.DIRECT, "prod-east")
        ```

    """

    def __init__(self, session: SwitchSession, picker: Picker):
        self.session = session
        self.picker = picker

    @property
    def config_dir(self) -> Path:
        return self.session.settings.config_dir

    def run(self, mode: SwitchMode, argument: str | None = None) -> int:
        """Execute ``mode`` and return the exit status."""
        if mode is SwitchMode.CURRENT:
            return self.show_current()

        try:
            entries = load_all_kube_configs(self.config_dir)
        except KubeJaxError as e:
            self.session.echo(f"Error loading kubeconfigs: {e}")
            return EXIT_FAILURE

        if not entries:
            self.session.echo(f"No kubeconfig files found in {self.config_dir}")
            return EXIT_FAILURE

        self.session.current_context = get_current_context(active_kubeconfig_path())

        try:
            if mode is SwitchMode.SEARCH:
                if argument:
                    return self.search(entries, argument)
                return self.interactive_search(entries)
            if mode is SwitchMode.LIST:
                return self.list_contexts(entries)
            if mode is SwitchMode.INTERACTIVE:
                return self.interactive_select(entries)
            return self.switch_direct(entries, argument or "")
        except KubeJaxError as e:
            self.session.echo(f"Error: {e}")
            return EXIT_FAILURE

    def _marker(self, context_name: str) -> str:
        return CURRENT_MARKER if context_name == self.session.current_context else "  "

    def switch_to_context(
        self, entries: Sequence[ConfigEntry], context_name: str, fallback_path: Path | None = None
    ) -> int:
        """
        Activate ``context_name`` in the file that declares it.

        Raises
        ------
            KubeJaxContextNotFoundError: If no loaded file declares the context

        """
        config_path = find_context_file(entries, context_name) or fallback_path
        if config_path is None:
            raise KubeJaxContextNotFoundError(f"context '{context_name}' not found")

        set_current_context(config_path, context_name, self.session)
        return EXIT_OK

    def list_contexts(self, entries: Sequence[ConfigEntry]) -> int:
        """Print every context grouped by file, marking current and production ones."""
        self.session.echo(f"Available contexts from {self.config_dir}:")
        self.session.echo()

        for entry in entries:
            self.session.echo(f"📁 {entry.file_name}:")
            for context_name in entry.context_names:
                prod = PRODUCTION_MARKER if is_production_combined(context_name, entry.file_path) else ""
                self.session.echo(f"{self._marker(context_name)} {context_name}{prod}")
            self.session.echo()

        self.session.echo("Legend:")
        self.session.echo(f"{CURRENT_MARKER} = Current context")
        self.session.echo("🔴 = Production environment (context name or config file)")
        return EXIT_OK

    def search(self, entries: Sequence[ConfigEntry], term: str) -> int:
        """
        List contexts matching ``term``; switch directly when exactly one matches.

        Several matches are only listed. No match exits with a failure status.
        """
        matches = search_contexts(entries, term)
        if not matches:
            self.session.echo(f"No contexts found matching '{term}'")
            return EXIT_FAILURE

        self.session.echo(f"Contexts matching '{term}':")
        for number, match in enumerate(matches, start=1):
            prod = PRODUCTION_MARKER if is_production_combined(match, find_context_file(entries, match)) else ""
            self.session.echo(f"{number}) {self._marker(match)} {match}{prod}")

        if len(matches) == 1:
            match = matches[0]
            self.session.echo()
            self.session.echo(f"Only one match found. Switching to '{match}'...")
            config_path = find_context_file(entries, match)
            if is_production_combined(match, config_path):
                show_production_warning(self.session, match, config_path)
            return self.switch_to_context(entries, match)

        return EXIT_OK

    def _pick_and_switch(self, label: str, choices: dict[str, tuple[str, Path]]) -> int:
        result = self.picker.pick(label, list(choices), matches_filter)
        if result is None:
            self.session.echo("Selection cancelled")
            return EXIT_FAILURE

        context_name, config_path = choices[result]
        if is_production_combined(context_name, config_path):
            show_production_warning(self.session, context_name, config_path)

        set_current_context(config_path, context_name, self.session)
        return EXIT_OK

    def interactive_search(self, entries: Sequence[ConfigEntry]) -> int:
        """Pick from bare context names (``kjx -s`` without a term)."""
        choices: dict[str, tuple[str, Path]] = {}
        for entry in entries:
            for context_name in entry.context_names:
                choices.setdefault(context_name, (context_name, entry.file_path))

        return self._pick_and_switch("Search and select context (type to filter)", choices)

    def interactive_select(self, entries: Sequence[ConfigEntry]) -> int:
        """Pick from ``context (file)`` labels, sorted, production ones marked."""
        choices: dict[str, tuple[str, Path]] = {}
        for entry in entries:
            for context_name in entry.context_names:
                prod = PRODUCTION_MARKER if is_production_combined(context_name, entry.file_path) else ""
                choices[f"{context_name} ({entry.file_name}){prod}"] = (context_name, entry.file_path)

        return self._pick_and_switch("Select context (type to search/filter)", dict(sorted(choices.items())))

    def switch_direct(self, entries: Sequence[ConfigEntry], context_name: str) -> int:
        """Switch to a named context, or to the previous one for ``-``."""
        fallback_path = None
        if context_name == PREVIOUS:
            previous = self.session.resolve_previous_context()
            if not previous:
                self.session.echo("No previous context available")
                return EXIT_FAILURE
            context_name = previous
            fallback_path = self.session.recorded_state().previous_config

        config_path = find_context_file(entries, context_name) or fallback_path
        if config_path is None:
            raise KubeJaxContextNotFoundError(f"context '{context_name}' not found")
        if is_production_combined(context_name, config_path):
            show_production_warning(self.session, context_name, config_path)

        return self.switch_to_context(entries, context_name, fallback_path)

    def show_current(self) -> int:
        """Print the active context, its file, cluster and namespace."""
        kubeconfig_path = active_kubeconfig_path()
        info = get_current_context_info(kubeconfig_path)
        if info is None:
            self.session.echo("❌ No current context found or invalid kubeconfig")
            return EXIT_FAILURE

        self.session.echo("📍 Current Kubernetes Context Information:")
        self.session.echo("=" * 46)
        self.session.echo(f"🔹 Context: {info.context}")
        self.session.echo(f"📁 Config File: {info.config_file}")
        self.session.echo(f"🏗️  Cluster: {info.cluster}")
        self.session.echo(f"📦 Namespace: {info.namespace}")

        is_prod_context = is_production_environment(info.context) or is_production_environment(info.cluster)
        is_prod_file = is_production_config_file(kubeconfig_path)

        if is_prod_context or is_prod_file:
            self.session.echo()
            self.session.echo("⚠️  PRODUCTION ENVIRONMENT DETECTED!")
            if is_prod_context:
                self.session.echo(f"🔴 Context/Cluster '{info.context}' appears to be a production environment")
            if is_prod_file:
                self.session.echo(f"🔴 Config file '{info.config_file}' appears to be a production environment")
            self.session.echo("🔴 Please be extra careful with any operations!")

        self.session.echo()
        self.session.echo(f"💾 KUBECONFIG: {kubeconfig_path}")
        return EXIT_OK


class NamespaceSwitcher:
    """
    Drives ``kjx ns``: pick a namespace and set it on the active context.

    Example:
    -------
        ```python
        switcher = NamespaceSwitcher(session=session, picker=PromptPicker(), namespaces=KubectlNamespaceLister())
        exit_code = switcher.run(SwitchMode.DIRECT, "payments")
        ```

    """

    def __init__(self, session: SwitchSession, picker: Picker, namespaces: NamespaceLister):
        self.session = session
        self.picker = picker
        self.namespaces = namespaces

    def run(self, mode: SwitchMode, argument: str | None = None) -> int:
        """Execute ``mode`` and return the exit status."""
        if mode is SwitchMode.CURRENT:
            return self.show_current()

        kubeconfig_path = active_kubeconfig_path()
        try:
            kubeconfig = load_kube_config(kubeconfig_path)
        except KubeJaxError as e:
            self.session.echo(f"Error loading current kubeconfig: {e}")
            return EXIT_FAILURE

        self.session.current_context = kubeconfig.current_context

        try:
            if mode is SwitchMode.SEARCH:
                if argument:
                    return self.search(kubeconfig_path, argument)
                return self.interactive_search(kubeconfig_path)
            if mode is SwitchMode.LIST:
                return self.list_namespaces()
            if mode is SwitchMode.INTERACTIVE:
                return self.interactive_select(kubeconfig_path)
            return self.switch_direct(kubeconfig_path, argument or "")
        except KubeJaxError as e:
            self.session.echo(f"Error: {e}")
            return EXIT_FAILURE

    def switch_to_namespace(self, kubeconfig_path: Path, namespace: str) -> int:
        """Set ``namespace`` on the current context of ``kubeconfig_path``."""
        active_context = self.session.current_context
        if not active_context:
            self.session.echo(f"No current context set in {kubeconfig_path.name}")
            return EXIT_FAILURE

        result = set_namespace(kubeconfig_path, namespace, active_context, self.session)
        if result is NamespaceUpdate.NO_MATCHING_CONTEXT:
            self.session.echo(
                f"Warning: context '{active_context}' is not declared in {kubeconfig_path.name}; "
                "namespace not changed"
            )
            return EXIT_FAILURE
        return EXIT_OK

    def search(self, kubeconfig_path: Path, term: str) -> int:
        """List namespaces matching ``term``; switch directly when exactly one matches."""
        try:
            namespaces = self.namespaces.list_namespaces()
        except KubeJaxError as e:
            self.session.echo(f"Error getting namespaces: {e}")
            return EXIT_FAILURE

        matches = search(namespaces, term)
        if not matches:
            self.session.echo(f"No namespaces found matching '{term}'")
            return EXIT_FAILURE

        self.session.echo(f"Namespaces matching '{term}':")
        for number, match in enumerate(matches, start=1):
            self.session.echo(f"{number}) {match}")

        if len(matches) == 1:
            self.session.echo()
            self.session.echo(f"Only one match found. Switching to namespace '{matches[0]}'...")
            return self.switch_to_namespace(kubeconfig_path, matches[0])

        return EXIT_OK

    def _pick_and_switch(self, kubeconfig_path: Path, label: str, namespaces: Sequence[str]) -> int:
        result = self.picker.pick(label, namespaces, matches_filter)
        if result is None:
            self.session.echo("Selection cancelled")
            return EXIT_FAILURE
        return self.switch_to_namespace(kubeconfig_path, result)

    def interactive_search(self, kubeconfig_path: Path) -> int:
        """Pick from live namespaces (``kjx ns -s`` without a term); no fallback list."""
        try:
            namespaces = self.namespaces.list_namespaces()
        except KubeJaxError as e:
            self.session.echo(f"Error: could not get namespaces: {e}")
            return EXIT_FAILURE

        if not namespaces:
            self.session.echo("Error: no namespaces found")
            return EXIT_FAILURE

        return self._pick_and_switch(kubeconfig_path, "Search and select namespace (type to filter)", namespaces)

    def interactive_select(self, kubeconfig_path: Path) -> int:
        """Pick from live namespaces, falling back to the built-in ones if kubectl fails."""
        try:
            namespaces = self.namespaces.list_namespaces()
        except KubeJaxError as e:
            self.session.echo(f"Warning: Could not get live namespaces ({e}), using defaults")
            namespaces = list(FALLBACK_NAMESPACES)

        if not namespaces:
            self.session.echo("Error: no namespaces found")
            return EXIT_FAILURE

        return self._pick_and_switch(kubeconfig_path, "Select namespace (type to search/filter)", namespaces)

    def list_namespaces(self) -> int:
        """Print the live namespaces of the current cluster."""
        try:
            namespaces = self.namespaces.list_namespaces()
        except KubeJaxError as e:
            self.session.echo(f"Error getting namespaces: {e}")
            return EXIT_FAILURE

        self.session.echo("Available namespaces in current cluster:")
        for namespace in namespaces:
            self.session.echo(f"  {namespace}")
        return EXIT_OK

    def switch_direct(self, kubeconfig_path: Path, namespace: str) -> int:
        """
        Switch to a named namespace, or to the previous one for ``-``.

        The name is checked against the live namespaces. If they cannot be
        listed the switch goes ahead with a warning; if the name is missing
        the switch is refused.
        """
        if namespace == PREVIOUS:
            state = self.session.recorded_state()
            if not state.previous_namespace or state.namespace_context != self.session.current_context:
                self.session.echo("No previous namespace available")
                return EXIT_FAILURE
            namespace = state.previous_namespace

        try:
            namespaces = self.namespaces.list_namespaces()
        except KubeJaxError as e:
            self.session.echo(f"Warning: Could not verify namespace exists: {e}")
            self.session.echo(f"Switching to namespace '{namespace}' anyway...")
        else:
            if namespace not in namespaces:
                self.session.echo(f"Warning: Namespace '{namespace}' not found in cluster")
                self.session.echo(f"Available namespaces: {', '.join(namespaces)}")
                return EXIT_FAILURE

        return self.switch_to_namespace(kubeconfig_path, namespace)

    def show_current(self) -> int:
        """Print the active namespace along with its context, cluster and file."""
        kubeconfig_path = active_kubeconfig_path()
        info = get_current_context_info(kubeconfig_path)
        if info is None:
            self.session.echo("❌ No current context found or invalid kubeconfig")
            return EXIT_FAILURE

        self.session.echo("📦 Current Kubernetes Namespace Information:")
        self.session.echo("=" * 49)
        self.session.echo(f"📦 Current Namespace: {info.namespace}")
        self.session.echo(f"🔹 Context: {info.context}")
        self.session.echo(f"🏗️  Cluster: {info.cluster}")
        self.session.echo(f"📁 Config File: {info.config_file}")

        is_prod_context = is_production_environment(info.context) or is_production_environment(info.cluster)
        is_prod_file = is_production_config_file(kubeconfig_path)

        if is_prod_context or is_prod_file:
            self.session.echo()
            self.session.echo("⚠️  PRODUCTION ENVIRONMENT DETECTED!")
            self.session.echo("🔴 You are working in a production environment")
            self.session.echo(f"🔴 Current namespace: '{info.namespace}'")
            if is_prod_context:
                self.session.echo("🔴 Context/Cluster contains production keywords")
            if is_prod_file:
                self.session.echo("🔴 Config file contains production keywords")
            self.session.echo("🔴 Please be extra careful with any operations!")

        return EXIT_OK
