"""
Kubeconfig mutations: switching the active context and a context's namespace.

Both operations re-read the target file from disk, edit the generic document
(``KubeConfigDocument``) so unknown fields survive, and overwrite the whole
file. There is no locking and no atomic rename; concurrent kjx runs against
the same file can race.
"""

import logging
import os
from enum import Enum
from pathlib import Path

from kubejax.config.document import KubeConfigDocument
from kubejax.config.schemas import DEFAULT_NAMESPACE
from kubejax.config.settings import ENV_KUBECONFIG, active_kubeconfig_path
from kubejax.production import is_production_combined
from kubejax.state import SwitchSession
from kubejax.utils.file import write_text_file

LOGGER = logging.getLogger("kubejax.mutator")


class NamespaceUpdate(Enum):
    """Outcome of set_namespace()."""

    UPDATED = "updated"
    NO_MATCHING_CONTEXT = "no-matching-context"


def set_current_context(config_path: Path, context_name: str, session: SwitchSession) -> None:
    """
    Make ``context_name`` the current context of ``config_path``.

    Steps, in order:
    1. Remember the context active so far as the session's previous context
    2. Write ``config_path`` to the output-config file for the shell wrapper
    3. Point ``KUBECONFIG`` at ``config_path`` for this process and its children
    4. Re-read the file, set ``current-context`` and overwrite it

    The context is not checked against the file's ``contexts`` list; callers
    resolve names before switching.

    Raises
    ------
        KubeJaxNotFoundError: If ``config_path`` does not exist
        KubeJaxIOError: If the output-config file or ``config_path`` cannot be written
        KubeJaxParseError: If ``config_path`` is not a kubeconfig mapping

    """
    previous_config = active_kubeconfig_path()
    session.previous_context = session.current_context

    write_text_file(session.output_config, str(config_path))
    os.environ[ENV_KUBECONFIG] = str(config_path)

    document = KubeConfigDocument.load(config_path)
    document.set_current_context(context_name)
    document.save()

    session.current_context = context_name
    LOGGER.info(f"Switched to context '{context_name}' in {config_path}")

    if session.previous_context:
        session.record(previous_context=session.previous_context, previous_config=previous_config)

    session.echo(f"Switched to context '{context_name}' in {config_path.name}")

    if is_production_combined(context_name, config_path):
        session.echo("🔴 You are now connected to a PRODUCTION environment!")
        session.echo("🔴 Please be extra careful with your operations!")

    if not session.shell_integrated:
        session.echo(f"🔄 To export KUBECONFIG to your shell, run: export KUBECONFIG={config_path}")
        session.echo("💡 Or use shell integration with: kjx install && source ~/.zshrc")


def set_namespace(
    config_path: Path, namespace: str, active_context: str, session: SwitchSession
) -> NamespaceUpdate:
    """
    Set the namespace of ``active_context`` in ``config_path``.

    Returns
    -------
        NamespaceUpdate.UPDATED after rewriting the file, or
        NamespaceUpdate.NO_MATCHING_CONTEXT when the file declares no context
        named ``active_context`` (the file is left untouched)

    Raises
    ------
        KubeJaxNotFoundError: If ``config_path`` does not exist
        KubeJaxIOError: If ``config_path`` cannot be read or written
        KubeJaxParseError: If the document or the context entry has the wrong shape

    """
    document = KubeConfigDocument.load(config_path)

    previous_namespace = document.context_namespace(active_context) or DEFAULT_NAMESPACE
    if not document.set_context_namespace(active_context, namespace):
        LOGGER.debug(f"Context '{active_context}' not found in {config_path}; namespace not changed")
        return NamespaceUpdate.NO_MATCHING_CONTEXT

    document.save()
    LOGGER.info(f"Set namespace '{namespace}' on context '{active_context}' in {config_path}")

    session.record(namespace_context=active_context, previous_namespace=previous_namespace)

    session.echo(f"Switched to namespace '{namespace}'")

    if is_production_combined(active_context, config_path):
        session.echo(f"🔴 You are working in namespace '{namespace}' in a PRODUCTION environment!")
        session.echo("🔴 Please be extra careful with your operations!")

    return NamespaceUpdate.UPDATED
