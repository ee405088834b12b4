"""
Switch-back state for ``kjx -`` and ``kjx ns -``.

SwitchSession carries the per-invocation state (settings, current and
previous context, output stream) that the mutator and the orchestrator share.
SwitchStateStore persists the "previous" values to a small YAML file so
switching back also works from the next invocation.
"""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

import yaml
from pydantic import BaseModel, ValidationError

from kubejax.config.document import dump_document
from kubejax.config.settings import KubeJaxSettings
from kubejax.exceptions import KubeJaxConfigurationError, KubeJaxError, KubeJaxNotFoundError
from kubejax.utils.file import read_text_file, write_text_file

LOGGER = logging.getLogger("kubejax.state")


class SwitchState(BaseModel):
    """
    Contents of the switch-back state file.

    Example:
    -------
        previous_context: staging-east
        previous_config: /home/me/.kube/configs/staging.yaml
        namespace_context: prod-east
        previous_namespace: payments

    """

    previous_context: str | None = None
    previous_config: Path | None = None
    # Namespace switch-back only applies while the same context is active
    namespace_context: str | None = None
    previous_namespace: str | None = None


class SwitchStateStore:
    """Reads and writes SwitchState as YAML."""

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> SwitchState:
        """
        Load the recorded state.

        Returns
        -------
            Recorded SwitchState, or an empty one if the file does not exist yet

        Raises
        ------
            KubeJaxConfigurationError: If the file exists but is not a valid state record

        """
        try:
            content = read_text_file(self.path)
        except KubeJaxNotFoundError:
            return SwitchState()
        except KubeJaxError as e:
            raise KubeJaxConfigurationError(f"Cannot read switch-back state {self.path}: {e}") from e

        try:
            data = yaml.safe_load(content) or {}
            return SwitchState.model_validate(data)
        except (yaml.YAMLError, ValidationError) as e:
            raise KubeJaxConfigurationError(f"Invalid switch-back state {self.path}: {e}") from e

    def save(self, state: SwitchState) -> None:
        """
        Write ``state``, creating the parent directory if needed.

        Raises
        ------
            KubeJaxIOError: If the file cannot be written

        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        write_text_file(self.path, dump_document(state.model_dump(mode="json", exclude_none=True)))
        LOGGER.debug(f"Saved switch-back state to {self.path}")

    def update(self, **changes) -> None:
        """
        Merge ``changes`` into the recorded state.

        Failures are logged as warnings and not raised; the kubeconfig switch
        that triggered the update stays in place either way.
        """
        try:
            current = self.load()
            self.save(current.model_copy(update=changes))
        except (KubeJaxError, OSError) as e:
            LOGGER.warning(f"Could not record switch-back state: {e}")


@dataclass
class SwitchSession:
    """
    State shared by one kjx invocation.

    Replaces process-wide globals: the orchestrator creates one session and
    passes it to every mutator call.
    """

    settings: KubeJaxSettings
    current_context: str = ""
    previous_context: str = ""
    store: SwitchStateStore | None = None
    out: TextIO = field(default_factory=lambda: sys.stdout)

    @property
    def output_config(self) -> Path:
        """File the selected kubeconfig path is written to."""
        return self.settings.output_config_path

    @property
    def shell_integrated(self) -> bool:
        """True when a shell wrapper asked for the selected path via --output-config."""
        return self.settings.output_config is not None

    def echo(self, message: str = "") -> None:
        """Print a user-facing line to the session's output stream."""
        print(message, file=self.out)

    def recorded_state(self) -> SwitchState:
        """
        Get the persisted switch-back state.

        Returns an empty state when no store is attached.
        """
        return self.store.load() if self.store else SwitchState()

    def record(self, **changes) -> None:
        """Persist switch-back values when a store is attached."""
        if self.store:
            self.store.update(**changes)

    def resolve_previous_context(self) -> str | None:
        """
        Get the context that was active before the most recent switch.

        The in-process value wins; otherwise the persisted record is used.
        """
        if self.previous_context:
            return self.previous_context
        return self.recorded_state().previous_context
