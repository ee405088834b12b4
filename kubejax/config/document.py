"""
Generic kubeconfig document used for writes.

The typed models in ``kubejax.config.schemas`` are fine for reading but would
drop any field they do not declare if they were serialized back. Writes
therefore go through KubeConfigDocument: the raw YAML mapping, key order
preserved, edited in place and dumped again.

Shape checks are explicit. A document whose top level is not a mapping, whose
``contexts`` is not a list, or whose context detail is not a mapping raises
KubeJaxParseError instead of being silently left alone.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from kubejax.exceptions import KubeJaxParseError
from kubejax.utils.file import read_text_file, write_text_file

LOGGER = logging.getLogger("kubejax.config.document")

CURRENT_CONTEXT_KEY = "current-context"
CONTEXTS_KEY = "contexts"


def _require_mapping(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise KubeJaxParseError(f"{where} must be a mapping, got {type(value).__name__}")
    return value


def _require_list(value: Any, where: str) -> list[Any]:
    if not isinstance(value, list):
        raise KubeJaxParseError(f"{where} must be a list, got {type(value).__name__}")
    return value


def dump_document(data: dict[str, Any]) -> str:
    """Serialize a kubeconfig mapping as block-style YAML, keeping key order."""
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)


class KubeConfigDocument:
    """
    Raw kubeconfig mapping bound to the file it was read from.

    Example:
    -------
        ```python
        doc = KubeConfigDocument.load(Path("~/.kube/configs/prod.yaml").expanduser())
        doc.set_current_context("prod-east")
        doc.save()
        ```

    """

    def __init__(self, path: Path, data: dict[str, Any]):
        self.path = path
        self.data = _require_mapping(data, f"top level of {path}")

    @classmethod
    def load(cls, path: Path) -> "KubeConfigDocument":
        """
        Read and parse ``path`` from disk.

        Always call this right before mutating; never reuse an earlier parse.

        Raises
        ------
            KubeJaxNotFoundError: If the file does not exist
            KubeJaxIOError: If the file cannot be read
            KubeJaxParseError: If the file is not YAML or not a mapping

        """
        content = read_text_file(path)
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise KubeJaxParseError(f"Failed to parse {path}: {e}") from e

        if data is None:
            raise KubeJaxParseError(f"{path} is empty")

        return cls(path, data)

    @property
    def current_context(self) -> str | None:
        """Value of the top-level ``current-context`` key, if any."""
        return self.data.get(CURRENT_CONTEXT_KEY)

    def set_current_context(self, context_name: str) -> None:
        """
        Set the top-level ``current-context`` key.

        The key is added when missing. The context is not checked against the
        document's ``contexts`` list.
        """
        self.data[CURRENT_CONTEXT_KEY] = context_name

    def find_context(self, context_name: str) -> dict[str, Any] | None:
        """
        Return the raw ``contexts`` entry called ``context_name``.

        Returns
        -------
            The entry mapping, or None if the document declares no such context

        Raises
        ------
            KubeJaxParseError: If ``contexts`` or one of its entries has the wrong shape

        """
        contexts = self.data.get(CONTEXTS_KEY)
        if contexts is None:
            return None

        for index, entry in enumerate(_require_list(contexts, f"'{CONTEXTS_KEY}' in {self.path}")):
            entry = _require_mapping(entry, f"'{CONTEXTS_KEY}[{index}]' in {self.path}")
            if entry.get("name") == context_name:
                return entry
        return None

    def context_namespace(self, context_name: str) -> str | None:
        """Return the namespace set on ``context_name``, or None if unset or undeclared."""
        entry = self.find_context(context_name)
        if entry is None or entry.get("context") is None:
            return None
        return _require_mapping(entry["context"], f"context '{context_name}' in {self.path}").get("namespace")

    def set_context_namespace(self, context_name: str, namespace: str) -> bool:
        """
        Set ``namespace`` inside the detail block of one context.

        Returns
        -------
            True if the context was found and updated, False if it is not declared

        Raises
        ------
            KubeJaxParseError: If the context's ``context`` value is not a mapping

        """
        entry = self.find_context(context_name)
        if entry is None:
            LOGGER.debug(f"Context '{context_name}' not declared in {self.path}")
            return False

        detail = entry.get("context")
        if detail is None:
            detail = entry["context"] = {}
        detail = _require_mapping(detail, f"context '{context_name}' in {self.path}")
        detail["namespace"] = namespace
        return True

    def dump(self) -> str:
        """Serialize the document."""
        return dump_document(self.data)

    def save(self) -> None:
        """
        Overwrite the file this document was loaded from.

        Raises
        ------
            KubeJaxIOError: If the file cannot be written

        """
        write_text_file(self.path, self.dump())
        LOGGER.debug(f"Saved kubeconfig {self.path}")
