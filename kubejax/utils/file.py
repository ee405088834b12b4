"""File utilities."""

import logging
from pathlib import Path

from kubejax.exceptions import KubeJaxIOError, KubeJaxNotFoundError

LOGGER = logging.getLogger(__name__)

IGNORED_SUFFIXES = (".log", ".txt", ".md")


def is_candidate_config_file(filename: Path | str) -> bool:
    """
    Check whether a directory entry name could be a kubeconfig file.

    Hidden files and ``.log``, ``.txt`` and ``.md`` files are never kubeconfigs.

    Example:
    -------
        ```python
        is_candidate_config_file("prod.yaml")   # True
        is_candidate_config_file(".DS_Store")   # False
        is_candidate_config_file("README.md")   # False
        ```

    """
    name = Path(filename).name
    return not name.startswith(".") and not name.endswith(IGNORED_SUFFIXES)


def read_text_file(path: Path) -> str:
    """
    Read a whole text file.

    Raises
    ------
        KubeJaxNotFoundError: If the file does not exist
        KubeJaxIOError: If the file cannot be read

    """
    try:
        content = path.read_text()
    except FileNotFoundError as e:
        raise KubeJaxNotFoundError(f"file does not exist: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise KubeJaxIOError(f"could not read {path}: {e}") from e

    LOGGER.debug(f"Read {len(content)} bytes from {path}")
    return content


def write_text_file(path: Path, content: str) -> None:
    """
    Overwrite a file with ``content``.

    The file is truncated and rewritten in place; there is no temporary file or
    rename, so an interrupted write can leave the file incomplete.

    Raises
    ------
        KubeJaxIOError: If the file cannot be written

    """
    try:
        path.write_text(content)
    except OSError as e:
        raise KubeJaxIOError(f"could not write {path}: {e}") from e

    LOGGER.debug(f"Wrote {len(content)} bytes to {path}")
