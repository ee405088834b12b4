"""Utility functions for running external commands."""

import logging
import os
import subprocess

LOGGER = logging.getLogger("kubejax.utils.command")


def run_command(
    cmd: list[str],
    check: bool = True,
    capture: bool = True,
    env: dict[str, str] | None = None,
    timeout: float | None = None,
) -> subprocess.CompletedProcess:
    """
    Run a command with consistent handling.

    Args:
    ----
        cmd: Command and arguments as a list
        check: If True, raise CalledProcessError on non-zero exit
        capture: If True, capture stdout/stderr
        env: Optional environment variables (merged with os.environ)
        timeout: Optional timeout in seconds

    Returns:
    -------
        CompletedProcess instance with returncode, stdout, stderr

    Raises:
    ------
        subprocess.CalledProcessError: If check=True and command fails
        subprocess.TimeoutExpired: If timeout is exceeded
        FileNotFoundError: If the executable does not exist

    Example:
    -------
        ```python
        from kubejax.utils import run_command

        result = run_command(["kubectl", "get", "namespaces", "-o", "name"])
        print(result.stdout)

        # Point kubectl at a specific kubeconfig
        result = run_command(["kubectl", "config", "view"], env={"KUBECONFIG": "/path/to/config"})
        ```

    """
    command_env = os.environ.copy()
    if env:
        command_env.update(env)

    LOGGER.debug(f"Running command: {' '.join(cmd)}")

    return subprocess.run(
        cmd,
        capture_output=capture,
        text=True,
        check=check,
        env=command_env,
        timeout=timeout,
    )
