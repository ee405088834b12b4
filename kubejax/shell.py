"""
Shell integration.

A child process cannot change its parent shell's environment, so ``kjx``
alone can only update ``KUBECONFIG`` for itself. The shell function emitted
here wraps the binary, passes ``--output-config <tmpfile>``, and exports
whatever path kjx wrote there.
"""

import logging
import os
import shutil
import sys
from collections.abc import Mapping
from enum import Enum
from pathlib import Path

from kubejax.exceptions import KubeJaxIOError

LOGGER = logging.getLogger("kubejax.shell")

SHELL_FUNCTION_MARKER = "KUBEJAX shell function"

SHELL_FUNCTION_TEMPLATE = """# {marker}
kjx() {{
    local temp_file=$(mktemp)
    local kjx_binary="{binary}"

    # Run kjx with output-config and pass all arguments
    if command "$kjx_binary" --output-config "$temp_file" "$@"; then
        # Check if temp file exists and has content
        if [ -f "$temp_file" ] && [ -s "$temp_file" ]; then
            local new_kubeconfig=$(cat "$temp_file")
            if [ -n "$new_kubeconfig" ]; then
                export KUBECONFIG="$new_kubeconfig"
                echo "KUBECONFIG exported: $KUBECONFIG"
            fi
        fi
    fi

    # Clean up temp file
    rm -f "$temp_file" 2>/dev/null
}}"""


class InstallResult(Enum):
    """Outcome of install_shell_function()."""

    INSTALLED = "installed"
    ALREADY_INSTALLED = "already-installed"
    UNSUPPORTED_SHELL = "unsupported-shell"


def kjx_executable() -> str:
    """
    Locate the kjx executable the shell function should call.

    Prefers the ``kjx`` console script on PATH, then the script this process
    was started from, then the bare name.
    """
    found = shutil.which("kjx")
    if found:
        return found
    argv0 = Path(sys.argv[0]) if sys.argv and sys.argv[0] else None
    if argv0 is not None and argv0.name == "kjx" and argv0.exists():
        return str(argv0.resolve())
    return "kjx"


def render_shell_function(binary: str | None = None) -> str:
    """Render the ``kjx`` shell function for bash and zsh."""
    return SHELL_FUNCTION_TEMPLATE.format(marker=SHELL_FUNCTION_MARKER, binary=binary or kjx_executable())


def detect_profile_file(environ: Mapping[str, str] | None = None, home: Path | None = None) -> Path | None:
    """
    Pick the profile file for the user's shell from ``$SHELL``.

    Returns
    -------
        ``~/.zshrc`` for zsh, ``~/.bashrc`` for bash, None for anything else

    """
    environ = os.environ if environ is None else environ
    shell = environ.get("SHELL", "")
    home = home or Path.home()

    if "zsh" in shell:
        return home / ".zshrc"
    if "bash" in shell:
        return home / ".bashrc"
    return None


def install_shell_function(profile_file: Path | None, binary: str | None = None) -> InstallResult:
    """
    Append the shell function to ``profile_file``.

    Idempotent: nothing is written if the profile already contains the
    function's marker line.

    Raises
    ------
        KubeJaxIOError: If the profile cannot be read or appended to

    """
    if profile_file is None:
        return InstallResult.UNSUPPORTED_SHELL

    if profile_file.exists():
        try:
            content = profile_file.read_text()
        except (OSError, UnicodeDecodeError) as e:
            raise KubeJaxIOError(f"Could not read {profile_file}: {e}") from e
        if SHELL_FUNCTION_MARKER in content:
            LOGGER.debug(f"Shell function already present in {profile_file}")
            return InstallResult.ALREADY_INSTALLED

    function_code = f"\n# {SHELL_FUNCTION_MARKER} (auto-generated)\n{render_shell_function(binary)}\n"
    try:
        with open(profile_file, "a") as f:
            f.write(function_code)
    except OSError as e:
        raise KubeJaxIOError(f"Could not write to {profile_file}: {e}") from e

    LOGGER.info(f"Installed shell function into {profile_file}")
    return InstallResult.INSTALLED
