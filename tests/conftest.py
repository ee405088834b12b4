"""Pytest configuration and fixtures for kubejax tests."""

import io
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
import yaml

from kubejax.config.settings import (
    ENV_CONFIG_DIR,
    ENV_KUBECONFIG,
    ENV_KUBECTL,
    ENV_KUBECTL_TIMEOUT,
    ENV_OUTPUT_CONFIG,
    ENV_STATE_FILE,
    KubeJaxSettings,
)
from kubejax.state import SwitchSession, SwitchStateStore


def make_kubeconfig(
    contexts: Sequence[str],
    current: str | None = None,
    namespaces: dict[str, str] | None = None,
) -> dict:
    """Build a minimal but realistic kubeconfig document."""
    namespaces = namespaces or {}
    context_entries = []
    for name in contexts:
        detail = {"cluster": name, "user": "admin"}
        if name in namespaces:
            detail["namespace"] = namespaces[name]
        context_entries.append({"name": name, "context": detail})

    return {
        "apiVersion": "v1",
        "kind": "Config",
        "clusters": [{"name": name, "cluster": {"server": f"https://{name}.example.com"}} for name in contexts],
        "contexts": context_entries,
        "current-context": current or "",
        "users": [{"name": "admin", "user": {"token": "secret-token"}}],
    }


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Point HOME at a temp dir and clear every variable kjx reads."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for name in (
        ENV_KUBECONFIG,
        ENV_CONFIG_DIR,
        ENV_OUTPUT_CONFIG,
        ENV_STATE_FILE,
        ENV_KUBECTL,
        ENV_KUBECTL_TIMEOUT,
    ):
        # setenv first so monkeypatch restores the variable even after kjx sets it
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return home


@pytest.fixture
def write_kubeconfig() -> Callable[..., Path]:
    """Return a helper that writes a kubeconfig file and returns its path."""

    def _write(
        path: Path,
        contexts: Sequence[str],
        current: str | None = None,
        namespaces: dict[str, str] | None = None,
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(make_kubeconfig(contexts, current, namespaces), f, sort_keys=False)
        return path

    return _write


@pytest.fixture
def config_dir(tmp_path, write_kubeconfig) -> Path:
    """
    A config directory with three kubeconfigs and some files kjx must ignore.

    dev.yaml      dev-east, dev-west (current: dev-east, dev-east in namespace 'team-a')
    prod.yaml     prod-east
    staging.yaml  staging
    """
    directory = tmp_path / "configs"
    write_kubeconfig(directory / "dev.yaml", ["dev-east", "dev-west"], current="dev-east", namespaces={"dev-east": "team-a"})
    write_kubeconfig(directory / "prod.yaml", ["prod-east"], current="prod-east")
    write_kubeconfig(directory / "staging.yaml", ["staging"])
    (directory / "README.md").write_text("not a kubeconfig")
    (directory / ".hidden").write_text("contexts: [")
    (directory / "archive").mkdir()
    return directory


@pytest.fixture
def active_kubeconfig(config_dir, monkeypatch) -> Path:
    """Make dev.yaml the kubeconfig kubectl is using."""
    path = config_dir / "dev.yaml"
    monkeypatch.setenv(ENV_KUBECONFIG, str(path))
    return path


@pytest.fixture
def settings(tmp_path, config_dir) -> KubeJaxSettings:
    """Settings bound to the temp config directory, without shell integration."""
    return KubeJaxSettings(
        config_dir=config_dir,
        fallback_output_config=tmp_path / "kjx-config",
        state_file=tmp_path / "state" / "kjx-state.yaml",
    )


@pytest.fixture
def session(settings) -> SwitchSession:
    """A session that records switch-back state and captures its output."""
    return SwitchSession(settings=settings, store=SwitchStateStore(settings.state_file), out=io.StringIO())

