"""
Kubeconfig schemas.

This module defines Pydantic models for:
- The typed read model of a kubeconfig document (clusters, contexts, users)
- ConfigEntry, the per-file registry record produced by the loader
- CurrentContextInfo, the summary shown by ``--current``

These models are only ever used for reading. Writes go through
``kubejax.config.document`` so unknown fields survive a round trip.
"""

from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_NAMESPACE = "default"


class ClusterDetail(BaseModel):
    """Connection details of a cluster entry."""

    server: str | None = None
    certificate_authority: str | None = Field(default=None, alias="certificate-authority")
    certificate_authority_data: str | None = Field(default=None, alias="certificate-authority-data")
    insecure_skip_tls_verify: bool = Field(default=False, alias="insecure-skip-tls-verify")

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Cluster(BaseModel):
    """Named cluster entry."""

    name: str
    cluster: ClusterDetail = Field(default_factory=ClusterDetail)

    model_config = ConfigDict(extra="allow")


class UserDetail(BaseModel):
    """Credentials of a user entry."""

    client_certificate: str | None = Field(default=None, alias="client-certificate")
    client_certificate_data: str | None = Field(default=None, alias="client-certificate-data")
    client_key: str | None = Field(default=None, alias="client-key")
    client_key_data: str | None = Field(default=None, alias="client-key-data")
    token: str | None = None
    username: str | None = None
    password: str | None = None
    auth_provider: dict[str, Any] | None = Field(default=None, alias="auth-provider")
    exec: dict[str, Any] | None = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class User(BaseModel):
    """Named user entry."""

    name: str
    user: UserDetail = Field(default_factory=UserDetail)

    model_config = ConfigDict(extra="allow")


class ContextDetail(BaseModel):
    """Cluster, user and namespace selected by a context."""

    cluster: str | None = None
    user: str | None = None
    namespace: str | None = None

    model_config = ConfigDict(extra="allow")

    @property
    def effective_namespace(self) -> str:
        """Namespace kubectl would use; ``default`` when none is set."""
        return self.namespace or DEFAULT_NAMESPACE


class Context(BaseModel):
    """Named context entry."""

    name: str
    context: ContextDetail = Field(default_factory=ContextDetail)

    model_config = ConfigDict(extra="allow")

    @field_validator("context", mode="before")
    @classmethod
    def empty_context_detail(cls, v: Any) -> Any:
        """Treat ``context:`` with no value as an empty detail block."""
        return {} if v is None else v


class KubeConfig(BaseModel):
    """
    Typed view of a kubeconfig document.

    Example:
    -------
        apiVersion: v1
        kind: Config
        clusters:
          - name: prod-east
            cluster:
              server: https://prod-east.example.com
        contexts:
          - name: prod-east
            context:
              cluster: prod-east
              user: admin
              namespace: payments
        current-context: prod-east
        users:
          - name: admin
            user:
              token: "..."

    """

    api_version: str | None = Field(default=None, alias="apiVersion")
    kind: str | None = None
    clusters: list[Cluster] = Field(default_factory=list)
    contexts: list[Context] = Field(default_factory=list)
    current_context: str = Field(default="", alias="current-context")
    users: list[User] = Field(default_factory=list)
    preferences: dict[str, Any] | None = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @field_validator("clusters", "contexts", "users", mode="before")
    @classmethod
    def empty_list(cls, v: Any) -> Any:
        """Treat a key present with no value (``contexts:``) as an empty list."""
        return [] if v is None else v

    @field_validator("current_context", mode="before")
    @classmethod
    def empty_current_context(cls, v: Any) -> Any:
        """Treat ``current-context:`` with no value as unset."""
        return "" if v is None else v

    @property
    def context_names(self) -> list[str]:
        """Context names in document order."""
        return [ctx.name for ctx in self.contexts]

    def get_context(self, name: str) -> Context | None:
        """Return the context called ``name``, or None if it is not declared."""
        return next((ctx for ctx in self.contexts if ctx.name == name), None)


class ConfigEntry(BaseModel):
    """
    One kubeconfig file in the config directory and the contexts it declares.

    Created by the loader for every readable file with at least one context.
    """

    file_path: Annotated[Path, Field(description="Absolute path of the kubeconfig file")]
    context_names: Annotated[tuple[str, ...], Field(description="Context names in document order")]

    model_config = ConfigDict(frozen=True)

    @property
    def file_name(self) -> str:
        """Base name of the kubeconfig file."""
        return self.file_path.name


class CurrentContextInfo(BaseModel):
    """Summary of the active context, as shown by ``kjx --current``."""

    context: str
    config_path: Path
    cluster: str = ""
    namespace: str = DEFAULT_NAMESPACE

    @property
    def config_file(self) -> str:
        """Base name of the active kubeconfig file."""
        return self.config_path.name
