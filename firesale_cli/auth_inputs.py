from __future__ import annotations

from dataclasses import dataclass

from .cli_shared import GOOGLE_APPLICATION_CREDENTIALS, PROJECT_ID, Environment, UsageError


class AuthInputError(UsageError):
    """Raised when CLI auth inputs are missing or conflicting."""


class CredentialResolutionError(AuthInputError):
    """Raised when neither the CLI nor the environment yields a complete pair."""


MISSING_CONTEXT_CREDENTIALS = (
    "failed to create database context, not provided in environment variables or cli args "
    f"(pass --project-id and --credentials, or set {PROJECT_ID} and {GOOGLE_APPLICATION_CREDENTIALS})"
)


@dataclass(frozen=True)
class ContextCredentials:
    project_id: str
    service_account_path: str
    source: str

    @property
    def origin(self) -> str:
        return "cli args" if self.source == "cli" else "environment variables"


def _complete_pair(environ: Environment) -> tuple[str, str] | None:
    project_id = (environ.project_id or "").strip()
    path = (environ.service_account_path or "").strip()
    if project_id and path:
        return project_id, path
    return None


def resolve_context_credentials(*, cli: Environment, env: Environment) -> ContextCredentials:
    """Pick the CLI pair, else the environment pair; never mix fields across layers."""

    for source, environ in (("cli", cli), ("env", env)):
        pair = _complete_pair(environ)
        if pair is not None:
            project_id, path = pair
            return ContextCredentials(project_id=project_id, service_account_path=path, source=source)
    raise CredentialResolutionError(MISSING_CONTEXT_CREDENTIALS)
