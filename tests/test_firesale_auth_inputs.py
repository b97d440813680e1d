import pytest

from firesale_cli.auth_inputs import (
    AuthInputError,
    CredentialResolutionError,
    resolve_context_credentials,
)
from firesale_cli.cli_shared import Environment, UsageError


def test_resolve_context_credentials_uses_env_pair_without_cli_override():
    creds = resolve_context_credentials(
        cli=Environment(),
        env=Environment(service_account_path="/keys/env.json", project_id="env-project"),
    )

    assert creds.project_id == "env-project"
    assert creds.service_account_path == "/keys/env.json"
    assert creds.source == "env"


def test_resolve_context_credentials_prefers_cli_pair_over_env():
    creds = resolve_context_credentials(
        cli=Environment(service_account_path="/keys/cli.json", project_id="cli-project"),
        env=Environment(service_account_path="/keys/env.json", project_id="env-project"),
    )

    assert creds.project_id == "cli-project"
    assert creds.service_account_path == "/keys/cli.json"
    assert creds.source == "cli"


def test_resolve_context_credentials_falls_back_to_env_when_cli_pair_incomplete():
    creds = resolve_context_credentials(
        cli=Environment(project_id="cli-project"),
        env=Environment(service_account_path="/keys/env.json", project_id="env-project"),
    )

    assert creds.project_id == "env-project"
    assert creds.service_account_path == "/keys/env.json"


def test_resolve_context_credentials_never_mixes_layers():
    with pytest.raises(CredentialResolutionError, match="failed to create database context"):
        resolve_context_credentials(
            cli=Environment(project_id="cli-project"),
            env=Environment(service_account_path="/keys/env.json"),
        )


def test_resolve_context_credentials_treats_blank_values_as_missing():
    with pytest.raises(CredentialResolutionError):
        resolve_context_credentials(
            cli=Environment(service_account_path="  ", project_id="cli-project"),
            env=Environment(),
        )


def test_credential_resolution_error_is_a_usage_error():
    with pytest.raises(UsageError) as exc:
        resolve_context_credentials(cli=Environment(), env=Environment())

    assert isinstance(exc.value, AuthInputError)
    assert "PROJECT_ID" in str(exc.value)
    assert "GOOGLE_APPLICATION_CREDENTIALS" in str(exc.value)


def test_context_credentials_origin_names_the_source_layer():
    cli_creds = resolve_context_credentials(
        cli=Environment(service_account_path="/keys/cli.json", project_id="cli-project"),
        env=Environment(),
    )
    env_creds = resolve_context_credentials(
        cli=Environment(),
        env=Environment(service_account_path="/keys/env.json", project_id="env-project"),
    )

    assert cli_creds.origin == "cli args"
    assert env_creds.origin == "environment variables"
