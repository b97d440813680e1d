from __future__ import annotations

import contextlib
import io
import sys
from typing import Any

import click
import typer
from rich.console import Console

from . import __version__
from .auth_inputs import resolve_context_credentials
from .cli_shared import (
    GOOGLE_APPLICATION_CREDENTIALS,
    PROJECT_ID,
    Environment,
    OpError,
    Options,
    UsageError,
    _eprint,
    gather_environment,
)
from .database import DatabaseContext
from .entrypoint import EntryPoint, Usage, delete_entrypoint, get_entrypoint, needs_context
from .handlers import dispatch

try:
    from dotenv import load_dotenv  # type: ignore
except Exception:  # pragma: no cover - exercised only when deps are missing
    load_dotenv = None


APP_NAME = "firesale"
ABOUT_APP = "CLI Firestore Interface"

_ERROR_CONSOLE = Console(stderr=True)


def _rich_error(msg: str) -> None:
    _ERROR_CONSOLE.print(f"[bold red]error:[/bold red] {msg}")


def _bootstrap_env() -> None:
    if load_dotenv is None:
        raise UsageError("missing dependency: python-dotenv (pip install python-dotenv)")
    # Use python-dotenv package defaults: discover and load .env without
    # overriding already-exported process environment values.
    load_dotenv()


def _help_text(ctx: click.Context) -> str:
    # Typer's rich formatter prints help instead of returning it.
    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        text = ctx.get_help()
    return str(text or buf.getvalue() or "").strip()


def _render_usage_error_with_help(*, message: str, ctx: click.Context | None = None) -> None:
    _rich_error(message)
    help_text = ""
    if isinstance(ctx, click.Context):
        try:
            help_text = _help_text(ctx)
        except Exception:
            help_text = ""
    if help_text:
        _eprint("")
        _eprint(help_text)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{APP_NAME} {__version__}")
        raise typer.Exit(code=0)


def _state(ctx: typer.Context) -> dict[str, Any]:
    return ctx.ensure_object(dict)


def build_app(environ: Environment) -> typer.Typer:
    """Build the command grammar; credential flags are required only when env lacks them."""

    app = typer.Typer(
        name=APP_NAME,
        help=ABOUT_APP,
        add_completion=False,
    )

    @app.callback(invoke_without_command=True)
    def app_callback(
        ctx: typer.Context,
        project_id: str | None = typer.Option(
            ... if environ.project_id is None else None,
            "--project-id",
            "-p",
            help=f"Cloud project id (env fallback: {PROJECT_ID})",
        ),
        credentials: str | None = typer.Option(
            ... if environ.service_account_path is None else None,
            "--credentials",
            "-c",
            help=f"Path to service account JSON (env fallback: {GOOGLE_APPLICATION_CREDENTIALS})",
        ),
        plain_json: bool = typer.Option(False, "--plain-json", help="Emit compact JSON output"),
        quiet: bool = typer.Option(False, "--quiet", help="Reduce stderr logging"),
        version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True),
    ) -> None:
        del version
        state = _state(ctx)
        state["options"] = Options(
            environment=Environment(service_account_path=credentials, project_id=project_id),
            plain_json=plain_json,
            quiet=quiet,
        )
        if ctx.invoked_subcommand is None:
            state["entrypoint"] = Usage(_help_text(ctx))

    @app.command("get", help="Print one document, or every document in a collection.")
    def get(
        ctx: typer.Context,
        collection: str = typer.Argument(..., help="Collection name"),
        document: str | None = typer.Argument(None, help="Document name (omit to list the collection)"),
    ) -> None:
        _state(ctx)["entrypoint"] = get_entrypoint(collection, document)

    @app.command("delete", help="Delete one document.")
    def delete(
        ctx: typer.Context,
        collection: str = typer.Argument(..., help="Collection name"),
        document: str = typer.Argument(..., help="Document name"),
    ) -> None:
        _state(ctx)["entrypoint"] = delete_entrypoint(collection, document)

    return app


def resolve_arguments(argv: list[str], environ: Environment) -> tuple[Options, EntryPoint]:
    state: dict[str, Any] = {}
    result = build_app(environ)(args=list(argv), prog_name=APP_NAME, standalone_mode=False, obj=state)
    if "entrypoint" not in state:
        # --help and --version finish inside click without selecting an action.
        raise typer.Exit(code=int(result or 0))
    return state["options"], state["entrypoint"]


def run(argv: list[str], environ: Environment) -> int:
    options, entry = resolve_arguments(argv, environ)
    if not needs_context(entry):
        return dispatch(entry, None, options)
    creds = resolve_context_credentials(cli=options.environment, env=environ)
    with DatabaseContext.open(creds) as context:
        return dispatch(entry, context, options)


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    try:
        _bootstrap_env()
        return run(argv, gather_environment())
    except typer.Exit as e:
        return int(e.exit_code)
    except click.ClickException as e:
        if isinstance(e, click.UsageError):
            _render_usage_error_with_help(message=e.format_message(), ctx=getattr(e, "ctx", None))
            return int(e.exit_code)
        _rich_error(e.format_message())
        return int(e.exit_code)
    except UsageError as e:
        _rich_error(str(e))
        return 2
    except OpError as e:
        _rich_error(str(e))
        return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
