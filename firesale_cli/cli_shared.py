from __future__ import annotations

import base64
import json
import os
import sys
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any


class FiresaleError(Exception):
    pass


class UsageError(FiresaleError):
    pass


class OpError(FiresaleError):
    pass


GOOGLE_APPLICATION_CREDENTIALS = "GOOGLE_APPLICATION_CREDENTIALS"
PROJECT_ID = "PROJECT_ID"


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


@dataclass(frozen=True)
class Environment:
    """Credential inputs from one source (process env or CLI flags)."""

    service_account_path: str | None = None
    project_id: str | None = None


@dataclass(frozen=True)
class Options:
    environment: Environment
    plain_json: bool = False
    quiet: bool = False

    @property
    def pretty(self) -> bool:
        return not self.plain_json


def _env_or_none(*names: str) -> str | None:
    # Blank or whitespace-only values count as unset.
    for n in names:
        v = (os.environ.get(n) or "").strip()
        if v:
            return v
    return None


def gather_environment() -> Environment:
    # Read once, before argument parsing, so the grammar knows which flags are required.
    return Environment(
        service_account_path=_env_or_none(GOOGLE_APPLICATION_CREDENTIALS),
        project_id=_env_or_none(PROJECT_ID),
    )


def _json_default(val: Any) -> Any:
    if isinstance(val, (datetime, date)):
        return val.isoformat()
    if isinstance(val, bytes):
        return base64.b64encode(val).decode("ascii")
    # google.cloud.firestore DocumentReference
    path = getattr(val, "path", None)
    if isinstance(path, str):
        return path
    # google.cloud.firestore GeoPoint
    if hasattr(val, "latitude") and hasattr(val, "longitude"):
        return {"latitude": val.latitude, "longitude": val.longitude}
    raise TypeError(f"Object of type {type(val).__name__} is not JSON serializable")


def _print_json(obj: Any, *, pretty: bool) -> None:
    if pretty:
        sys.stdout.write(json.dumps(obj, indent=2, sort_keys=True, default=_json_default) + "\n")
    else:
        sys.stdout.write(
            json.dumps(obj, separators=(",", ":"), sort_keys=True, default=_json_default) + "\n"
        )
