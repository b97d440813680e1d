from __future__ import annotations

import json
from typing import Any

from google.api_core import exceptions as gapi_exceptions
from google.auth import exceptions as gauth_exceptions
from google.cloud import firestore
from google.oauth2 import service_account

from .auth_inputs import ContextCredentials
from .cli_shared import OpError
from .entrypoint import CollectionQuery, DocumentQuery


def _snapshot_doc(snapshot: Any, *, collection_name: str) -> dict[str, Any]:
    return {
        "collection": collection_name,
        "document": str(snapshot.id),
        "path": str(snapshot.reference.path),
        "data": snapshot.to_dict() or {},
    }


def _load_service_account_info(creds: ContextCredentials) -> dict[str, Any]:
    path = creds.service_account_path
    try:
        with open(path, "r", encoding="utf-8") as f:
            info = json.load(f)
    except (OSError, ValueError) as e:
        raise OpError(
            f"failed to load service account credentials from {path!r} ({creds.origin}): {e}"
        ) from e
    if not isinstance(info, dict):
        raise OpError(
            f"invalid service account credentials in {path!r} ({creds.origin}): expected JSON object"
        )
    return info


class DatabaseContext:
    """Authenticated handle for document operations against one Firestore project."""

    def __init__(self, client: Any, *, project_id: str) -> None:
        self.client = client
        self.project_id = project_id

    @classmethod
    def open(cls, creds: ContextCredentials) -> "DatabaseContext":
        info = _load_service_account_info(creds)
        try:
            sa_creds = service_account.Credentials.from_service_account_info(info)
        except (ValueError, gauth_exceptions.GoogleAuthError) as e:
            raise OpError(
                f"invalid service account credentials in {creds.service_account_path!r} ({creds.origin}): {e}"
            ) from e
        try:
            client = firestore.Client(project=creds.project_id, credentials=sa_creds)
        except gauth_exceptions.GoogleAuthError as e:
            raise OpError(f"failed to create database context for project {creds.project_id!r}: {e}") from e
        return cls(client, project_id=creds.project_id)

    def close(self) -> None:
        close = getattr(self.client, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "DatabaseContext":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def fetch_document(self, query: DocumentQuery) -> dict[str, Any]:
        ref = self.client.collection(query.collection_name).document(query.document_name)
        try:
            snapshot = ref.get()
        except gapi_exceptions.GoogleAPIError as e:
            raise OpError(f"get failed for {query.path}: {e}") from e
        if not snapshot.exists:
            raise OpError(f"document not found: {query.path}")
        return _snapshot_doc(snapshot, collection_name=query.collection_name)

    def list_documents(self, query: CollectionQuery) -> list[dict[str, Any]]:
        coll = self.client.collection(query.collection_name)
        try:
            return [
                _snapshot_doc(snapshot, collection_name=query.collection_name)
                for snapshot in coll.stream()
            ]
        except gapi_exceptions.GoogleAPIError as e:
            raise OpError(f"list failed for collection {query.collection_name!r}: {e}") from e

    def delete_document(self, query: DocumentQuery) -> None:
        ref = self.client.collection(query.collection_name).document(query.document_name)
        try:
            ref.delete()
        except gapi_exceptions.GoogleAPIError as e:
            raise OpError(f"delete failed for {query.path}: {e}") from e
