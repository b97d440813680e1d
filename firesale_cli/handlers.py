from __future__ import annotations

import sys
from typing import Any

from .cli_shared import Options, _eprint, _print_json
from .entrypoint import (
    CollectionQuery,
    DeleteDocument,
    DocumentQuery,
    EntryPoint,
    GetDocument,
    Usage,
    ViewCollection,
)


def handle_document_get(query: DocumentQuery, context: Any, options: Options) -> int:
    doc = context.fetch_document(query)
    _print_json({"kind": "firesale.document.v1", **doc}, pretty=options.pretty)
    return 0


def handle_document_view(query: CollectionQuery, context: Any, options: Options) -> int:
    docs = context.list_documents(query)
    _print_json(
        {
            "kind": "firesale.collection.v1",
            "collection": query.collection_name,
            "count": len(docs),
            "documents": docs,
        },
        pretty=options.pretty,
    )
    return 0


def handle_document_delete(query: DocumentQuery, context: Any, options: Options) -> int:
    context.delete_document(query)
    if not options.quiet:
        _eprint(f"deleted {query.path}")
    _print_json(
        {
            "kind": "firesale.delete.v1",
            "collection": query.collection_name,
            "document": query.document_name,
            "path": query.path,
            "deleted": True,
        },
        pretty=options.pretty,
    )
    return 0


def dispatch(entry: EntryPoint, context: Any, options: Options) -> int:
    if isinstance(entry, GetDocument):
        return handle_document_get(entry.query, context, options)
    if isinstance(entry, ViewCollection):
        return handle_document_view(entry.query, context, options)
    if isinstance(entry, DeleteDocument):
        return handle_document_delete(entry.query, context, options)
    if isinstance(entry, Usage):
        sys.stdout.write(entry.help_text + "\n")
        return 0
    raise TypeError(f"unsupported entry point: {entry!r}")
