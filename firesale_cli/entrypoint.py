from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class DocumentQuery:
    collection_name: str
    document_name: str

    @property
    def path(self) -> str:
        return f"{self.collection_name}/{self.document_name}"


@dataclass(frozen=True)
class CollectionQuery:
    collection_name: str


@dataclass(frozen=True)
class GetDocument:
    query: DocumentQuery


@dataclass(frozen=True)
class ViewCollection:
    query: CollectionQuery


@dataclass(frozen=True)
class DeleteDocument:
    query: DocumentQuery


@dataclass(frozen=True)
class Usage:
    help_text: str


EntryPoint = Union[GetDocument, ViewCollection, DeleteDocument, Usage]


def get_entrypoint(collection: str, document: str | None) -> EntryPoint:
    """`get` reads one document when a name is given, otherwise the whole collection."""

    if document is not None:
        return GetDocument(DocumentQuery(collection_name=collection, document_name=document))
    return ViewCollection(CollectionQuery(collection_name=collection))


def delete_entrypoint(collection: str, document: str) -> EntryPoint:
    return DeleteDocument(DocumentQuery(collection_name=collection, document_name=document))


def needs_context(entry: EntryPoint) -> bool:
    return not isinstance(entry, Usage)
