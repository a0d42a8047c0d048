"""In-memory document store used by the API and tests."""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
import re
import secrets
from types import UnionType
from typing import Any, Union, get_args, get_origin

from pydantic import BaseModel, TypeAdapter, ValidationError

from app.repositories.errors import (
    DocumentValidationError,
    DuplicateKeyError,
    InvalidFilterError,
    InvalidIdError,
    format_validation_errors,
)
from app.schemas.bootcamp import Bootcamp
from app.schemas.course import Course
from app.schemas.review import Review
from app.schemas.user import UserDocument

Document = dict[str, Any]
Filter = Mapping[str, Any]

_OBJECT_ID_PATTERN = re.compile(r"^[0-9a-f]{24}$")
_SERVER_MANAGED_FIELDS = frozenset({"id", "created_at"})
_COMPARISON_OPERATORS = frozenset({"$eq", "$gt", "$gte", "$lt", "$lte", "$in"})


def new_object_id() -> str:
    return secrets.token_hex(12)


def is_object_id(value: object) -> bool:
    return isinstance(value, str) and _OBJECT_ID_PATTERN.match(value) is not None


def _scalar_annotation(annotation: Any) -> Any:
    """Strip Optional and container wrappers down to the element type."""
    origin = get_origin(annotation)
    if origin in (Union, UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return _scalar_annotation(members[0])
        return annotation
    if origin in (list, tuple, set, frozenset):
        args = get_args(annotation)
        return _scalar_annotation(args[0]) if args else Any
    return annotation


def _sort_key(value: Any) -> tuple[int, Any]:
    # Missing values order before present ones, as in the document engine.
    if value is None:
        return (0, 0)
    return (1, value)


def _compare(value: Any, operator: str, operand: Any) -> bool:
    candidates = value if isinstance(value, list) else [value]
    if operator == "$eq":
        return any(candidate == operand for candidate in candidates)
    if operator == "$in":
        return any(candidate in operand for candidate in candidates)

    for candidate in candidates:
        if candidate is None:
            continue
        try:
            if operator == "$gt" and candidate > operand:
                return True
            if operator == "$gte" and candidate >= operand:
                return True
            if operator == "$lt" and candidate < operand:
                return True
            if operator == "$lte" and candidate <= operand:
                return True
        except TypeError:
            continue
    return False


@dataclass(slots=True)
class DocumentCollection:
    """A named set of schema-validated documents with unique indexes."""

    name: str
    schema: type[BaseModel]
    unique_indexes: tuple[tuple[str, ...], ...] = ()
    documents: dict[str, Document] = field(default_factory=dict)
    write_count: int = 0
    last_created_at: datetime | None = None
    _adapters: dict[str, TypeAdapter | None] = field(default_factory=dict)

    def insert_one(self, data: Mapping[str, Any]) -> Document:
        document = {key: value for key, value in data.items() if key not in _SERVER_MANAGED_FIELDS}
        document["id"] = new_object_id()
        document["created_at"] = self._next_created_at()
        validated = self._validate(document)
        self._ensure_unique(validated)
        self.documents[validated["id"]] = validated
        self.write_count += 1
        return copy.deepcopy(validated)

    def find_by_id(self, document_id: str) -> Document | None:
        if not is_object_id(document_id):
            raise InvalidIdError(document_id)
        document = self.documents.get(document_id)
        return copy.deepcopy(document) if document is not None else None

    def find_one(self, criteria: Filter) -> Document | None:
        matches = self.find(criteria, limit=1)
        return matches[0] if matches else None

    def find(
        self,
        criteria: Filter,
        *,
        projection: Sequence[str] | None = None,
        sort: Sequence[tuple[str, int]] | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Document]:
        predicate = self._compile(criteria)
        matches = [document for document in self.documents.values() if predicate(document)]

        # Repeated stable sorts, least significant key first.
        for field_name, direction in reversed(list(sort or ())):
            matches.sort(key=lambda document: _sort_key(document.get(field_name)), reverse=direction < 0)

        end = None if limit is None else skip + limit
        page = matches[skip:end]
        if projection:
            included = {"id", *projection}
            return [
                {key: copy.deepcopy(value) for key, value in document.items() if key in included}
                for document in page
            ]
        return [copy.deepcopy(document) for document in page]

    def count(self, criteria: Filter) -> int:
        predicate = self._compile(criteria)
        return sum(1 for document in self.documents.values() if predicate(document))

    def update_one(self, document_id: str, changes: Mapping[str, Any]) -> Document | None:
        if not is_object_id(document_id):
            raise InvalidIdError(document_id)
        current = self.documents.get(document_id)
        if current is None:
            return None

        merged = dict(current)
        merged.update({key: value for key, value in changes.items() if key not in _SERVER_MANAGED_FIELDS})
        validated = self._validate(merged)
        self._ensure_unique(validated)
        self.documents[document_id] = validated
        self.write_count += 1
        return copy.deepcopy(validated)

    def delete_one(self, document_id: str) -> bool:
        if not is_object_id(document_id):
            raise InvalidIdError(document_id)
        removed = self.documents.pop(document_id, None)
        if removed is None:
            return False
        self.write_count += 1
        return True

    def delete_many(self, criteria: Filter) -> int:
        predicate = self._compile(criteria)
        doomed = [document_id for document_id, document in self.documents.items() if predicate(document)]
        for document_id in doomed:
            del self.documents[document_id]
        self.write_count += len(doomed)
        return len(doomed)

    def _next_created_at(self) -> datetime:
        now = datetime.now(UTC)
        if self.last_created_at is not None and now <= self.last_created_at:
            now = self.last_created_at + timedelta(microseconds=1)
        self.last_created_at = now
        return now

    def _validate(self, document: Document) -> Document:
        try:
            model = self.schema.model_validate(document)
        except ValidationError as exc:
            raise DocumentValidationError(self.name, format_validation_errors(exc.errors())) from exc
        return model.model_dump()

    def _ensure_unique(self, document: Document) -> None:
        for index in self.unique_indexes:
            key = tuple(document.get(field_name) for field_name in index)
            if any(part is None for part in key):
                continue
            for other in self.documents.values():
                if other["id"] == document["id"]:
                    continue
                if tuple(other.get(field_name) for field_name in index) == key:
                    raise DuplicateKeyError(self.name, index)

    def _adapter_for(self, field_name: str) -> TypeAdapter | None:
        if field_name not in self._adapters:
            field_info = self.schema.model_fields.get(field_name)
            self._adapters[field_name] = (
                TypeAdapter(_scalar_annotation(field_info.annotation)) if field_info is not None else None
            )
        return self._adapters[field_name]

    def _cast(self, field_name: str, raw: Any) -> Any:
        if not isinstance(raw, str):
            return raw
        adapter = self._adapter_for(field_name)
        if adapter is None:
            return raw
        try:
            value = adapter.validate_strings(raw)
        except ValidationError as exc:
            raise InvalidFilterError(f"Invalid value {raw} for field {field_name}") from exc
        # Stored timestamps are always UTC-aware.
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    def _compile(self, criteria: Filter):
        """Cast every operand once and return a document predicate."""
        clauses: list[tuple[str, str, Any]] = []
        for field_name, condition in criteria.items():
            if isinstance(condition, Mapping):
                for operator, operand in condition.items():
                    if operator not in _COMPARISON_OPERATORS:
                        raise InvalidFilterError(f"Unsupported filter operator {operator}")
                    if operator == "$in":
                        values = operand if isinstance(operand, (list, tuple, set, frozenset)) else [operand]
                        cast = [self._cast(field_name, value) for value in values]
                    else:
                        cast = self._cast(field_name, operand)
                    clauses.append((field_name, operator, cast))
            else:
                clauses.append((field_name, "$eq", self._cast(field_name, condition)))

        def predicate(document: Document) -> bool:
            return all(
                _compare(document.get(field_name), operator, operand)
                for field_name, operator, operand in clauses
            )

        return predicate


@dataclass(slots=True)
class InMemoryStore:
    """Simple, deterministic persistence layer for the API and tests."""

    users: DocumentCollection = field(
        default_factory=lambda: DocumentCollection("users", UserDocument, unique_indexes=(("email",),))
    )
    bootcamps: DocumentCollection = field(
        default_factory=lambda: DocumentCollection("bootcamps", Bootcamp, unique_indexes=(("name",),))
    )
    courses: DocumentCollection = field(default_factory=lambda: DocumentCollection("courses", Course))
    reviews: DocumentCollection = field(
        default_factory=lambda: DocumentCollection("reviews", Review, unique_indexes=(("bootcamp", "user"),))
    )
