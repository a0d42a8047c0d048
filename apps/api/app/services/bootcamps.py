"""Bootcamp service layer."""

from collections.abc import Iterable
import logging
import re
from typing import Any

from app.core.observability import safe_log_identifier
from app.domain.authorization import ensure_owner
from app.domain.list_query import ListQuerySpec, ListResult, execute_list_query
from app.errors import ApiError, not_found
from app.repositories.memory import InMemoryStore
from app.schemas.auth import AuthPrincipal, Role
from app.schemas.bootcamp import Bootcamp, CreateBootcampRequest, UpdateBootcampRequest
from app.schemas.populated import BootcampWithCourses

logger = logging.getLogger(__name__)

_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    return _SLUG_SEPARATORS.sub("-", name.lower()).strip("-")


def bootcamp_summaries(store: InMemoryStore, bootcamp_ids: Iterable[str]) -> dict[str, dict[str, Any]]:
    """Load ``id``/``name``/``description`` for each referenced bootcamp."""
    wanted = sorted(set(bootcamp_ids))
    if not wanted:
        return {}
    records = store.bootcamps.find({"id": {"$in": wanted}}, projection=("name", "description"))
    return {record["id"]: record for record in records}


class BootcampService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def list_bootcamps(self, query: ListQuerySpec) -> ListResult:
        return execute_list_query(self._store.bootcamps, query, populate=self._attach_courses)

    def get_bootcamp(self, bootcamp_id: str) -> BootcampWithCourses:
        record = self._load(bootcamp_id)
        courses = self._store.courses.find({"bootcamp": record["id"]}, sort=[("created_at", 1)])
        return BootcampWithCourses.model_validate({**record, "courses": courses})

    def create_bootcamp(self, *, principal: AuthPrincipal, payload: CreateBootcampRequest) -> Bootcamp:
        if principal.role is not Role.ADMIN:
            published = self._store.bootcamps.find_one({"user": principal.user_id})
            if published is not None:
                raise ApiError(
                    status_code=400,
                    code="BOOTCAMP_ALREADY_PUBLISHED",
                    message=f"The user with ID {principal.user_id} has already published a bootcamp",
                )

        data = payload.model_dump()
        data["user"] = principal.user_id
        data["slug"] = slugify(payload.name)
        record = self._store.bootcamps.insert_one(data)
        logger.info(
            "bootcamp.created bootcamp_id=%s principal_id=%s",
            record["id"],
            safe_log_identifier(principal.user_id, prefix="pid"),
        )
        return Bootcamp.model_validate(record)

    def update_bootcamp(
        self,
        *,
        principal: AuthPrincipal,
        bootcamp_id: str,
        payload: UpdateBootcampRequest,
    ) -> Bootcamp:
        record = self._load(bootcamp_id)
        ensure_owner(principal, owner_id=record["user"], action="update", resource="bootcamp", resource_id=bootcamp_id)

        changes = payload.model_dump(exclude_unset=True)
        if changes.get("name"):
            changes["slug"] = slugify(changes["name"])
        updated = self._store.bootcamps.update_one(bootcamp_id, changes)
        if updated is None:
            raise not_found("Bootcamp", bootcamp_id)
        return Bootcamp.model_validate(updated)

    def delete_bootcamp(self, *, principal: AuthPrincipal, bootcamp_id: str) -> None:
        record = self._load(bootcamp_id)
        ensure_owner(principal, owner_id=record["user"], action="delete", resource="bootcamp", resource_id=bootcamp_id)

        removed_courses = self._store.courses.delete_many({"bootcamp": bootcamp_id})
        removed_reviews = self._store.reviews.delete_many({"bootcamp": bootcamp_id})
        self._store.bootcamps.delete_one(bootcamp_id)
        logger.info(
            "bootcamp.deleted bootcamp_id=%s principal_id=%s courses=%d reviews=%d",
            bootcamp_id,
            safe_log_identifier(principal.user_id, prefix="pid"),
            removed_courses,
            removed_reviews,
        )

    def _load(self, bootcamp_id: str) -> dict[str, Any]:
        record = self._store.bootcamps.find_by_id(bootcamp_id)
        if record is None:
            raise not_found("Bootcamp", bootcamp_id)
        return record

    def _attach_courses(self, bootcamps: list[dict[str, Any]]) -> list[dict[str, Any]]:
        ids = [bootcamp["id"] for bootcamp in bootcamps]
        if not ids:
            return bootcamps
        by_bootcamp: dict[str, list[dict[str, Any]]] = {bootcamp_id: [] for bootcamp_id in ids}
        for course in self._store.courses.find({"bootcamp": {"$in": ids}}, sort=[("created_at", 1)]):
            by_bootcamp[course["bootcamp"]].append(course)
        return [{**bootcamp, "courses": by_bootcamp[bootcamp["id"]]} for bootcamp in bootcamps]
