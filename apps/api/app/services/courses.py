"""Course service layer."""

import logging
import math
from typing import Any

from app.core.observability import safe_log_identifier
from app.domain.authorization import ensure_owner
from app.domain.list_query import ListQuerySpec, ListResult, execute_list_query
from app.errors import not_found
from app.repositories.memory import InMemoryStore
from app.schemas.auth import AuthPrincipal
from app.schemas.course import Course, CreateCourseRequest, UpdateCourseRequest
from app.schemas.populated import CourseWithBootcamp
from app.services.bootcamps import bootcamp_summaries

logger = logging.getLogger(__name__)


class CourseService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def list_courses(self, query: ListQuerySpec) -> ListResult:
        return execute_list_query(self._store.courses, query, populate=self._attach_bootcamps)

    def list_bootcamp_courses(self, bootcamp_id: str) -> list[Course]:
        if self._store.bootcamps.find_by_id(bootcamp_id) is None:
            raise not_found("Bootcamp", bootcamp_id)
        records = self._store.courses.find({"bootcamp": bootcamp_id}, sort=[("created_at", 1)])
        return [Course.model_validate(record) for record in records]

    def get_course(self, course_id: str) -> CourseWithBootcamp:
        record = self._load(course_id)
        [populated] = self._attach_bootcamps([record])
        return CourseWithBootcamp.model_validate(populated)

    def create_course(
        self,
        *,
        principal: AuthPrincipal,
        bootcamp_id: str,
        payload: CreateCourseRequest,
    ) -> Course:
        bootcamp = self._store.bootcamps.find_by_id(bootcamp_id)
        if bootcamp is None:
            raise not_found("Bootcamp", bootcamp_id)
        ensure_owner(
            principal,
            owner_id=bootcamp["user"],
            action="add a course to",
            resource="bootcamp",
            resource_id=bootcamp_id,
        )

        data = payload.model_dump()
        data["bootcamp"] = bootcamp_id
        data["user"] = principal.user_id
        record = self._store.courses.insert_one(data)
        self._refresh_average_cost(bootcamp_id)
        logger.info(
            "course.created course_id=%s bootcamp_id=%s principal_id=%s",
            record["id"],
            bootcamp_id,
            safe_log_identifier(principal.user_id, prefix="pid"),
        )
        return Course.model_validate(record)

    def update_course(self, *, principal: AuthPrincipal, course_id: str, payload: UpdateCourseRequest) -> Course:
        record = self._load(course_id)
        ensure_owner(principal, owner_id=record["user"], action="update", resource="course", resource_id=course_id)

        updated = self._store.courses.update_one(course_id, payload.model_dump(exclude_unset=True))
        if updated is None:
            raise not_found("Course", course_id)
        self._refresh_average_cost(updated["bootcamp"])
        return Course.model_validate(updated)

    def delete_course(self, *, principal: AuthPrincipal, course_id: str) -> None:
        record = self._load(course_id)
        ensure_owner(principal, owner_id=record["user"], action="delete", resource="course", resource_id=course_id)

        self._store.courses.delete_one(course_id)
        self._refresh_average_cost(record["bootcamp"])

    def _load(self, course_id: str) -> dict[str, Any]:
        record = self._store.courses.find_by_id(course_id)
        if record is None:
            raise not_found("Course", course_id)
        return record

    def _attach_bootcamps(self, courses: list[dict[str, Any]]) -> list[dict[str, Any]]:
        summaries = bootcamp_summaries(self._store, (course["bootcamp"] for course in courses if "bootcamp" in course))
        return [
            {**course, "bootcamp": summaries.get(course["bootcamp"], course["bootcamp"])}
            if "bootcamp" in course
            else course
            for course in courses
        ]

    def _refresh_average_cost(self, bootcamp_id: str) -> None:
        """Mean tuition rounded up to the next ten; cleared when no courses remain."""
        tuitions = [course["tuition"] for course in self._store.courses.find({"bootcamp": bootcamp_id})]
        average_cost = math.ceil(sum(tuitions) / len(tuitions) / 10) * 10 if tuitions else None
        self._store.bootcamps.update_one(bootcamp_id, {"average_cost": average_cost})
