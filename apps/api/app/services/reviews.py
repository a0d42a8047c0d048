"""Review service layer."""

import logging
from typing import Any

from app.core.observability import safe_log_identifier
from app.domain.authorization import ensure_owner
from app.domain.list_query import ListQuerySpec, ListResult, execute_list_query
from app.errors import not_found
from app.repositories.memory import InMemoryStore
from app.schemas.auth import AuthPrincipal
from app.schemas.populated import ReviewWithBootcamp
from app.schemas.review import CreateReviewRequest, Review, UpdateReviewRequest
from app.services.bootcamps import bootcamp_summaries

logger = logging.getLogger(__name__)


class ReviewService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def list_reviews(self, query: ListQuerySpec) -> ListResult:
        return execute_list_query(self._store.reviews, query, populate=self._attach_bootcamps)

    def list_bootcamp_reviews(self, bootcamp_id: str) -> list[Review]:
        if self._store.bootcamps.find_by_id(bootcamp_id) is None:
            raise not_found("Bootcamp", bootcamp_id)
        records = self._store.reviews.find({"bootcamp": bootcamp_id}, sort=[("created_at", -1)])
        return [Review.model_validate(record) for record in records]

    def get_review(self, review_id: str) -> ReviewWithBootcamp:
        record = self._load(review_id)
        [populated] = self._attach_bootcamps([record])
        return ReviewWithBootcamp.model_validate(populated)

    def create_review(
        self,
        *,
        principal: AuthPrincipal,
        bootcamp_id: str,
        payload: CreateReviewRequest,
    ) -> Review:
        if self._store.bootcamps.find_by_id(bootcamp_id) is None:
            raise not_found("Bootcamp", bootcamp_id)

        data = payload.model_dump()
        data["bootcamp"] = bootcamp_id
        data["user"] = principal.user_id
        record = self._store.reviews.insert_one(data)
        self._refresh_average_rating(bootcamp_id)
        logger.info(
            "review.created review_id=%s bootcamp_id=%s principal_id=%s",
            record["id"],
            bootcamp_id,
            safe_log_identifier(principal.user_id, prefix="pid"),
        )
        return Review.model_validate(record)

    def update_review(self, *, principal: AuthPrincipal, review_id: str, payload: UpdateReviewRequest) -> Review:
        record = self._load(review_id)
        ensure_owner(principal, owner_id=record["user"], action="update", resource="review", resource_id=review_id)

        updated = self._store.reviews.update_one(review_id, payload.model_dump(exclude_unset=True))
        if updated is None:
            raise not_found("Review", review_id)
        self._refresh_average_rating(updated["bootcamp"])
        return Review.model_validate(updated)

    def delete_review(self, *, principal: AuthPrincipal, review_id: str) -> None:
        record = self._load(review_id)
        ensure_owner(principal, owner_id=record["user"], action="delete", resource="review", resource_id=review_id)

        self._store.reviews.delete_one(review_id)
        self._refresh_average_rating(record["bootcamp"])

    def _load(self, review_id: str) -> dict[str, Any]:
        record = self._store.reviews.find_by_id(review_id)
        if record is None:
            raise not_found("Review", review_id)
        return record

    def _attach_bootcamps(self, reviews: list[dict[str, Any]]) -> list[dict[str, Any]]:
        summaries = bootcamp_summaries(self._store, (review["bootcamp"] for review in reviews if "bootcamp" in review))
        return [
            {**review, "bootcamp": summaries.get(review["bootcamp"], review["bootcamp"])}
            if "bootcamp" in review
            else review
            for review in reviews
        ]

    def _refresh_average_rating(self, bootcamp_id: str) -> None:
        ratings = [review["rating"] for review in self._store.reviews.find({"bootcamp": bootcamp_id})]
        average_rating = round(sum(ratings) / len(ratings), 1) if ratings else None
        self._store.bootcamps.update_one(bootcamp_id, {"average_rating": average_rating})
