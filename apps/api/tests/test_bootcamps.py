"""Bootcamp API tests: ownership, publishing rules, listing and cascade delete."""

from __future__ import annotations

import unittest

from app.repositories.memory import new_object_id
from support import ApiCase, bootcamp_payload


class BootcampApiTests(ApiCase):
    def test_publisher_creates_bootcamp_with_slug_and_owner(self) -> None:
        publisher_id, publisher = self.create_user("publisher")

        bootcamp = self.create_bootcamp(publisher, name="ModernTech Bootcamp!")

        self.assertEqual(bootcamp["slug"], "moderntech-bootcamp")
        self.assertEqual(bootcamp["user"], publisher_id)
        self.assertEqual(bootcamp["photo"], "no-photo.jpg")
        self.assertIsNone(bootcamp["average_cost"])

    def test_second_bootcamp_for_same_publisher_is_rejected(self) -> None:
        publisher_id, publisher = self.create_user("publisher")
        original = self.create_bootcamp(publisher)

        response = self.client.post(
            "/api/v1/bootcamps",
            headers=publisher,
            json=bootcamp_payload(name="Second Attempt"),
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json(),
            {"success": False, "error": f"The user with ID {publisher_id} has already published a bootcamp"},
        )
        listed = self.client.get("/api/v1/bootcamps").json()
        self.assertEqual([item["id"] for item in listed["data"]], [original["id"]])
        self.assertEqual(listed["data"][0]["name"], original["name"])

    def test_admin_may_publish_several_bootcamps(self) -> None:
        _, admin = self.create_user("admin")

        self.create_bootcamp(admin, name="Admin One")
        self.create_bootcamp(admin, name="Admin Two")

        self.assertEqual(self.client.get("/api/v1/bootcamps").json()["count"], 2)

    def test_duplicate_name_is_rejected(self) -> None:
        _, first = self.create_user("publisher")
        _, second = self.create_user("publisher")
        self.create_bootcamp(first, name="Same Name")

        response = self.client.post("/api/v1/bootcamps", headers=second, json=bootcamp_payload(name="Same Name"))

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"success": False, "error": "Duplicate field entered"})

    def test_invalid_body_reports_field_messages(self) -> None:
        _, publisher = self.create_user("publisher")

        response = self.client.post(
            "/api/v1/bootcamps",
            headers=publisher,
            json=bootcamp_payload(website="ftp://nowhere", careers=[]),
        )

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertIsInstance(body["error"], list)
        fields = {message.split(":", 1)[0] for message in body["error"]}
        self.assertEqual(fields, {"website", "careers"})
        self.assertEqual(self.store.bootcamps.write_count, 0)

    def test_get_one_includes_courses(self) -> None:
        _, publisher = self.create_user("publisher")
        bootcamp = self.create_bootcamp(publisher)
        course = self.create_course(publisher, bootcamp["id"])

        response = self.client.get(f"/api/v1/bootcamps/{bootcamp['id']}")

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["id"], bootcamp["id"])
        self.assertEqual([item["id"] for item in data["courses"]], [course["id"]])

    def test_missing_and_malformed_ids_return_404_with_id(self) -> None:
        missing_id = new_object_id()

        missing = self.client.get(f"/api/v1/bootcamps/{missing_id}")
        malformed = self.client.get("/api/v1/bootcamps/not-an-id")

        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json(), {"success": False, "error": f"Bootcamp not found with id {missing_id}"})
        self.assertEqual(malformed.status_code, 404)
        self.assertEqual(malformed.json(), {"success": False, "error": "Resource not found with id not-an-id"})

    def test_non_owner_cannot_update_or_delete(self) -> None:
        _, owner = self.create_user("publisher")
        other_id, other = self.create_user("publisher")
        bootcamp = self.create_bootcamp(owner)

        update = self.client.put(f"/api/v1/bootcamps/{bootcamp['id']}", headers=other, json={"name": "Hijacked"})
        delete = self.client.delete(f"/api/v1/bootcamps/{bootcamp['id']}", headers=other)

        self.assertEqual(update.status_code, 403)
        self.assertEqual(
            update.json()["error"],
            f"User {other_id} is not authorized to update bootcamp {bootcamp['id']}",
        )
        self.assertEqual(delete.status_code, 403)
        current = self.client.get(f"/api/v1/bootcamps/{bootcamp['id']}").json()["data"]
        self.assertEqual(current["name"], bootcamp["name"])

    def test_owner_update_rederives_slug(self) -> None:
        _, owner = self.create_user("publisher")
        bootcamp = self.create_bootcamp(owner)

        response = self.client.put(
            f"/api/v1/bootcamps/{bootcamp['id']}",
            headers=owner,
            json={"name": "Codemasters", "housing": False},
        )

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["slug"], "codemasters")
        self.assertFalse(data["housing"])
        self.assertEqual(data["description"], bootcamp["description"])

    def test_admin_may_update_and_delete_any_bootcamp(self) -> None:
        _, owner = self.create_user("publisher")
        _, admin = self.create_user("admin")
        bootcamp = self.create_bootcamp(owner)

        update = self.client.put(f"/api/v1/bootcamps/{bootcamp['id']}", headers=admin, json={"phone": "555-0100"})
        delete = self.client.delete(f"/api/v1/bootcamps/{bootcamp['id']}", headers=admin)

        self.assertEqual(update.status_code, 200)
        self.assertEqual(update.json()["data"]["phone"], "555-0100")
        self.assertEqual(delete.status_code, 200)
        self.assertEqual(delete.json(), {"success": True, "data": {}})

    def test_delete_cascades_to_courses_and_reviews(self) -> None:
        _, owner = self.create_user("publisher")
        _, reviewer = self.create_user("user")
        bootcamp = self.create_bootcamp(owner)
        self.create_course(owner, bootcamp["id"])
        self.create_review(reviewer, bootcamp["id"])

        response = self.client.delete(f"/api/v1/bootcamps/{bootcamp['id']}", headers=owner)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.store.courses.count({}), 0)
        self.assertEqual(self.store.reviews.count({}), 0)
        self.assertEqual(self.client.get(f"/api/v1/bootcamps/{bootcamp['id']}").status_code, 404)


class BootcampListingTests(ApiCase):
    def setUp(self) -> None:
        super().setUp()
        _, self.admin = self.create_user("admin")
        self.bootcamps = [
            self.create_bootcamp(self.admin, name=f"Camp {index}", housing=index % 2 == 0)
            for index in range(5)
        ]

    def test_default_listing_is_newest_first_with_courses(self) -> None:
        response = self.client.get("/api/v1/bootcamps")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["count"], 5)
        self.assertEqual([item["name"] for item in body["data"]], [f"Camp {index}" for index in range(4, -1, -1)])
        self.assertTrue(all(item["courses"] == [] for item in body["data"]))

    def test_pagination_envelope(self) -> None:
        response = self.client.get("/api/v1/bootcamps", params={"limit": 2, "page": 2})

        body = response.json()
        self.assertEqual(body["count"], 2)
        self.assertEqual(
            body["pagination"],
            {"page": 2, "offset": 2, "limit": 2, "total_records": 5, "total_pages": 3},
        )

    def test_filter_select_and_sort(self) -> None:
        response = self.client.get(
            "/api/v1/bootcamps",
            params={"housing": "true", "select": "name,housing", "sort": "name"},
        )

        body = response.json()
        self.assertEqual([item["name"] for item in body["data"]], ["Camp 0", "Camp 2", "Camp 4"])
        self.assertEqual(set(body["data"][0]), {"id", "name", "housing", "courses"})

    def test_in_filter_over_careers(self) -> None:
        self.create_bootcamp(self.admin, name="Data Camp", careers=["Data Science"])

        response = self.client.get("/api/v1/bootcamps", params={"careers[in]": "Data Science,Business"})

        self.assertEqual([item["name"] for item in response.json()["data"]], ["Data Camp"])

    def test_date_only_created_at_filter_matches_records(self) -> None:
        response = self.client.get("/api/v1/bootcamps", params={"created_at[gte]": "2020-01-01"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["pagination"]["total_records"], 5)

    def test_uncastable_filter_value_is_bad_request(self) -> None:
        response = self.client.get("/api/v1/bootcamps", params={"average_cost[gte]": "cheap"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["success"], False)

    def test_unknown_operator_is_bad_request(self) -> None:
        response = self.client.get("/api/v1/bootcamps", params={"average_cost[ne]": "10"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"success": False, "error": "Unsupported filter operator ne"})


if __name__ == "__main__":
    unittest.main()
