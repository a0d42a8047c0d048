"""Document store behaviour tests."""

from __future__ import annotations

import unittest

from app.repositories.errors import DocumentValidationError, DuplicateKeyError, InvalidFilterError, InvalidIdError
from app.repositories.memory import InMemoryStore, is_object_id, new_object_id

OWNER_ID = "a" * 24


def _bootcamp(name: str, **overrides) -> dict:
    document = {
        "name": name,
        "description": "A bootcamp",
        "address": "1 Main St",
        "careers": ["Web Development"],
        "user": OWNER_ID,
    }
    document.update(overrides)
    return document


class DocumentCollectionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryStore()

    def test_insert_assigns_object_id_and_increasing_created_at(self) -> None:
        first = self.store.bootcamps.insert_one(_bootcamp("First"))
        second = self.store.bootcamps.insert_one(_bootcamp("Second"))

        self.assertTrue(is_object_id(first["id"]))
        self.assertNotEqual(first["id"], second["id"])
        self.assertLess(first["created_at"], second["created_at"])
        self.assertEqual(first["photo"], "no-photo.jpg")

    def test_client_supplied_id_and_created_at_are_ignored(self) -> None:
        inserted = self.store.bootcamps.insert_one(_bootcamp("Pinned", id="f" * 24, created_at="2000-01-01T00:00:00Z"))

        self.assertNotEqual(inserted["id"], "f" * 24)
        self.assertGreater(inserted["created_at"].year, 2000)

    def test_malformed_id_raises_invalid_id(self) -> None:
        for operation in (
            lambda: self.store.bootcamps.find_by_id("not-an-id"),
            lambda: self.store.bootcamps.update_one("123", {"name": "x"}),
            lambda: self.store.bootcamps.delete_one("XYZ"),
        ):
            with self.assertRaises(InvalidIdError):
                operation()

    def test_well_formed_missing_id_returns_none(self) -> None:
        missing = new_object_id()

        self.assertIsNone(self.store.bootcamps.find_by_id(missing))
        self.assertIsNone(self.store.bootcamps.update_one(missing, {"name": "x"}))
        self.assertFalse(self.store.bootcamps.delete_one(missing))

    def test_unique_index_rejects_duplicates_on_insert_and_update(self) -> None:
        self.store.bootcamps.insert_one(_bootcamp("Taken"))
        other = self.store.bootcamps.insert_one(_bootcamp("Free"))

        with self.assertRaises(DuplicateKeyError):
            self.store.bootcamps.insert_one(_bootcamp("Taken"))
        with self.assertRaises(DuplicateKeyError):
            self.store.bootcamps.update_one(other["id"], {"name": "Taken"})
        self.assertEqual(self.store.bootcamps.find_by_id(other["id"])["name"], "Free")

    def test_compound_unique_index(self) -> None:
        review = {"title": "Good", "text": "Nice", "rating": 7, "bootcamp": "b" * 24, "user": OWNER_ID}
        self.store.reviews.insert_one(review)
        self.store.reviews.insert_one({**review, "user": "c" * 24})

        with self.assertRaises(DuplicateKeyError):
            self.store.reviews.insert_one(review)

    def test_schema_validation_reports_field_messages(self) -> None:
        with self.assertRaises(DocumentValidationError) as raised:
            self.store.bootcamps.insert_one(_bootcamp("x" * 51, careers=[]))

        fields = {message.split(":", 1)[0] for message in raised.exception.messages}
        self.assertEqual(fields, {"name", "careers"})

    def test_update_revalidates_whole_document(self) -> None:
        inserted = self.store.bootcamps.insert_one(_bootcamp("Valid"))

        with self.assertRaises(DocumentValidationError):
            self.store.bootcamps.update_one(inserted["id"], {"website": "not a url"})
        self.assertIsNone(self.store.bootcamps.find_by_id(inserted["id"])["website"])

    def test_string_operands_are_cast_to_field_types(self) -> None:
        self.store.bootcamps.insert_one(_bootcamp("Cheap", average_cost=100, housing=True))
        self.store.bootcamps.insert_one(_bootcamp("Pricey", average_cost=900))

        names = [doc["name"] for doc in self.store.bootcamps.find({"average_cost": {"$gte": "500"}})]
        housed = [doc["name"] for doc in self.store.bootcamps.find({"housing": "true"})]

        self.assertEqual(names, ["Pricey"])
        self.assertEqual(housed, ["Cheap"])

    def test_date_only_and_utc_operands_compare_against_created_at(self) -> None:
        self.store.bootcamps.insert_one(_bootcamp("Recent"))
        self.store.bootcamps.insert_one(_bootcamp("Also Recent"))

        for raw in ("2020-01-01", "2020-01-01T00:00:00Z"):
            with self.subTest(raw=raw):
                matched = self.store.bootcamps.find({"created_at": {"$gte": raw}})
                self.assertEqual(len(matched), 2)
                self.assertEqual(self.store.bootcamps.count({"created_at": {"$lt": raw}}), 0)

    def test_uncastable_operand_raises_invalid_filter(self) -> None:
        with self.assertRaises(InvalidFilterError):
            self.store.bootcamps.find({"average_cost": {"$gt": "cheap"}})

    def test_unsupported_operator_raises_invalid_filter(self) -> None:
        with self.assertRaises(InvalidFilterError):
            self.store.bootcamps.find({"name": {"$regex": "a"}})

    def test_list_fields_match_when_any_element_matches(self) -> None:
        self.store.bootcamps.insert_one(_bootcamp("Mixed", careers=["Business", "Data Science"]))
        self.store.bootcamps.insert_one(_bootcamp("Web"))

        matched = self.store.bootcamps.find({"careers": {"$in": ["Data Science", "Other"]}})
        equal = self.store.bootcamps.find({"careers": "Business"})

        self.assertEqual([doc["name"] for doc in matched], ["Mixed"])
        self.assertEqual([doc["name"] for doc in equal], ["Mixed"])

    def test_unknown_fields_match_nothing(self) -> None:
        self.store.bootcamps.insert_one(_bootcamp("Anything"))

        self.assertEqual(self.store.bootcamps.find({"nonexistent": "value"}), [])

    def test_sort_places_missing_values_first_and_is_stable(self) -> None:
        self.store.bootcamps.insert_one(_bootcamp("B", average_cost=200))
        self.store.bootcamps.insert_one(_bootcamp("A"))
        self.store.bootcamps.insert_one(_bootcamp("C", average_cost=200))

        ascending = self.store.bootcamps.find({}, sort=[("average_cost", 1), ("name", -1)])

        self.assertEqual([doc["name"] for doc in ascending], ["A", "C", "B"])

    def test_projection_skip_and_limit(self) -> None:
        for name in ("One", "Two", "Three"):
            self.store.bootcamps.insert_one(_bootcamp(name))

        page = self.store.bootcamps.find({}, projection=["name"], sort=[("created_at", 1)], skip=1, limit=1)

        self.assertEqual(page, [{"id": page[0]["id"], "name": "Two"}])

    def test_returned_documents_are_copies(self) -> None:
        inserted = self.store.bootcamps.insert_one(_bootcamp("Immutable"))
        inserted["careers"].append("Other")
        fetched = self.store.bootcamps.find_by_id(inserted["id"])
        fetched["name"] = "Changed"

        stored = self.store.bootcamps.find_by_id(inserted["id"])
        self.assertEqual(stored["name"], "Immutable")
        self.assertEqual(stored["careers"], ["Web Development"])

    def test_delete_many_and_count(self) -> None:
        self.store.bootcamps.insert_one(_bootcamp("Keep", user="d" * 24))
        self.store.bootcamps.insert_one(_bootcamp("Drop 1"))
        self.store.bootcamps.insert_one(_bootcamp("Drop 2"))

        self.assertEqual(self.store.bootcamps.count({"user": OWNER_ID}), 2)
        self.assertEqual(self.store.bootcamps.delete_many({"user": OWNER_ID}), 2)
        self.assertEqual([doc["name"] for doc in self.store.bootcamps.find({})], ["Keep"])


if __name__ == "__main__":
    unittest.main()
