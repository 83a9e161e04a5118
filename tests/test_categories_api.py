"""API tests for /api/categories."""

import unittest

from tests.support import ApiTestCase, event_payload


class TestCategories(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = self.headers_for("root", roles=("ADMIN",))

    def _create(self, name: str = "Music", description: str = "Concerts") -> dict:
        resp = self.client.post(
            "/api/categories",
            json={"name": name, "description": description},
            headers=self.admin,
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()

    def test_listing_is_public_and_sorted_by_name(self) -> None:
        self._create("Tech")
        self._create("Art")
        resp = self.client.get("/api/categories")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([c["name"] for c in resp.json()], ["Art", "Tech"])

    def test_get_by_id(self) -> None:
        category = self._create()
        resp = self.client.get(f"/api/categories/{category['id']}")
        self.assertEqual(resp.json()["description"], "Concerts")
        self.assertEqual(self.client.get("/api/categories/999").status_code, 404)

    def test_duplicate_name_is_400(self) -> None:
        self._create("Music")
        resp = self.client.post("/api/categories", json={"name": "Music"}, headers=self.admin)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"message": "Error: Category name is already in use!"})

    def test_update(self) -> None:
        category = self._create()
        resp = self.client.put(
            f"/api/categories/{category['id']}",
            json={"name": "Live Music", "description": "Gigs"},
            headers=self.admin,
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "Live Music")

    def test_delete_leaves_events_uncategorized(self) -> None:
        category = self._create()
        event = self.client.post(
            "/api/events",
            json=event_payload(categoryId=category["id"]),
            headers=self.admin,
        ).json()
        self.assertEqual(event["category"]["name"], "Music")

        resp = self.client.delete(f"/api/categories/{category['id']}", headers=self.admin)
        self.assertEqual(resp.status_code, 200)
        self.assertIsNone(self.client.get(f"/api/events/{event['id']}").json()["category"])

    def test_writes_need_admin(self) -> None:
        member = self.headers_for("alice")
        resp = self.client.post("/api/categories", json={"name": "Sneaky"}, headers=member)
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(self.client.delete("/api/categories/1", headers=member).status_code, 403)
        self.assertEqual(self.client.get("/api/categories").json(), [])


if __name__ == "__main__":
    unittest.main()
