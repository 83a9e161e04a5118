"""API tests for /api/events: listings, admin authoring and the moderation workflow."""

import unittest
from datetime import UTC, datetime, timedelta

from tests.support import ApiTestCase, event_payload


class EventsTestCase(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = self.headers_for("root", roles=("ADMIN",))
        self.member = self.headers_for("alice")

    def _create(self, headers: dict[str, str] | None = None, **overrides: object) -> dict:
        resp = self.client.post("/api/events", json=event_payload(**overrides), headers=headers or self.admin)
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()

    def _submit(self, **overrides: object) -> dict:
        resp = self.client.post("/api/events/submit", json=event_payload(**overrides), headers=self.member)
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()


class TestAdminAuthoring(EventsTestCase):
    def test_admin_event_without_status_is_published(self) -> None:
        event = self._create()
        self.assertEqual(event["status"], "PUBLISHED")
        self.assertEqual(event["organizer"]["username"], "root")
        self.assertEqual(event["ticketPrice"], 25.5)

    def test_draft_and_pending_are_promoted_to_published(self) -> None:
        for status in ("DRAFT", "PENDING"):
            with self.subTest(status=status):
                self.assertEqual(self._create(status=status)["status"], "PUBLISHED")

    def test_explicit_later_status_is_kept(self) -> None:
        self.assertEqual(self._create(status="CANCELLED")["status"], "CANCELLED")

    def test_member_cannot_create_directly(self) -> None:
        resp = self.client.post("/api/events", json=event_payload(), headers=self.member)
        self.assertEqual(resp.status_code, 403)

    def test_unknown_category_is_404(self) -> None:
        resp = self.client.post("/api/events", json=event_payload(categoryId=999), headers=self.admin)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"message": "Category not found: 999"})

    def test_end_before_start_is_400(self) -> None:
        start = datetime.now(UTC) + timedelta(days=3)
        resp = self.client.post(
            "/api/events",
            json=event_payload(
                startDateTime=start.isoformat(),
                endDateTime=(start - timedelta(hours=1)).isoformat(),
            ),
            headers=self.admin,
        )
        self.assertEqual(resp.status_code, 400)

    def test_update_and_delete(self) -> None:
        event = self._create()
        resp = self.client.put(
            f"/api/events/{event['id']}",
            json=event_payload(title="Renamed", ticketPrice="10.00"),
            headers=self.admin,
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["title"], "Renamed")
        self.assertEqual(resp.json()["status"], "PUBLISHED")

        resp = self.client.delete(f"/api/events/{event['id']}", headers=self.admin)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.client.get(f"/api/events/{event['id']}").status_code, 404)

    def test_delete_unknown_event_is_404(self) -> None:
        self.assertEqual(self.client.delete("/api/events/999", headers=self.admin).status_code, 404)


class TestModeration(EventsTestCase):
    def test_submission_is_pending_and_owned_by_member(self) -> None:
        event = self._submit(status="PUBLISHED")
        self.assertEqual(event["status"], "PENDING")
        self.assertEqual(event["organizer"]["username"], "alice")

    def test_pending_queue_is_admin_only(self) -> None:
        self._submit()
        self.assertEqual(self.client.get("/api/events/pending", headers=self.member).status_code, 403)
        page = self.client.get("/api/events/pending", headers=self.admin).json()
        self.assertEqual(page["totalElements"], 1)
        self.assertEqual(page["content"][0]["status"], "PENDING")

    def test_approve_publishes(self) -> None:
        event = self._submit()
        resp = self.client.put(f"/api/events/{event['id']}/approve", headers=self.admin)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "PUBLISHED")
        pending = self.client.get("/api/events/pending", headers=self.admin).json()
        self.assertEqual(pending["totalElements"], 0)

    def test_reject_marks_rejected(self) -> None:
        event = self._submit()
        resp = self.client.put(f"/api/events/{event['id']}/reject", headers=self.admin)
        self.assertEqual(resp.json()["status"], "REJECTED")

    def test_member_cannot_approve(self) -> None:
        event = self._submit()
        resp = self.client.put(f"/api/events/{event['id']}/approve", headers=self.member)
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(self.client.get(f"/api/events/{event['id']}").json()["status"], "PENDING")

    def test_approve_unknown_event_is_404(self) -> None:
        self.assertEqual(self.client.put("/api/events/999/approve", headers=self.admin).status_code, 404)

    def test_my_events_lists_only_own_events(self) -> None:
        self._submit(title="Mine")
        self._create(title="Admin's")
        events = self.client.get("/api/events/my-events", headers=self.member).json()
        self.assertEqual([e["title"] for e in events], ["Mine"])


class TestPublicListings(EventsTestCase):
    def test_upcoming_only_lists_future_published_events(self) -> None:
        past = datetime.now(UTC) - timedelta(days=10)
        self._create(title="Future")
        self._create(
            title="Past",
            startDateTime=past.isoformat(),
            endDateTime=(past + timedelta(hours=2)).isoformat(),
        )
        self._submit(title="Pending")
        page = self.client.get("/api/events/upcoming").json()
        self.assertEqual([e["title"] for e in page["content"]], ["Future"])

    def test_search_is_case_insensitive(self) -> None:
        self._create(title="Jazz Night")
        self._create(title="Chess Club", location="Jazzhaus")
        self._create(title="Book Fair")
        page = self.client.get("/api/events/search", params={"keyword": "JAZZ"}).json()
        self.assertEqual(sorted(e["title"] for e in page["content"]), ["Chess Club", "Jazz Night"])

    def test_list_sorts_and_pages(self) -> None:
        for title in ("B", "C", "A"):
            self._create(title=title)
        page = self.client.get(
            "/api/events",
            params={"sortBy": "title", "sortDir": "desc", "page": 0, "size": 2},
        ).json()
        self.assertEqual([e["title"] for e in page["content"]], ["C", "B"])
        self.assertEqual(page["totalElements"], 3)
        self.assertEqual(page["totalPages"], 2)
        self.assertEqual(page["number"], 0)

    def test_unknown_sort_field_is_400(self) -> None:
        resp = self.client.get("/api/events", params={"sortBy": "password"})
        self.assertEqual(resp.status_code, 400)

    def test_unknown_event_is_404(self) -> None:
        resp = self.client.get("/api/events/12345")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"message": "Event not found: 12345"})


if __name__ == "__main__":
    unittest.main()
