"""
Unit tests for notification entities and the canonical access-request message.
"""
import uuid

from app.domains.notifications.entities import (
    Notification, NotificationType, render_access_request_message
)


class TestMessage:

    def test_render(self):
        assert render_access_request_message("bob", "Report") == \
            "User bob requests access to document: Report"

    def test_deterministic(self):
        assert render_access_request_message("bob", "Report") == render_access_request_message("bob", "Report")
        assert render_access_request_message("bob", "Report") != render_access_request_message("bob", "Report 2")


class TestAccessRequest:

    def test_fields(self):
        owner, sender, doc = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
        notification = Notification.access_request(owner, sender, "bob", doc, "Report")

        assert notification.type is NotificationType.ACCESS_REQUEST
        assert notification.reciever_id == owner
        assert notification.sender_id == sender
        assert notification.document_id == doc
        assert notification.notification == "User bob requests access to document: Report"

    def test_dedup_key_ignores_identity(self):
        """Two candidates for the same request share the dedup key but not the id."""
        owner, sender, doc = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
        first = Notification.access_request(owner, sender, "bob", doc, "Report")
        second = Notification.access_request(owner, sender, "bob", doc, "Report")

        assert first.uuid != second.uuid
        assert first.dedup_key() == second.dedup_key()
        assert first.dedup_key()["type"] == "access request"

    def test_event_payload_is_json_friendly(self):
        notification = Notification.access_request(uuid.uuid4(), uuid.uuid4(), "bob", uuid.uuid4(), "Report")
        payload = notification.to_event_payload()
        assert all(isinstance(value, str) for value in payload.values())
        assert payload["uuid"] == str(notification.uuid)
