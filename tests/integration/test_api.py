"""Integration smoke tests for the REST and WebSocket API (in-memory UoW via dependency override)."""
from __future__ import annotations

import uuid

import jwt
import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from clarity_service.api.deps import get_engines, get_uow
from clarity_service.app import create_app
from clarity_service.application.dto.notification import REALTIME_EVENT
from clarity_service.config import settings
from tests.conftest import (
    ME,
    PARTNER,
    FakeEngines,
    FakeUoW,
    make_message,
    make_partnership,
    make_session,
    make_subscription,
    make_user,
)


def _make_token(sub: int = ME) -> str:
    return jwt.encode({"sub": str(sub)}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


CSRF = {"X-Requested-With": "CoupleClarity"}


def _auth(sub: int = ME) -> dict[str, str]:
    return {"Authorization": f"Bearer {_make_token(sub)}"}


@pytest.fixture
def app_with_uow():
    app = create_app()
    uow = FakeUoW()
    engines = FakeEngines()

    async def _override():
        yield uow

    app.dependency_overrides[get_uow] = _override
    app.dependency_overrides[get_engines] = lambda: engines
    return app, uow


@pytest.fixture
def client(app_with_uow):
    app, _ = app_with_uow
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def uow(app_with_uow):
    _, uow = app_with_uow
    return uow


@pytest.fixture
def partnership(uow):
    p = make_partnership()
    uow.partnerships._items[p.id] = p
    uow.users._users[ME] = make_user(ME, "Alex")
    uow.users._users[PARTNER] = make_user(PARTNER, "Sam")
    return p


def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "websocketConnections": 0}


def test_requires_token(client):
    resp = client.get("/api/messages")
    assert resp.status_code in (401, 403)


def test_csrf_blocks_form_posts(client):
    resp = client.post(
        "/api/transform",
        content="emotion=angry",
        headers={**_auth(), "Content-Type": "application/x-www-form-urlencoded"},
    )
    assert resp.status_code == 403
    assert resp.json() == {"error": "Forbidden: missing required request headers"}


def test_transform_and_share(client, uow, partnership):
    resp = client.post(
        "/api/transform",
        json={"emotion": "hurt", "rawMessage": "You forgot again", "shareWithPartner": True},
        headers={**_auth(), **CSRF},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["transformedMessage"] == "[openai] I feel hurt."
    message_id = uuid.UUID(body["messageId"])
    assert uow.messages._messages[message_id].partner_id == PARTNER

    shared = client.get(f"/api/partners/{ME}/shared-messages", headers=_auth(PARTNER))
    assert [m["id"] for m in shared.json()] == [str(message_id)]


def test_transform_validates_length(client):
    resp = client.post(
        "/api/transform",
        json={"emotion": "hurt", "rawMessage": "x" * 501},
        headers=_auth(),
    )
    assert resp.status_code == 422


def test_message_forbidden_for_stranger(client, uow):
    msg = make_message()
    uow.messages._messages[msg.id] = msg

    assert client.get(f"/api/messages/{msg.id}", headers=_auth(ME)).status_code == 200
    resp = client.get(f"/api/messages/{msg.id}", headers=_auth(77))
    assert resp.status_code == 403
    assert resp.json()["detail"] == "You don't have permission to access this message"
    assert client.get(f"/api/messages/{uuid.uuid4()}", headers=_auth()).status_code == 404


def test_create_response(client, uow):
    msg = make_message()
    uow.messages._messages[msg.id] = msg

    resp = client.post(f"/api/messages/{msg.id}/responses", json={"content": "I hear you"}, headers=_auth(PARTNER))

    assert resp.status_code == 201
    assert resp.json()["aiSummary"] == "Partner agrees to talk."
    listed = client.get(f"/api/messages/{msg.id}/responses", headers=_auth(ME)).json()
    assert [r["content"] for r in listed] == ["I hear you"]


def test_conflict_thread_lifecycle(client, uow, partnership):
    created = client.post(
        "/api/conflict-threads",
        json={"topic": "Chores", "partnerId": PARTNER, "initialMessage": "Can we talk?"},
        headers=_auth(),
    )
    assert created.status_code == 201
    thread_id = created.json()["id"]

    reply = client.post(
        f"/api/conflict-threads/{thread_id}/messages",
        json={"content": "Sure", "emotionalTone": "calm"},
        headers=_auth(PARTNER),
    )
    assert reply.status_code == 201

    messages = client.get(f"/api/conflict-threads/{thread_id}/messages", headers=_auth()).json()
    assert [m["content"] for m in messages] == ["Can we talk?", "Sure"]

    missing_summary = client.patch(
        f"/api/conflict-threads/{thread_id}/status", json={"status": "resolved"}, headers=_auth(),
    )
    assert missing_summary.status_code == 422

    resolved = client.patch(
        f"/api/conflict-threads/{thread_id}/status",
        json={"status": "resolved", "summary": "Alternate weeks"},
        headers=_auth(),
    )
    assert resolved.json()["status"] == "resolved"
    assert resolved.json()["resolvedAt"] is not None

    reopened = client.patch(
        f"/api/conflict-threads/{thread_id}/status", json={"status": "active"}, headers=_auth(),
    )
    assert reopened.json()["status"] == "active"
    assert reopened.json()["resolvedAt"] is None
    assert reopened.json()["resolutionSummary"] is None


def test_conflict_thread_with_non_partner(client, partnership):
    resp = client.post("/api/conflict-threads", json={"topic": "Chores", "partnerId": 77}, headers=_auth())
    assert resp.status_code == 403


def test_push_subscription(client, uow):
    body = {"endpoint": "https://push/abc", "keys": {"p256dh": "key", "auth": "secret"}}

    first = client.post("/api/notifications/subscribe", json=body, headers=_auth())
    second = client.post("/api/notifications/subscribe", json=body, headers=_auth())
    invalid = client.post("/api/notifications/subscribe", json={"endpoint": "https://push/x"}, headers=_auth())

    assert first.status_code == 201
    assert second.status_code == 200
    assert second.json()["message"] == "Subscription already exists"
    assert invalid.status_code == 400
    assert len(uow.subscriptions._subs) == 1


def test_unsubscribe(client, uow):
    sub = make_subscription(ME, "https://push/abc")
    uow.subscriptions._subs[sub.id] = sub

    resp = client.request(
        "DELETE", "/api/notifications/unsubscribe", json={"endpoint": "https://push/abc"}, headers=_auth(),
    )

    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert uow.subscriptions._subs == {}


def test_notification_preferences(client):
    defaults = client.get("/api/notifications/preferences", headers=_auth()).json()
    assert defaults["newConflicts"] is True

    updated = client.post("/api/notifications/preferences", json={"newConflicts": False}, headers=_auth())

    assert updated.json()["newConflicts"] is False
    assert updated.json()["directMessages"] is True


def test_user_preferences(client):
    assert client.get("/api/user/preferences", headers=_auth()).status_code == 404

    saved = client.post(
        "/api/user/preferences",
        json={
            "loveLanguage": "quality_time",
            "conflictStyle": "talk_calmly",
            "communicationStyle": "supportive",
            "repairStyle": "talking",
            "preferredAiModel": "anthropic",
        },
        headers=_auth(),
    )

    assert saved.status_code == 200
    assert saved.json()["preferredAiModel"] == "anthropic"
    analysis = client.get("/api/user/love-language-analysis", headers=_auth()).json()
    assert analysis["loveLanguage"] == "quality_time"


def test_love_language_discovery(client):
    ok = client.post(
        "/api/user/love-language/discover",
        json={"answers": ["gifts", "gifts", "quality_time"]},
        headers=_auth(),
    )
    bad = client.post("/api/user/love-language/discover", json={"answers": ["gifts"]}, headers=_auth())

    assert ok.json() == {"loveLanguage": "gifts"}
    assert bad.status_code == 422


def test_partnership_profile(client, partnership):
    profile = client.get("/api/partnership/profile", headers=_auth())
    assert profile.status_code == 200

    updated = client.put("/api/partnership/profile", json={"coupleNickname": "A&S"}, headers=_auth())
    assert updated.json()["coupleNickname"] == "A&S"


def test_journal_flow(client, uow, partnership):
    created = client.post(
        "/api/journal",
        json={"title": "Us", "content": "I miss our walks", "isPrivate": False, "isShared": True},
        headers=_auth(),
    )
    assert created.status_code == 201
    entry = created.json()
    assert entry["partnerId"] == PARTNER
    assert entry["rawContent"] == "I miss our walks"

    activity = client.get("/api/journal/partner-activity", headers=_auth(PARTNER)).json()
    assert activity["unreadCount"] == 1
    assert activity["latestEntry"]["title"] == "Us"

    assert client.get(f"/api/journal/{entry['id']}", headers=_auth(PARTNER)).status_code == 200
    assert [e["id"] for e in client.get("/api/journal/shared", headers=_auth(PARTNER)).json()] == [entry["id"]]

    reply = client.post(
        f"/api/journal/{entry['id']}/respond", json={"content": "Tonight?"}, headers=_auth(PARTNER),
    )
    assert reply.status_code == 201
    assert client.get("/api/journal/partner-activity", headers=_auth(PARTNER)).json()["unreadCount"] == 0

    resolved = client.post(f"/api/journal/{entry['id']}/mark-resolved", headers={**_auth(), **CSRF})
    assert resolved.status_code == 200
    assert resolved.json()["hasPartnerResponse"] is True

    recent = client.get("/api/journal/recent", headers=_auth()).json()
    assert recent["count"] == 1
    assert recent["entries"][0]["id"] == entry["id"]
    assert "date" in recent["entries"][0]

    types = [e["type"] for e in uow.outbox.of_type(REALTIME_EVENT)]
    assert types == ["journal_entry", "journal_response", "journal_entry_resolved"]


def test_journal_private_entry_is_hidden(client, partnership):
    entry = client.post("/api/journal", json={"title": "Me", "content": "Just me"}, headers=_auth()).json()

    assert client.get(f"/api/journal/{entry['id']}", headers=_auth(PARTNER)).status_code == 403
    assert client.get("/api/journal?isPrivate=true", headers=_auth()).json()[0]["id"] == entry["id"]
    assert client.delete(f"/api/journal/{entry['id']}", headers={**_auth(PARTNER), **CSRF}).status_code == 403
    assert client.delete(f"/api/journal/{entry['id']}", headers={**_auth(), **CSRF}).status_code == 200
    assert client.get(f"/api/journal/{entry['id']}", headers=_auth()).status_code == 404


def test_journal_shared_without_partnership(client):
    shared = client.get("/api/journal/shared", headers=_auth())
    assert shared.status_code == 404
    assert shared.json() == {"detail": "No active partnership found"}


def test_partnership_connect_by_email(client, uow):
    uow.users._users[ME] = make_user(ME, "Alex")
    uow.users._users[PARTNER] = make_user(PARTNER, "Sam")

    requested = client.post("/api/partnerships/connect", json={"partnerEmail": "sam@example.com"}, headers=_auth())
    assert requested.status_code == 201
    assert requested.json()["partnership"]["status"] == "pending"
    assert client.get("/api/partnership/profile", headers=_auth()).status_code == 404

    accepted = client.post(
        "/api/partnerships/connect", json={"partnerEmail": "alex@example.com"}, headers=_auth(PARTNER),
    )
    assert accepted.status_code == 200
    assert accepted.json()["partnership"]["status"] == "active"
    assert client.get("/api/partnership/profile", headers=_auth()).json()["partner"]["id"] == PARTNER

    partnership_id = accepted.json()["partnership"]["id"]
    removed = client.delete(f"/api/partnerships/{partnership_id}", headers={**_auth(PARTNER), **CSRF})
    assert removed.status_code == 200
    assert client.get("/api/partnership/profile", headers=_auth()).status_code == 404


def test_partnership_invite_token(client, uow):
    uow.users._users[ME] = make_user(ME, "Alex")
    uow.users._users[PARTNER] = make_user(PARTNER, "Sam")

    invite = client.post("/api/partnerships/invites", json={"partnerEmail": "sam@example.com"}, headers=_auth())
    assert invite.status_code == 201
    token = invite.json()["token"]

    bad = client.post("/api/partnerships/connect-by-token", json={"inviteToken": "nope"}, headers=_auth(PARTNER))
    assert bad.status_code == 404

    joined = client.post("/api/partnerships/connect-by-token", json={"inviteToken": token}, headers=_auth(PARTNER))
    assert joined.status_code == 201
    assert joined.json()["partnerName"] == "Alex Doe"
    assert joined.json()["partnership"]["status"] == "active"

    again = client.post("/api/partnerships/connect-by-token", json={"inviteToken": token}, headers=_auth(PARTNER))
    assert again.status_code == 200
    assert again.json()["message"] == "You are already connected with this partner"


def test_therapy_sessions(client, uow, partnership):
    created = client.post("/api/therapy-sessions", headers={**_auth(), **CSRF})
    assert created.status_code == 201
    session_id = created.json()["id"]

    listed = client.get("/api/therapy-sessions", headers=_auth(PARTNER)).json()
    assert [s["id"] for s in listed] == [session_id]

    reviewed = client.put(
        f"/api/therapy-sessions/{session_id}", json={"isReviewed": True, "userNotes": "Useful"}, headers=_auth(),
    )
    assert reviewed.json()["isReviewed"] is True

    foreign = make_session(make_partnership(7, 8).id)
    uow.therapy_sessions._sessions[foreign.id] = foreign
    assert client.get(f"/api/therapy-sessions/{foreign.id}", headers=_auth()).status_code == 403


def test_therapy_without_partnership(client):
    assert client.post("/api/therapy-sessions", headers={**_auth(), **CSRF}).status_code == 400


def test_ws_rejects_bad_token(client):
    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect("/ws?token=garbage"):
            pass
    assert exc_info.value.code == 4001


def test_ws_ping_and_errors(client):
    with client.websocket_connect(f"/ws?token={_make_token()}") as ws:
        ws.send_text('{"type": "ping"}')
        assert ws.receive_json() == {"type": "pong"}

        ws.send_text("{not json")
        assert ws.receive_json() == {"type": "error", "data": {"code": "invalid_payload"}}

        ws.send_text('{"type": "dance"}')
        assert ws.receive_json() == {"type": "error", "data": {"code": "unknown_type", "type": "dance"}}


def test_ws_client_broadcast_does_not_duplicate_response_event(client, uow, partnership):
    msg = make_message()
    uow.messages._messages[msg.id] = msg
    resp = client.post(f"/api/messages/{msg.id}/responses", json={"content": "I hear you"}, headers=_auth(PARTNER))
    assert resp.status_code == 201

    with client.websocket_connect(f"/ws?token={_make_token(PARTNER)}") as ws:
        ws.send_json({"type": "new_response", "data": resp.json()})
        ws.send_json({"type": "new_shared_message", "data": {"id": "forged"}})
        ws.send_text('{"type": "ping"}')
        assert ws.receive_json() == {"type": "pong"}

    events = uow.outbox.of_type(REALTIME_EVENT)
    assert [(e["recipient_id"], e["type"]) for e in events] == [(ME, "new_response")]
