"""HTTP tests of each service in isolation, the relay replaced by a recording transport."""

import pytest
from conftest import RecordingTransport
from fastapi.testclient import TestClient

from blog_services.api.events import _to_envelope
from blog_services.app import create_app

RELAY = "http://relay:4005"


@pytest.fixture
def posts_client(make_settings, relay_transport):
    app = create_app("posts", make_settings(event_bus_url=RELAY), transport=relay_transport)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def comments_client(make_settings, relay_transport):
    app = create_app("comments", make_settings(event_bus_url=RELAY), transport=relay_transport)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def participants_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def relay_client(make_settings, participants_transport):
    settings = make_settings(participants="http://posts:4000,http://comments:4001")
    app = create_app("relay", settings, transport=participants_transport)
    with TestClient(app) as client:
        yield client


@pytest.mark.parametrize("role", ["posts", "comments", "relay"])
def test_ping(make_settings, role):
    with TestClient(create_app(role, make_settings())) as client:
        response = client.get("/ping")

    assert response.status_code == 200
    assert response.json() == {"ping": "pong", "service": role}


class TestPostsApi:
    def test_create_post(self, posts_client, relay_transport):
        response = posts_client.post("/posts", json={"title": "Hello"})

        assert response.status_code == 201
        post = response.json()
        assert post["title"] == "Hello"
        assert len(post["id"]) == 8
        assert relay_transport.urls() == [f"{RELAY}/events"]
        assert relay_transport.bodies() == [{"type": "PostCreated", "data": post}]

    def test_list_posts(self, posts_client):
        first = posts_client.post("/posts", json={"title": "one"}).json()
        second = posts_client.post("/posts", json={"title": "two"}).json()

        response = posts_client.get("/posts")

        assert response.status_code == 200
        assert response.json() == {first["id"]: first, second["id"]: second}

    def test_list_posts_initially_empty(self, posts_client):
        assert posts_client.get("/posts").json() == {}

    def test_missing_body_or_title_is_accepted(self, posts_client):
        assert posts_client.post("/posts").json()["title"] is None
        assert posts_client.post("/posts", json={}).json()["title"] is None

    def test_relay_down_still_creates_post(self, make_settings, unreachable_transport):
        app = create_app("posts", make_settings(event_bus_url=RELAY), transport=unreachable_transport)
        with TestClient(app) as client:
            response = client.post("/posts", json={"title": "Kept"})
            posts = client.get("/posts").json()

        assert response.status_code == 201
        assert response.json()["id"] in posts
        assert unreachable_transport.attempts == 1

    def test_events_endpoint_accepts_anything(self, posts_client):
        for body in [{"type": "PostCreated", "data": {"id": "x"}}, {"type": "PostLiked"}, {}]:
            response = posts_client.post("/events", json=body)
            assert response.status_code == 200
            assert response.json() == {}

        assert posts_client.post("/events").json() == {}
        assert posts_client.get("/posts").json() == {}

    @pytest.mark.parametrize("body", [[{"type": "PostCreated"}], "PostCreated", 42, None])
    def test_events_endpoint_accepts_non_object_bodies(self, posts_client, body):
        response = posts_client.post("/events", json=body)

        assert response.status_code == 200
        assert response.json() == {}

    def test_comment_routes_are_not_mounted(self, posts_client):
        assert posts_client.get("/posts/abc/comments").status_code == 404


class TestCommentsApi:
    def test_create_comment(self, comments_client, relay_transport):
        response = comments_client.post("/posts/p1/comments", json={"content": "Nice"})

        assert response.status_code == 201
        comments = response.json()
        assert len(comments) == 1
        assert comments[0]["content"] == "Nice"
        assert comments[0]["status"] == "pending"
        assert relay_transport.bodies() == [{"type": "CommentCreated", "data": {**comments[0], "postId": "p1"}}]

    def test_create_returns_every_comment_of_the_post(self, comments_client):
        comments_client.post("/posts/p1/comments", json={"content": "First"})
        comments_client.post("/posts/p2/comments", json={"content": "Elsewhere"})
        response = comments_client.post("/posts/p1/comments", json={"content": "Second"})

        assert [c["content"] for c in response.json()] == ["First", "Second"]

    def test_list_comments(self, comments_client):
        created = comments_client.post("/posts/p1/comments", json={"content": "Nice"}).json()

        assert comments_client.get("/posts/p1/comments").json() == created
        assert comments_client.get("/posts/unknown/comments").json() == []

    def test_empty_content_is_accepted(self, comments_client):
        response = comments_client.post("/posts/p1/comments", json={"content": ""})

        assert response.status_code == 201
        assert response.json()[0]["content"] == ""

    def test_moderation_event_updates_status(self, comments_client, relay_transport):
        comment = comments_client.post("/posts/p1/comments", json={"content": "Nice"}).json()[0]

        response = comments_client.post(
            "/events", json={"type": "CommentModerated", "data": {"postId": "p1", "id": comment["id"], "status": "rejected"}}
        )

        assert response.json() == {}
        assert comments_client.get("/posts/p1/comments").json()[0]["status"] == "rejected"
        assert relay_transport.bodies()[-1]["type"] == "CommentUpdated"

    def test_list_body_is_ignored(self, comments_client):
        comment = comments_client.post("/posts/p1/comments", json={"content": "Nice"}).json()[0]

        response = comments_client.post(
            "/events", json=[{"type": "CommentModerated", "data": {"postId": "p1", "id": comment["id"], "status": "approved"}}]
        )

        assert response.status_code == 200
        assert response.json() == {}
        assert comments_client.get("/posts/p1/comments").json()[0]["status"] == "pending"

    def test_moderation_of_unknown_comment_is_ignored(self, comments_client):
        comments_client.post("/posts/p1/comments", json={"content": "Nice"})

        response = comments_client.post(
            "/events", json={"type": "CommentModerated", "data": {"postId": "p1", "id": "missing", "status": "approved"}}
        )

        assert response.status_code == 200
        assert comments_client.get("/posts/p1/comments").json()[0]["status"] == "pending"

    def test_enforced_post_ids(self, make_settings, relay_transport):
        settings = make_settings(event_bus_url=RELAY, enforce_post_exists=True)
        with TestClient(create_app("comments", settings, transport=relay_transport)) as client:
            rejected = client.post("/posts/p1/comments", json={"content": "too early"})
            client.post("/events", json={"type": "PostCreated", "data": {"id": "p1", "title": "t"}})
            accepted = client.post("/posts/p1/comments", json={"content": "on time"})

        assert rejected.status_code == 404
        assert rejected.json() == {"detail": "Post not found: p1"}
        assert accepted.status_code == 201


class TestRelayApi:
    def test_publish_acknowledges_and_broadcasts(self, make_settings, participants_transport):
        event = {"type": "PostCreated", "data": {"id": "p1", "title": "Hello"}}
        settings = make_settings(participants="http://posts:4000,http://comments:4001")

        with TestClient(create_app("relay", settings, transport=participants_transport)) as client:
            response = client.post("/events", json=event)

        # Shutdown waits for deliveries still in flight
        assert response.status_code == 200
        assert response.json() == {"status": "OK"}
        assert sorted(participants_transport.urls()) == ["http://comments:4001/events", "http://posts:4000/events"]
        assert participants_transport.bodies() == [event, event]

    def test_history(self, relay_client):
        relay_client.post("/events", json={"type": "PostCreated", "data": {"id": "p1"}})
        relay_client.post("/events", json={"type": "Whatever", "data": {"free": "form"}})

        assert relay_client.get("/events").json() == [
            {"type": "PostCreated", "data": {"id": "p1"}},
            {"type": "Whatever", "data": {"free": "form"}},
        ]

    def test_history_initially_empty(self, relay_client):
        assert relay_client.get("/events").json() == []

    def test_unreachable_participants_still_acknowledged(self, make_settings, unreachable_transport):
        with TestClient(create_app("relay", make_settings(), transport=unreachable_transport)) as client:
            response = client.post("/events", json={"type": "PostCreated", "data": {}})
            history = client.get("/events").json()

        assert response.json() == {"status": "OK"}
        assert history == [{"type": "PostCreated", "data": {}}]

    def test_event_without_type_is_rejected(self, relay_client, participants_transport):
        response = relay_client.post("/events", json={"data": {"id": "p1"}})

        assert response.status_code == 422
        assert relay_client.get("/events").json() == []
        assert participants_transport.requests == []


@pytest.mark.parametrize(
    "body,expected_type",
    [({"type": None, "data": {"id": "x"}}, ""), ({"data": {}}, ""), ([{"type": "PostCreated"}], ""), ({"type": "PostCreated"}, "PostCreated")],
)
def test_inbound_body_to_envelope(body, expected_type):
    assert _to_envelope(body).type == expected_type
