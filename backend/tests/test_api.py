from __future__ import annotations

import pytest
from fastapi.testclient import TestClient


def test_health_on_empty_server(client: TestClient) -> None:
    for path in ("/health", "/api/health"):
        response = client.get(path)
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "activeRooms": 0, "totalUsers": 0}


def test_unknown_room_snapshot_is_404(client: TestClient) -> None:
    response = client.get("/api/rooms/missing")

    assert response.status_code == 404
    assert response.json()["detail"] == "Room not found"


def test_websocket_session(client: TestClient) -> None:
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "join-room", "roomId": "movie-night", "username": "alice"})
        assert ws.receive_json() == {
            "type": "room-state",
            "videoUrl": "",
            "isPlaying": False,
            "currentTime": 0,
            "messages": [],
            "users": ["alice"],
        }

        ws.send_json({"type": "load-video", "roomId": "movie-night", "videoUrl": "ftp://nope"})
        assert ws.receive_json() == {"type": "error", "message": "Invalid Youtube URL"}

        ws.send_json(
            {"type": "load-video", "roomId": "movie-night", "videoUrl": "https://youtu.be/abc123"}
        )
        assert ws.receive_json() == {"type": "video-loaded", "videoUrl": "https://youtu.be/abc123"}

        ws.send_json(
            {
                "type": "send-message",
                "roomId": "movie-night",
                "username": "alice",
                "message": "popcorn ready",
                "timestamp": 1700000000000,
            }
        )
        assert ws.receive_json() == {
            "type": "receive-message",
            "username": "alice",
            "message": "popcorn ready",
            "timestamp": 1700000000000,
        }

        ws.send_json({"type": "play-video", "roomId": "movie-night", "timestamp": 3})
        ws.send_json({"type": "ping"})
        assert ws.receive_json()["type"] == "pong"

        assert client.get("/health").json() == {"status": "ok", "activeRooms": 1, "totalUsers": 1}

        snapshot = client.get("/api/rooms/movie-night").json()
        assert snapshot["roomId"] == "movie-night"
        assert snapshot["videoUrl"] == "https://youtu.be/abc123"
        assert snapshot["isPlaying"] is True
        assert snapshot["currentTime"] == 3
        assert snapshot["users"] == ["alice"]

        stats = client.get("/api/ws-stats").json()
        assert stats["activeRooms"] == 1
        assert stats["rooms"] == [{"roomId": "movie-night", "users": 1, "isPlaying": True}]


@pytest.mark.parametrize("path", ["/ws", "/api/ws"])
def test_socket_paths_join_rooms(client: TestClient, path: str) -> None:
    with client.websocket_connect(path) as ws:
        ws.send_json({"type": "join-room", "roomId": "lobby", "username": "carol"})
        assert ws.receive_json()["users"] == ["carol"]

        ws.send_json({"type": "ping"})
        assert ws.receive_json()["type"] == "pong"


def test_room_snapshot_reports_the_stripped_room_id(client: TestClient) -> None:
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "join-room", "roomId": "movie-night", "username": "alice"})
        ws.receive_json()

        response = client.get("/api/rooms/%20movie-night%20")

        assert response.status_code == 200
        assert response.json()["roomId"] == "movie-night"
