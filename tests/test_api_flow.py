from __future__ import annotations

from dataclasses import replace

from fastapi import FastAPI
from fastapi.testclient import TestClient

from app import create_app
from backend.utils.config import get_settings


def _build_test_app(tmp_path, filename: str = "api_flow.json") -> FastAPI:
    settings = replace(
        get_settings(),
        data_file_path=tmp_path / filename,
        seed_demo_rooms=False,
    )
    return create_app(settings)


def _add_room(client: TestClient, room_number: str, **overrides):
    payload = {
        "hostelType": "Boys",
        "hostelNumber": 2,
        "seater": 3,
        "roomNumber": room_number,
        "price": 2000,
    }
    payload.update(overrides)
    return client.post("/add-room", json=payload)


def test_index_lists_endpoints(tmp_path):
    with TestClient(_build_test_app(tmp_path)) as client:
        response = client.get("/")
    assert response.status_code == 200
    assert "GET  /rooms" in response.json()["endpoints"]


def test_startup_creates_data_file(tmp_path):
    app = _build_test_app(tmp_path, "startup.json")
    with TestClient(app):
        pass
    assert (tmp_path / "startup.json").exists()


def test_booking_end_to_end_flow(tmp_path):
    with TestClient(_build_test_app(tmp_path)) as client:
        created = _add_room(client, "204")
        assert created.status_code == 201
        room = created.json()
        assert room == {
            "id": 1,
            "hostelType": "Boys",
            "hostelNumber": 2,
            "seater": 3,
            "roomNumber": "204",
            "price": 2000,
            "isAvailable": True,
        }

        booked = client.post("/book/1", json={"userName": "Alice"})
        assert booked.status_code == 201
        booking = booked.json()["booking"]
        assert booking["userName"] == "Alice"
        assert booking["price"] == 2000
        assert "queuePosition" not in booked.json()

        queued = client.post("/book/1", json={"userName": "Bob"})
        assert queued.status_code == 200
        assert queued.json()["queuePosition"] == 1
        assert "booking" not in queued.json()

        queue = client.get("/waiting-queue").json()
        assert [(entry["roomId"], entry["userName"]) for entry in queue] == [(1, "Bob")]

        cancelled = client.delete(f"/cancel/{booking['bookingId']}")
        assert cancelled.status_code == 200
        body = cancelled.json()
        assert body["message"] == "Booking cancelled"
        assert body["cancelled"]["bookingId"] == booking["bookingId"]
        assert body["assignedFromQueue"]["userName"] == "Bob"

        rooms = client.get("/rooms").json()
        assert rooms[0]["isAvailable"] is False

        active = client.get("/bookings").json()
        assert [item["userName"] for item in active] == ["Bob"]

        history = client.get("/history").json()
        assert [item["userName"] for item in history] == ["Bob", "Alice"]

        summary = client.get("/history/summary").json()
        assert summary == {
            "totalBookings": 2,
            "totalSpent": 4000,
            "mostBookedRoom": "Boys 2/204",
        }


def test_cancel_without_queue_reports_null_assignment(tmp_path):
    with TestClient(_build_test_app(tmp_path)) as client:
        _add_room(client, "101")
        booking = client.post("/book/1").json()["booking"]
        assert booking["userName"] == "Guest"

        cancelled = client.delete(f"/cancel/{booking['bookingId']}")
        assert cancelled.status_code == 200
        assert cancelled.json()["assignedFromQueue"] is None
        assert client.get("/rooms").json()[0]["isAvailable"] is True


def test_add_room_validation_and_conflicts(tmp_path):
    with TestClient(_build_test_app(tmp_path)) as client:
        missing = client.post("/add-room", json={"hostelType": "Boys"})
        assert missing.status_code == 400
        assert "required" in missing.json()["error"]

        negative = _add_room(client, "1", price=-5)
        assert negative.status_code == 400
        assert negative.json() == {"error": "Price must be a non-negative number"}

        no_beds = _add_room(client, "1", seater=0)
        assert no_beds.status_code == 400

        bad_type = _add_room(client, "1", hostelNumber="two")
        assert bad_type.status_code == 400
        assert "error" in bad_type.json()

        assert _add_room(client, "1").status_code == 201
        duplicate = _add_room(client, "1", price=99, seater=1)
        assert duplicate.status_code == 409
        assert "already exists" in duplicate.json()["error"]

        numeric_room = _add_room(client, 7)
        assert numeric_room.status_code == 201
        assert numeric_room.json()["roomNumber"] == "7"


def test_sorted_and_filtered_rooms(tmp_path):
    with TestClient(_build_test_app(tmp_path)) as client:
        _add_room(client, "1", price=3000)
        _add_room(client, "2", price=1000, seater=4)
        _add_room(client, "3", price=1500, hostelType="Girls")

        sorted_rooms = client.get("/rooms/sorted").json()
        assert [room["roomNumber"] for room in sorted_rooms] == ["2", "3", "1"]

        filtered = client.get(
            "/rooms/filter",
            params={"hostelType": "Boys", "hostelNumber": 2, "seater": 3},
        )
        assert filtered.status_code == 200
        assert [room["roomNumber"] for room in filtered.json()] == ["1"]

        missing = client.get("/rooms/filter", params={"hostelType": "Boys"})
        assert missing.status_code == 400
        assert missing.json() == {
            "error": "Query params required: hostelType, hostelNumber, seater"
        }


def test_book_and_cancel_error_statuses(tmp_path):
    with TestClient(_build_test_app(tmp_path)) as client:
        assert client.post("/book/abc").json() == {"error": "Invalid room ID"}
        assert client.post("/book/abc").status_code == 400

        not_found = client.post("/book/9", json={"userName": "Alice"})
        assert not_found.status_code == 404
        assert not_found.json() == {"error": "Room not found"}

        assert client.delete("/cancel/xyz").status_code == 400
        assert client.delete("/cancel/0").status_code == 400

        missing = client.delete("/cancel/123")
        assert missing.status_code == 404
        assert missing.json() == {"error": "Booking not found"}


def test_remove_room_statuses(tmp_path):
    with TestClient(_build_test_app(tmp_path)) as client:
        _add_room(client, "1")
        _add_room(client, "2")
        client.post("/book/1", json={"userName": "Alice"})
        client.post("/book/1", json={"userName": "Bob"})

        assert client.delete("/rooms/abc").status_code == 400
        assert client.delete("/rooms/42").status_code == 404

        booked = client.delete("/rooms/1")
        assert booked.status_code == 409
        assert len(client.get("/rooms").json()) == 2

        removed = client.delete("/rooms/2")
        assert removed.status_code == 200
        assert removed.json()["message"] == "Room removed"
        assert removed.json()["room"]["roomNumber"] == "2"
        assert [room["id"] for room in client.get("/rooms").json()] == [1]


def test_unknown_routes_use_json_envelope(tmp_path):
    with TestClient(_build_test_app(tmp_path)) as client:
        missing = client.get("/nope")
        assert missing.status_code == 404
        assert missing.json() == {"error": "Endpoint not found"}

        wrong_method = client.get("/cancel/1")
        assert wrong_method.status_code == 404
        assert wrong_method.json() == {"error": "Endpoint not found"}


def test_unhandled_errors_return_internal_server_error(tmp_path, monkeypatch):
    app = _build_test_app(tmp_path)

    def explode():
        raise RuntimeError("boom")

    monkeypatch.setattr(app.state.room_service, "list_rooms", explode)
    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/rooms")
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_storage_failure_maps_to_500(tmp_path, monkeypatch):
    app = _build_test_app(tmp_path)
    with TestClient(app) as client:
        _add_room(client, "1")
        monkeypatch.setattr(app.state.repository, "save", lambda state: False)

        response = client.post("/book/1", json={"userName": "Alice"})
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to save booking"}

        monkeypatch.undo()
        assert client.get("/bookings").json() == []


def test_cancel_storage_failure_maps_to_500_and_keeps_queue(tmp_path, monkeypatch):
    app = _build_test_app(tmp_path)
    with TestClient(app) as client:
        _add_room(client, "1")
        booking = client.post("/book/1", json={"userName": "Alice"}).json()["booking"]
        client.post("/book/1", json={"userName": "Bob"})
        monkeypatch.setattr(app.state.repository, "save", lambda state: False)

        response = client.delete(f"/cancel/{booking['bookingId']}")
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to update data"}

        monkeypatch.undo()
        assert [item["userName"] for item in client.get("/bookings").json()] == ["Alice"]
        assert [item["userName"] for item in client.get("/waiting-queue").json()] == ["Bob"]
        assert client.get("/rooms").json()[0]["isAvailable"] is False


def test_add_room_rejects_overflowing_price(tmp_path):
    raw = (
        '{"hostelType": "Boys", "hostelNumber": 1, "seater": 2,'
        ' "roomNumber": "1", "price": 1e400}'
    )
    with TestClient(_build_test_app(tmp_path, "overflow.json")) as client:
        response = client.post(
            "/add-room",
            content=raw,
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Price must be a non-negative number"}
        assert client.get("/rooms").json() == []
    assert "Infinity" not in (tmp_path / "overflow.json").read_text(encoding="utf-8")


def test_path_ids_must_be_plain_ascii_integers(tmp_path):
    with TestClient(_build_test_app(tmp_path)) as client:
        for index in range(1, 11):
            _add_room(client, str(index))

        assert client.post("/book/1_0").json() == {"error": "Invalid room ID"}
        assert client.post("/book/١٠").status_code == 400
        assert client.delete("/rooms/1_0").status_code == 400
        assert client.delete("/cancel/1_000").json() == {"error": "Invalid booking ID"}
        assert all(room["isAvailable"] for room in client.get("/rooms").json())
