"""Tests of the websocket change notifications."""

from __future__ import annotations

from datetime import date

import pytest
from starlette.websockets import WebSocketDisconnect


def test_dashboard_stream_refreshes_after_mutations(client, register_user, categories) -> None:
    headers, token = register_user()
    today = date.today().isoformat()

    with client.websocket_connect(f"/dashboard/ws?token={token}") as websocket:
        initial = websocket.receive_json()
        assert initial["total_expenses"] == 0
        assert len(initial["daily_trend"]) == 7

        created = client.post(
            "/expenses/",
            json={"amount": "7.25", "description": "Coffee", "category_id": categories["Other"]["id"], "date": today},
            headers=headers,
        ).json()
        refreshed = websocket.receive_json()
        assert refreshed["total_expenses"] == 7.25
        assert refreshed["daily_trend"][-1] == {"date": today, "amount": 7.25}

        client.put("/budgets/", json={"limit_amount": 5}, headers=headers)
        assert websocket.receive_json()["budget"]["state"] == "over"

        client.delete(f"/expenses/{created['id']}", headers=headers)
        assert websocket.receive_json()["total_expenses"] == 0


def test_expense_change_events(client, register_user, categories) -> None:
    headers, token = register_user()
    other_headers, _ = register_user("mallory")
    travel = categories["Travel"]["id"]

    with client.websocket_connect(f"/expenses/ws?token={token}") as websocket:
        # Changes by another user are not delivered
        client.post(
            "/expenses/",
            json={"amount": 3, "description": "Bus", "category_id": travel, "date": "2024-03-01"},
            headers=other_headers,
        )
        created = client.post(
            "/expenses/",
            json={"amount": 4, "description": "Taxi", "category_id": travel, "date": "2024-03-01"},
            headers=headers,
        ).json()
        assert websocket.receive_json() == {"table": "expenses", "event": "INSERT", "id": created["id"]}

        client.delete(f"/expenses/{created['id']}", headers=headers)
        assert websocket.receive_json() == {"table": "expenses", "event": "DELETE", "id": created["id"]}


def test_stream_requires_valid_token(client) -> None:
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/dashboard/ws?token=invalid") as websocket:
            websocket.receive_json()
