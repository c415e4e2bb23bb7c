"""Websocket endpoints pushing change notifications and fresh dashboards."""

import asyncio
import logging
from datetime import date
from typing import Awaitable, Callable, Optional

from fastapi import APIRouter, Depends, Query, WebSocket, status
from fastapi.encoders import jsonable_encoder

from components.core.database import DatabaseManager
from components.core.events import ChangeEvent, Subscription, change_feed
from components.core.init_db import get_db_manager
from components.dashboard.repository import DashboardRepository
from restapi.endpoints.auth import get_user_from_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


async def _authenticate(websocket: WebSocket, manager: DatabaseManager, token: Optional[str]):
    user = None
    if token:
        async with manager.get_db() as session:
            user = await get_user_from_token(session, token)
    if user is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
    return user


async def _relay(
    websocket: WebSocket,
    subscription: Subscription,
    on_change: Callable[[ChangeEvent], Awaitable[None]],
) -> None:
    """Call ``on_change`` for every event until the client disconnects."""
    while True:
        receive = asyncio.ensure_future(websocket.receive())
        change = asyncio.ensure_future(subscription.get())
        done, pending = await asyncio.wait({receive, change}, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()

        if receive in done and receive.result()["type"] == "websocket.disconnect":
            return
        if change in done:
            await on_change(change.result())


@router.websocket("/expenses/ws")
async def expense_changes(
    websocket: WebSocket,
    token: Optional[str] = Query(None),
    manager: DatabaseManager = Depends(get_db_manager),
):
    """Stream INSERT/UPDATE/DELETE notifications of the user's expenses."""
    user = await _authenticate(websocket, manager, token)
    if user is None:
        return

    async def send_event(event: ChangeEvent) -> None:
        await websocket.send_json({"table": event.table, "event": event.event, "id": event.record_id})

    with change_feed.subscribe(user.id, table="expenses") as subscription:
        await websocket.accept()
        await _relay(websocket, subscription, send_event)


@router.websocket("/dashboard/ws")
async def dashboard_updates(
    websocket: WebSocket,
    token: Optional[str] = Query(None),
    manager: DatabaseManager = Depends(get_db_manager),
):
    """
    Send a dashboard snapshot on connect and a new one after every change.

    Each change triggers a full re-read; nothing is patched incrementally.
    """
    user = await _authenticate(websocket, manager, token)
    if user is None:
        return
    await websocket.accept()

    async def send_snapshot(event: Optional[ChangeEvent] = None) -> None:
        async with manager.get_db() as session:
            dashboard = await DashboardRepository(session, user).get_dashboard(date.today())
        await websocket.send_json(jsonable_encoder(dashboard))

    with change_feed.subscribe(user.id) as subscription:
        await send_snapshot()
        await _relay(websocket, subscription, send_snapshot)
    logger.debug("Dashboard stream of user %s closed", user.id)
