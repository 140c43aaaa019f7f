"""Async REST client for the notification endpoints and the unread poller.

The poller keeps a snapshot of the caller's first page of unread
notifications. The snapshot items and the unread count always come from the
same ``GET /notifications`` response, so the badge and the list never
disagree.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable

import httpx

from juscrm.interfaces.api.schemas import NotificationListResponse, NotificationRead

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 30.0
DEFAULT_TIMEOUT = 10.0


class NotificationClient:
    """Thin async wrapper over the ``/notifications`` endpoints."""

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "NotificationClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = await self._client.request(method, path, **kwargs)
        response.raise_for_status()
        return response.json()

    async def list_notifications(
        self,
        *,
        page: int = 1,
        limit: int = 10,
        is_read: bool | None = None,
    ) -> NotificationListResponse:
        params: dict[str, Any] = {"page": page, "limit": limit}
        if is_read is not None:
            params["isRead"] = is_read
        payload = await self._request("GET", "/notifications", params=params)
        return NotificationListResponse.model_validate(payload)

    async def list_unread(self, *, page: int = 1, limit: int = 10) -> NotificationListResponse:
        return await self.list_notifications(page=page, limit=limit, is_read=False)

    async def unread_count(self) -> int:
        payload = await self._request("GET", "/notifications/unread-count")
        return int(payload["count"])

    async def mark_read(self, notification_id: int) -> NotificationRead:
        payload = await self._request("PATCH", f"/notifications/{notification_id}/read")
        return NotificationRead.model_validate(payload)

    async def mark_all_read(self) -> int:
        payload = await self._request("POST", "/notifications/read-all")
        return int(payload["updated"])


@dataclass(frozen=True)
class UnreadSnapshot:
    """Unread notifications shown to the user and the total unread count."""

    items: tuple[NotificationRead, ...] = ()
    unread_count: int = 0

    def without(self, notification_id: int) -> "UnreadSnapshot":
        remaining = tuple(item for item in self.items if item.id != notification_id)
        if len(remaining) == len(self.items):
            return self
        return replace(self, items=remaining, unread_count=max(0, self.unread_count - 1))


SnapshotCallback = Callable[[UnreadSnapshot], "Awaitable[None] | None"]


class UnreadNotificationPoller:
    """Periodically refresh the unread snapshot until stopped.

    ``callback`` receives every new snapshot and may be a plain function or a
    coroutine function. Fetch errors are logged and polling continues on the
    next tick.
    """

    def __init__(
        self,
        client: NotificationClient,
        callback: SnapshotCallback | None = None,
        *,
        interval: float = DEFAULT_POLL_INTERVAL,
        page_size: int = 10,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._client = client
        self._callback = callback
        self._interval = interval
        self._page_size = page_size
        self._snapshot = UnreadSnapshot()
        self._task: asyncio.Task[None] | None = None
        # Bumped on stop() and around local mutations; responses started under an
        # older generation are dropped.
        self._generation = 0

    @property
    def snapshot(self) -> UnreadSnapshot:
        return self._snapshot

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def __aenter__(self) -> "UnreadNotificationPoller":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.stop()

    async def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        logger.debug("Unread notification poller started")

    async def stop(self) -> None:
        self._generation += 1
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            # Only the poll task was meant to be cancelled, not the caller.
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
        logger.debug("Unread notification poller stopped")

    async def refresh(self) -> UnreadSnapshot:
        """Fetch the first unread page and publish it as the new snapshot."""

        generation = self._generation
        response = await self._client.list_unread(page=1, limit=self._page_size)
        if generation != self._generation:
            return self._snapshot
        await self._publish(
            UnreadSnapshot(items=tuple(response.data), unread_count=response.unread_count)
        )
        return self._snapshot

    async def mark_read(self, notification_id: int) -> NotificationRead:
        self._generation += 1
        await self._publish(self._snapshot.without(notification_id))
        try:
            return await self._client.mark_read(notification_id)
        finally:
            self._generation += 1
            await self._refresh_quietly()

    async def mark_all_read(self) -> int:
        self._generation += 1
        await self._publish(UnreadSnapshot())
        try:
            return await self._client.mark_all_read()
        finally:
            self._generation += 1
            await self._refresh_quietly()

    async def _run(self) -> None:
        while True:
            await self._refresh_quietly()
            await asyncio.sleep(self._interval)

    async def _refresh_quietly(self) -> None:
        try:
            await self.refresh()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning("Erro ao buscar notificações: %s", exc)

    async def _publish(self, snapshot: UnreadSnapshot) -> None:
        self._snapshot = snapshot
        if self._callback is None:
            return
        result = self._callback(snapshot)
        if inspect.isawaitable(result):
            await result


__all__ = [
    "NotificationClient",
    "UnreadNotificationPoller",
    "UnreadSnapshot",
]
