"""Connection management helpers for notification websockets."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, DefaultDict, Protocol, Set


logger = logging.getLogger(__name__)


class JsonSocket(Protocol):
    """Subset of :class:`fastapi.WebSocket` the manager relies on."""

    async def send_json(self, data: Any) -> None: ...


class NotificationConnectionManager:
    """Track live sessions and the per-user group each one joined.

    Membership lives in process memory only; sessions on other instances are
    not visible here.
    """

    def __init__(self) -> None:
        self._sockets: dict[str, JsonSocket] = {}
        self._session_groups: dict[str, str] = {}
        self._groups: DefaultDict[str, Set[str]] = defaultdict(set)

    def register(self, session_id: str, websocket: JsonSocket) -> None:
        """Track an accepted connection that has not joined a group yet."""

        self._sockets[session_id] = websocket

    def join(self, session_id: str, user_id: str) -> None:
        """Subscribe ``session_id`` to the group of ``user_id``.

        ``user_id`` must come from the authenticated identity of the session.
        A session belongs to at most one group; joining again moves it.
        """

        if session_id not in self._sockets:
            msg = f"Session {session_id} is not connected"
            raise KeyError(msg)
        self._leave_group(session_id)
        self._session_groups[session_id] = user_id
        self._groups[user_id].add(session_id)
        logger.info("Session %s joined notification group %s", session_id, user_id)

    def disconnect(self, session_id: str) -> None:
        """Forget ``session_id`` and remove it from its group."""

        self._sockets.pop(session_id, None)
        self._leave_group(session_id)

    def group_of(self, session_id: str) -> str | None:
        return self._session_groups.get(session_id)

    def sessions_for(self, user_id: str) -> Set[str]:
        return set(self._groups.get(user_id, set()))

    async def send_to_user(self, user_id: str, message: dict[str, Any]) -> int:
        """Send ``message`` to every session in the group of ``user_id``.

        Returns the number of sessions that received it. Sessions whose send
        fails are disconnected.
        """

        delivered = 0
        for session_id in self.sessions_for(user_id):
            connection = self._sockets.get(session_id)
            if connection is None:
                continue
            try:
                await connection.send_json(message)
            except Exception:
                logger.warning(
                    "Dropping session %s after a failed realtime send", session_id,
                    exc_info=True,
                )
                self.disconnect(session_id)
            else:
                delivered += 1
        return delivered

    def _leave_group(self, session_id: str) -> None:
        user_id = self._session_groups.pop(session_id, None)
        if user_id is None:
            return
        members = self._groups.get(user_id)
        if members is None:
            return
        members.discard(session_id)
        if not members:
            self._groups.pop(user_id, None)


__all__ = ["JsonSocket", "NotificationConnectionManager"]
