from __future__ import annotations

import logging
from typing import Any

from .constants import ROOM_ID_REQUIRED_MESSAGE, USERNAME_REQUIRED_MESSAGE
from .errors import InvalidJoinError
from .session_types import JoinResult, LeaveResult, RoomLifecycle, RoomSession
from .snapshot import build_room_state
from .utils import sanitize_room_id, sanitize_username

logger = logging.getLogger(__name__)


class SessionRegistry:
    """In-memory rooms and their membership.

    A room is present in ``rooms`` exactly while it has at least one member:
    the first join creates it and the last leave destroys it, together with
    its playback state and message log.
    """

    def __init__(self) -> None:
        self.rooms: dict[str, RoomSession] = {}
        self._connection_rooms: dict[str, str] = {}

    @property
    def active_rooms_count(self) -> int:
        return len(self.rooms)

    @property
    def total_users(self) -> int:
        return sum(len(room.members) for room in self.rooms.values())

    def stats(self) -> dict[str, int]:
        return {
            "activeRooms": self.active_rooms_count,
            "totalUsers": self.total_users,
        }

    def get_room(self, room_id: str) -> RoomSession | None:
        return self.rooms.get(sanitize_room_id(room_id))

    def lifecycle(self, room_id: str) -> RoomLifecycle:
        return "active" if self.get_room(room_id) is not None else "absent"

    def room_of(self, connection_id: str) -> str | None:
        return self._connection_rooms.get(connection_id)

    def users(self, room_id: str) -> list[str]:
        room = self.get_room(room_id)
        return room.users if room is not None else []

    def member_ids(self, room_id: str) -> list[str]:
        room = self.get_room(room_id)
        return list(room.members) if room is not None else []

    def display_name(self, connection_id: str) -> str | None:
        room_id = self._connection_rooms.get(connection_id)
        if room_id is None:
            return None
        room = self.rooms.get(room_id)
        if room is None:
            return None
        return room.members.get(connection_id)

    def snapshot(self, room_id: str) -> dict[str, Any] | None:
        room = self.get_room(room_id)
        if room is None:
            return None
        return build_room_state(room)

    def join(self, room_id: str, connection_id: str, username: str) -> JoinResult:
        room_id_value = sanitize_room_id(room_id)
        username_value = sanitize_username(username)
        if not room_id_value:
            raise InvalidJoinError(ROOM_ID_REQUIRED_MESSAGE)
        if not username_value:
            raise InvalidJoinError(USERNAME_REQUIRED_MESSAGE)

        previous: LeaveResult | None = None
        current_room_id = self._connection_rooms.get(connection_id)
        if current_room_id is not None and current_room_id != room_id_value:
            previous = self.leave(connection_id)

        room = self.rooms.get(room_id_value)
        room_created = room is None
        if room is None:
            room = self._create_room(room_id_value)

        # Same connection joining again keeps its slot and only renames.
        room.members[connection_id] = username_value
        self._connection_rooms[connection_id] = room_id_value

        return JoinResult(
            room_id=room_id_value,
            username=username_value,
            snapshot=build_room_state(room),
            users=room.users,
            room_created=room_created,
            previous=previous,
        )

    def leave(self, connection_id: str) -> LeaveResult | None:
        room_id = self._connection_rooms.pop(connection_id, None)
        if room_id is None:
            return None

        room = self.rooms.get(room_id)
        if room is None:
            return None

        username = room.members.pop(connection_id, "")
        users = room.users
        room_destroyed = not room.members
        if room_destroyed:
            self._destroy_room(room_id)

        return LeaveResult(
            room_id=room_id,
            username=username,
            users=users,
            room_destroyed=room_destroyed,
        )

    def clear(self) -> None:
        self.rooms.clear()
        self._connection_rooms.clear()

    def _create_room(self, room_id: str) -> RoomSession:
        room = RoomSession(room_id=room_id)
        self.rooms[room_id] = room
        logger.info("Room %s created", room_id)
        return room

    def _destroy_room(self, room_id: str) -> None:
        self.rooms.pop(room_id, None)
        logger.info("Room %s is empty and has been cleaned up", room_id)
