from __future__ import annotations

import logging
from typing import Any, Callable

from .constants import INBOUND_EVENT_TYPES, MAX_MESSAGE_LENGTH
from .errors import SessionError
from .events import (
    InboundEvent,
    JoinRoomEvent,
    LoadVideoEvent,
    PauseVideoEvent,
    PlayVideoEvent,
    SeekVideoEvent,
    SendMessageEvent,
    parse_inbound,
)
from .message_log import append_message
from .playback import load_video, pause_video, play_video, seek_video
from .session_registry import SessionRegistry
from .session_types import Delivery, DeliveryTarget, LeaveResult, OutboundEventType
from .utils import sanitize_room_id

logger = logging.getLogger(__name__)


class EventRouter:
    """Applies one inbound event to the registry and decides who hears about it.

    Handlers run to completion without awaiting anything, so two events can
    never interleave their mutations of the same room. The returned
    deliveries already carry their resolved recipient connection ids.

    | event        | success fan-out            | failure                |
    |--------------|----------------------------|------------------------|
    | join-room    | sender: room-state,        | error to sender        |
    |              | others: user-joined        |                        |
    | load-video   | room: video-loaded         | error to sender        |
    | play-video   | others: video-play         | dropped if no room     |
    | pause-video  | others: video-pause        | dropped if no room     |
    | seek-video   | others: video-seek         | dropped if no room     |
    | send-message | room: receive-message      | dropped, or error when |
    |              |                            | the text is too long   |
    | disconnect   | room: user-left            | no-op outside a room   |
    """

    def __init__(self, registry: SessionRegistry, *, max_message_length: int = MAX_MESSAGE_LENGTH) -> None:
        self.registry = registry
        self.max_message_length = max_message_length
        self._handlers: dict[str, Callable[[str, Any], list[Delivery]]] = {
            "join-room": self._on_join_room,
            "load-video": self._on_load_video,
            "play-video": self._on_play_video,
            "pause-video": self._on_pause_video,
            "seek-video": self._on_seek_video,
            "send-message": self._on_send_message,
        }
        missing = set(INBOUND_EVENT_TYPES) - set(self._handlers)
        if missing:
            raise RuntimeError(f"No handler for events: {sorted(missing)}")

    def dispatch_raw(self, connection_id: str, data: dict[str, Any]) -> list[Delivery]:
        try:
            event = parse_inbound(data)
        except SessionError as exc:
            logger.info("Rejected frame from %s: %s", connection_id, exc.message)
            return [self._error(connection_id, exc.message)]
        return self.dispatch(connection_id, event)

    def dispatch(self, connection_id: str, event: InboundEvent) -> list[Delivery]:
        handler = self._handlers[event.type]
        try:
            return handler(connection_id, event)
        except SessionError as exc:
            logger.info("Rejected %s from %s: %s", event.type, connection_id, exc.message)
            return [self._error(connection_id, exc.message)]

    def disconnect(self, connection_id: str) -> list[Delivery]:
        result = self.registry.leave(connection_id)
        if result is None:
            return []
        logger.info(
            "%s left room %s. Remaining users: %s",
            result.username,
            result.room_id,
            result.users,
        )
        return self._user_left(result)

    def _on_join_room(self, connection_id: str, event: JoinRoomEvent) -> list[Delivery]:
        result = self.registry.join(event.roomId, connection_id, event.username)
        logger.info("User %s joining room: %s", connection_id, result.room_id)

        deliveries: list[Delivery] = []
        if result.previous is not None:
            deliveries.extend(self._user_left(result.previous))
        deliveries.append(
            self._deliver("sender", result.room_id, connection_id, "room-state", result.snapshot)
        )
        deliveries.append(
            self._deliver(
                "others",
                result.room_id,
                connection_id,
                "user-joined",
                {"username": result.username, "users": result.users},
            )
        )
        logger.info("Users in room %s: %s", result.room_id, result.users)
        return deliveries

    def _on_load_video(self, connection_id: str, event: LoadVideoEvent) -> list[Delivery]:
        room_id = sanitize_room_id(event.roomId)
        logger.info("Loading video in room %s: %s", room_id, event.videoUrl)
        playback = load_video(self.registry, room_id, event.videoUrl)
        if playback is None:
            return []
        return [
            self._deliver("room", room_id, connection_id, "video-loaded", {"videoUrl": playback.video_url})
        ]

    def _on_play_video(self, connection_id: str, event: PlayVideoEvent) -> list[Delivery]:
        room_id = sanitize_room_id(event.roomId)
        logger.info("Play video in room %s at timestamp %s", room_id, event.timestamp)
        playback = play_video(self.registry, room_id, event.timestamp)
        if playback is None:
            return []
        return [
            self._deliver("others", room_id, connection_id, "video-play", {"timestamp": playback.current_time})
        ]

    def _on_pause_video(self, connection_id: str, event: PauseVideoEvent) -> list[Delivery]:
        room_id = sanitize_room_id(event.roomId)
        logger.info("Pause video in room %s at timestamp %s", room_id, event.timestamp)
        playback = pause_video(self.registry, room_id, event.timestamp)
        if playback is None:
            return []
        return [
            self._deliver("others", room_id, connection_id, "video-pause", {"timestamp": playback.current_time})
        ]

    def _on_seek_video(self, connection_id: str, event: SeekVideoEvent) -> list[Delivery]:
        room_id = sanitize_room_id(event.roomId)
        logger.info("Seek video in room %s to timestamp %s", room_id, event.timestamp)
        playback = seek_video(self.registry, room_id, event.timestamp)
        if playback is None:
            return []
        return [
            self._deliver("others", room_id, connection_id, "video-seek", {"timestamp": playback.current_time})
        ]

    def _on_send_message(self, connection_id: str, event: SendMessageEvent) -> list[Delivery]:
        room_id = sanitize_room_id(event.roomId)
        entry = append_message(
            self.registry,
            room_id,
            event.username,
            event.message,
            event.timestamp,
            fallback_username=self.registry.display_name(connection_id),
            max_length=self.max_message_length,
        )
        if entry is None:
            return []
        logger.info("Message from %s in room %s", entry.username, room_id)
        return [
            self._deliver("room", room_id, connection_id, "receive-message", entry.to_payload())
        ]

    def _user_left(self, result: LeaveResult) -> list[Delivery]:
        if result.room_destroyed:
            return []
        return [
            self._deliver(
                "room",
                result.room_id,
                None,
                "user-left",
                {"username": result.username, "users": result.users},
            )
        ]

    def _error(self, connection_id: str, message: str) -> Delivery:
        return Delivery(
            target="sender",
            event="error",
            payload={"message": message},
            recipients=(connection_id,),
        )

    def _deliver(
        self,
        target: DeliveryTarget,
        room_id: str,
        sender_id: str | None,
        event: OutboundEventType,
        payload: dict[str, Any],
    ) -> Delivery:
        if target == "sender":
            recipients: tuple[str, ...] = (sender_id,) if sender_id else ()
        elif target == "others":
            recipients = tuple(
                member_id for member_id in self.registry.member_ids(room_id) if member_id != sender_id
            )
        else:
            recipients = tuple(self.registry.member_ids(room_id))
        return Delivery(
            target=target,
            event=event,
            payload=payload,
            recipients=recipients,
            room_id=room_id,
        )
