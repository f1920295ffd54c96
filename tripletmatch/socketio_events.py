from flask import current_app, request
from flask_socketio import emit, join_room, leave_room
from typing import Callable, Optional

from tripletmatch import socketio
from tripletmatch.services.game import (
    GameInProgress,
    GameSession,
    InvalidGuess,
    RoomCodesExhausted,
    RoomFull,
    RoomRegistry,
    Unauthorized,
    normalize_room_id,
)

NAMESPACE = '/ws'


def _registry() -> RoomRegistry:
    return current_app.extensions['rooms']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _room_key(room_id: str) -> str:
    return f"room:{room_id}"


def _broadcast_state(session: GameSession) -> None:
    socketio.emit('gameState', session.snapshot(), to=_room_key(session.room_id), namespace=NAMESPACE)


def _room_id_from(data) -> str:
    if isinstance(data, dict):
        return normalize_room_id(data.get('roomId'))
    return normalize_room_id(data)


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_disconnect(*args):
    # The server drops the socket from its rooms on its own
    _leave_current_room(_get_sid(), leave_socket_room=False)


def handle_join_room(data):
    if not isinstance(data, dict):
        emit('error', {'message': 'invalid joinRoom payload'})
        return
    name = str(data.get('name') or '').strip()
    room_id = _room_id_from(data)
    if not name:
        emit('error', {'message': 'name is required'})
        return
    if not room_id:
        emit('error', {'message': 'roomId is required'})
        return
    registry = _registry()
    _join(lambda: registry.get_or_create(room_id), name)


def handle_create_room(data):
    if not isinstance(data, dict):
        emit('error', {'message': 'invalid createRoom payload'})
        return
    name = str(data.get('name') or '').strip()
    if not name:
        emit('error', {'message': 'name is required'})
        return
    registry = _registry()
    try:
        _join(registry.create, name)
    except RoomCodesExhausted as exc:
        current_app.logger.warning(f"[create-failed] rooms={len(registry)} {exc.message}")
        emit('error', {'message': exc.message})


def handle_leave_room(data=None):
    room_id = _leave_current_room(_get_sid())
    if room_id:
        emit('left', {'roomId': room_id})


def handle_start_game(data):
    sid = _get_sid()
    session = _registry().get(_room_id_from(data))
    if not session:
        return
    with session.lock:
        try:
            session.start(sid)
        except Unauthorized:
            current_app.logger.debug(f"[start-ignored] room={session.room_id} player={sid} not host")
            return
        current_app.logger.info(f"[start] room={session.room_id} deck={len(session.deck)}")
        _broadcast_state(session)


def handle_submit_guess(data):
    sid = _get_sid()
    if not isinstance(data, dict):
        current_app.logger.debug(f"[guess-ignored] player={sid} payload is not an object")
        return
    session = _registry().get(_room_id_from(data))
    if not session:
        return
    with session.lock:
        try:
            result = session.guess(sid, data.get('cardIds'))
        except InvalidGuess as exc:
            current_app.logger.debug(f"[guess-ignored] room={session.room_id} player={sid} {exc.message}")
            return
        if not result.matched:
            emit('wrongGuess', {'playerId': sid})
            return
        current_app.logger.info(
            f"[match] room={session.room_id} player={sid} cards={result.card_ids} deck={len(session.deck)}"
        )
        socketio.emit(
            'correctGuess',
            {'playerId': sid, 'cardIds': result.card_ids},
            to=_room_key(session.room_id),
            namespace=NAMESPACE,
        )
        _broadcast_state(session)


def _join(resolve: Callable[[], GameSession], name: str) -> None:
    """Seat the socket in the room ``resolve`` returns.

    The room may be evicted between lookup and taking its lock, so the
    session is re-resolved until the registry still holds it. The socket
    only gives up its previous room once the new join has succeeded.
    """
    registry = _registry()
    sid = _get_sid()
    previous = registry.room_of(sid)
    while True:
        session = resolve()
        with session.lock:
            if registry.get(session.room_id) is not session:
                current_app.logger.info(f"[join-retry] room={session.room_id} player={sid} room was evicted")
                continue
            try:
                player = session.join(sid, name)
            except (RoomFull, GameInProgress) as exc:
                current_app.logger.info(f"[join-rejected] room={session.room_id} player={sid} reason={exc.message}")
                emit('error', {'message': exc.message})
                return
            join_room(_room_key(session.room_id))
            registry.bind(sid, session.room_id)
            current_app.logger.info(f"[join] room={session.room_id} player={sid} host={player.is_host}")
            _broadcast_state(session)
        break
    if previous and previous != session.room_id:
        _leave(sid, previous)


def _leave_current_room(sid: str, leave_socket_room: bool = True) -> Optional[str]:
    """Remove the socket's player from its room, evicting the room once empty."""
    room_id = _registry().unbind(sid)
    if not room_id:
        return None
    _leave(sid, room_id, leave_socket_room)
    return room_id


def _leave(sid: str, room_id: str, leave_socket_room: bool = True) -> None:
    registry = _registry()
    session = registry.get(room_id)
    if not session:
        return
    with session.lock:
        session.leave(sid)
        if leave_socket_room:
            leave_room(_room_key(room_id))
        current_app.logger.info(f"[leave] room={room_id} player={sid} remaining={len(session.players)}")
        if session.is_empty():
            registry.evict(room_id)
        else:
            _broadcast_state(session)


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on namespace '/ws'."""
    socketio.on_event('connect', handle_connect, namespace=NAMESPACE)
    socketio.on_event('disconnect', handle_disconnect, namespace=NAMESPACE)
    socketio.on_event('joinRoom', handle_join_room, namespace=NAMESPACE)
    socketio.on_event('createRoom', handle_create_room, namespace=NAMESPACE)
    socketio.on_event('leaveRoom', handle_leave_room, namespace=NAMESPACE)
    socketio.on_event('startGame', handle_start_game, namespace=NAMESPACE)
    socketio.on_event('submitGuess', handle_submit_guess, namespace=NAMESPACE)
