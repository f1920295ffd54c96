class GameError(Exception):
    """Base class for rejected player actions."""

    message = 'Action rejected'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class RoomFull(GameError):
    message = 'Room full'


class GameInProgress(GameError):
    message = 'Game already in progress'


class InvalidGuess(GameError):
    """Malformed or stale card ids. Adapters drop these without telling anyone."""

    message = 'Invalid guess'


class Unauthorized(GameError):
    """A non-host tried to start the game. Dropped silently as well."""

    message = 'Only the host may start the game'


class RoomCodesExhausted(GameError):
    message = 'No free room codes, try again later'
