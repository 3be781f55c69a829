class GameError(Exception):
    """Base class for failures acknowledged back to the sending client."""
    message = None

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message or self.__class__.__name__)

    def to_ack(self):
        ack = {'ok': False}
        if self.message:
            ack['error'] = self.message
        return ack


class GameNotFound(GameError):
    message = 'Game not found'


class GameAlreadyEnded(GameError):
    message = 'Game already ended'


class NoPlayers(GameError):
    message = 'No players'


class NameRequired(GameError):
    message = 'Name required'


class NameTaken(GameError):
    message = 'Name already taken'


class NumberNotDrawn(GameError):
    message = 'Number not drawn'


class Rejected(GameError):
    """Guard failure on mark/claim, acknowledged without any detail."""


class InvalidCommand(GameError):
    message = 'Invalid request'
