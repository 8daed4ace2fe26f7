class RoomError(Exception):
    """Base class for errors reported back to the requesting connection."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class RoomNotFound(RoomError):
    def __init__(self):
        super().__init__('Room not found.')


class RoundInProgress(RoomError):
    def __init__(self):
        super().__init__('Round already started. Wait for the next one.')


class AlreadyInRoom(RoomError):
    def __init__(self):
        super().__init__('You are already in another room.')
