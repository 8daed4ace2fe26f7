import random
import threading
from typing import Dict, List, Optional

from trivia.errors import AlreadyInRoom, RoomNotFound, RoundInProgress
from trivia.models import Participant, Phase, Room

# No I, L or O: they read like 1 and 0
ROOM_CODE_ALPHABET = 'ABCDEFGHJKMNPQRSTUVWXYZ'
ROOM_CODE_LENGTH = 4


def normalize_code(code) -> str:
    return str(code or '').strip().upper()


def generate_room_code(rng=random, length=ROOM_CODE_LENGTH) -> str:
    return ''.join(rng.choice(ROOM_CODE_ALPHABET) for _ in range(length))


class RoomRegistry:
    """In-memory code -> Room map.

    The map lock only guards the dict itself. Mutating a room's
    participants must happen under that room's own lock, which the
    round engine takes before calling in here.
    """

    def __init__(self, rng=None, default_name: str = 'Player', max_name_length: int = 32):
        self._rooms: Dict[str, Room] = {}
        self._lock = threading.Lock()
        self._rng = rng or random
        self.default_name = default_name
        self.max_name_length = max_name_length

    def create_room(self, host_id: str) -> Room:
        with self._lock:
            code = generate_room_code(self._rng)
            while code in self._rooms:
                code = generate_room_code(self._rng)
            room = Room(code=code, host_id=host_id)
            self._rooms[code] = room
        return room

    def lookup_room(self, code) -> Optional[Room]:
        with self._lock:
            return self._rooms.get(normalize_code(code))

    def destroy_room(self, code) -> None:
        with self._lock:
            self._rooms.pop(normalize_code(code), None)

    def rooms(self) -> List[Room]:
        with self._lock:
            return list(self._rooms.values())

    def clean_name(self, name) -> str:
        cleaned = str(name or '').strip()[:self.max_name_length].strip()
        return cleaned or self.default_name

    def add_participant(self, code, identity: str, name=None) -> Participant:
        room = self.lookup_room(code)
        if room is None or room.closed:
            raise RoomNotFound()
        # Joining twice keeps the existing player and score
        if identity in room.participants:
            return room.participants[identity]
        other = self.room_of(identity)
        if other is not None and other is not room:
            raise AlreadyInRoom()
        if room.phase != Phase.LOBBY:
            raise RoundInProgress()
        participant = Participant(id=identity, name=self.clean_name(name))
        room.participants[identity] = participant
        return participant

    def room_of(self, identity: str) -> Optional[Room]:
        """The live room this connection plays in, if any."""
        for room in self.rooms():
            if not room.closed and identity in room.participants:
                return room
        return None

    def remove_participant(self, code, identity: str) -> Optional[Participant]:
        room = self.lookup_room(code)
        if room is None:
            return None
        room.answers.pop(identity, None)
        return room.participants.pop(identity, None)

    def __len__(self):
        with self._lock:
            return len(self._rooms)
