import logging
from typing import Callable, List, Optional

from trivia.errors import RoomNotFound
from trivia.models import Participant, Phase, Question, Room
from .questions import sample_question
from .registry import RoomRegistry
from .scoring import score_current_round, scoreboard


HOST_LEFT_MESSAGE = 'Host left. Room closed.'


def parse_choice(value) -> Optional[int]:
    """Return the answer as an int, or None if it isn't one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


class RoundEngine:
    """Per-room round state machine: lobby -> question -> result -> lobby.

    Every operation that touches a room runs under ``room.lock`` and emits
    its broadcasts before releasing it, so clients of one room observe a
    single total order. Timers carry the room's ``round_no`` and re-check
    phase and generation when they fire.
    """

    def __init__(
        self,
        registry: RoomRegistry,
        broadcaster,
        scheduler,
        logger: logging.Logger = None,
        round_duration: int = 15,
        result_duration: int = 5,
        question_provider: Callable[[], Question] = None,
    ):
        self.registry = registry
        self.broadcaster = broadcaster
        self.scheduler = scheduler
        self.logger = logger or logging.getLogger(__name__)
        self.round_duration = round_duration
        self.result_duration = result_duration
        self.question_provider = question_provider or sample_question

    # ---- Lobby ----

    def create_room(self, host_id: str) -> Room:
        room = self.registry.create_room(host_id)
        with room.lock:
            self.broadcaster.attach(room.code, host_id)
            self.broadcaster.to_one(host_id, 'room_created', {'code': room.code})
        self.logger.info(f"[room-created] room={room.code} host={host_id}")
        return room

    def join_room(self, code, identity: str, name=None) -> Participant:
        room = self.registry.lookup_room(code)
        if room is None:
            raise RoomNotFound()
        with room.lock:
            if room.closed:
                raise RoomNotFound()
            tag = 'rejoin' if identity in room.participants else 'join'
            participant = self.registry.add_participant(room.code, identity, name)
            self.broadcaster.attach(room.code, identity)
            self.broadcaster.to_one(identity, 'joined_room', {'code': room.code, 'name': participant.name})
            self._broadcast_lobby(room)
        self.logger.info(f"[{tag}] room={room.code} player={participant.name!r} sid={identity}")
        return participant

    def _broadcast_lobby(self, room: Room) -> None:
        self.broadcaster.to_room(room.code, 'lobby_state', {'players': room.player_names()})

    # ---- Rounds ----

    def start_round(self, code, requester_id: str) -> bool:
        room = self.registry.lookup_room(code)
        if room is None:
            return False
        with room.lock:
            if room.closed or room.host_id != requester_id or room.phase != Phase.LOBBY:
                self.logger.info(
                    f"[start-ignored] room={room.code} sid={requester_id} phase={room.phase.value}"
                )
                return False
            room.phase = Phase.QUESTION
            room.current_question = self.question_provider()
            room.answers.clear()
            room.round_no += 1
            round_no = room.round_no
            payload = room.current_question.to_public_dict()
            payload['duration'] = self.round_duration
            self.broadcaster.to_room(room.code, 'new_question', payload)
            self.logger.info(f"[round-start] room={room.code} round={round_no}")
            self.scheduler.schedule(
                self.round_duration,
                f"room={room.code} stage=question round={round_no}",
                self.finalize_round, room.code, round_no,
            )
        return True

    def submit_answer(self, code, identity: str, choice) -> bool:
        room = self.registry.lookup_room(code)
        if room is None:
            return False
        index = parse_choice(choice)
        with room.lock:
            if room.closed or room.phase != Phase.QUESTION or identity not in room.participants:
                return False
            if index is None or identity in room.answers:
                self.logger.info(f"[answer-ignored] room={room.code} sid={identity} choice={choice!r}")
                return False
            room.answers[identity] = index
            self.broadcaster.to_one(identity, 'answer_received', {})
        self.logger.info(f"[answer] room={room.code} sid={identity}")
        return True

    def finalize_round(self, code, round_no: Optional[int] = None) -> Optional[List[dict]]:
        room = self.registry.lookup_room(code)
        if room is None:
            self.logger.info(f"[timer-abort] room={code} no longer exists")
            return None
        with room.lock:
            if room.closed or room.phase != Phase.QUESTION or (round_no is not None and round_no != room.round_no):
                self.logger.info(
                    f"[timer-abort] room={room.code} expected_round={round_no} "
                    f"actual_round={room.round_no} phase={room.phase.value}"
                )
                return None
            room.phase = Phase.RESULT
            score_current_round(room)
            ranked = scoreboard(room)
            self.broadcaster.to_room(room.code, 'round_result', {
                'correct_index': room.current_question.correct_index,
                'scoreboard': ranked,
            })
            self.logger.info(f"[round-result] room={room.code} round={room.round_no} answers={len(room.answers)}")
            self.scheduler.schedule(
                self.result_duration,
                f"room={room.code} stage=result round={room.round_no}",
                self.return_to_lobby, room.code, room.round_no,
            )
        return ranked

    def return_to_lobby(self, code, round_no: Optional[int] = None) -> bool:
        room = self.registry.lookup_room(code)
        if room is None:
            self.logger.info(f"[timer-abort] room={code} no longer exists")
            return False
        with room.lock:
            if room.closed or room.phase != Phase.RESULT or (round_no is not None and round_no != room.round_no):
                self.logger.info(f"[timer-abort] room={room.code} expected_round={round_no} phase={room.phase.value}")
                return False
            room.phase = Phase.LOBBY
            self._broadcast_lobby(room)
        self.logger.info(f"[lobby] room={room.code} players={len(room.participants)}")
        return True

    # ---- Disconnect ----

    def handle_disconnect(self, identity: str) -> None:
        # No reverse index from identity to room: scan them all
        for room in self.registry.rooms():
            with room.lock:
                if room.closed:
                    continue
                if room.host_id == identity:
                    self._close_room(room)
                    continue
                participant = self.registry.remove_participant(room.code, identity)
                if participant is None:
                    continue
                self.broadcaster.detach(room.code, identity)
                self._broadcast_lobby(room)
            self.logger.info(f"[leave] room={room.code} player={participant.name!r}")

    def _close_room(self, room: Room) -> None:
        self.broadcaster.to_room(room.code, 'error', {'message': HOST_LEFT_MESSAGE})
        for identity in list(room.participants):
            self.broadcaster.detach(room.code, identity)
        room.closed = True
        self.registry.destroy_room(room.code)
        self.logger.info(f"[room-closed] room={room.code} host left")

    def snapshot(self, code) -> Optional[dict]:
        room = self.registry.lookup_room(code)
        if room is None:
            return None
        with room.lock:
            return room.to_dict()
