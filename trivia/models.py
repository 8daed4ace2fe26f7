import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class Phase(str, Enum):
    LOBBY = 'lobby'
    QUESTION = 'question'
    RESULT = 'result'


@dataclass(frozen=True)
class Question:
    statement: str
    choices: Tuple[str, ...]
    correct_index: int

    def __post_init__(self):
        object.__setattr__(self, 'choices', tuple(self.choices))
        if len(self.choices) < 2:
            raise ValueError('A question needs at least two choices')
        if not 0 <= self.correct_index < len(self.choices):
            raise ValueError(f'correct_index {self.correct_index} out of range')

    def to_public_dict(self):
        """Question as shown to players, without the answer."""
        return {
            'statement': self.statement,
            'choices': list(self.choices),
        }


@dataclass
class Participant:
    id: str
    name: str
    score: int = 0

    def to_dict(self):
        return {
            'name': self.name,
            'score': self.score,
        }


@dataclass
class Room:
    code: str
    host_id: str
    phase: Phase = Phase.LOBBY
    current_question: Optional[Question] = None
    # Insertion order is arrival order; lobby lists and tie-breaks rely on it
    participants: Dict[str, Participant] = field(default_factory=dict)
    answers: Dict[str, int] = field(default_factory=dict)
    round_no: int = 0
    closed: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def player_names(self) -> List[str]:
        return [p.name for p in self.participants.values()]

    def to_dict(self):
        data = {
            'code': self.code,
            'phase': self.phase.value,
            'round': self.round_no,
            'players': [p.to_dict() for p in self.participants.values()],
        }
        if self.current_question is not None:
            data['question'] = self.current_question.to_public_dict()
        return data
