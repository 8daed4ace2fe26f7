import pytest

from trivia.models import Participant, Question, Room
from trivia.services.rooms.scoring import score_current_round, scoreboard


def _room(*names):
    room = Room(code='ABCD', host_id='host')
    for i, name in enumerate(names):
        room.participants[f"p{i}"] = Participant(id=f"p{i}", name=name)
    room.current_question = Question('Q?', ('a', 'b', 'c'), 1)
    return room


def test_correct_answers_score_one_point():
    room = _room('Ann', 'Bob', 'Cy')
    room.answers = {'p0': 1, 'p1': 2}
    assert score_current_round(room) == ['p0']
    assert [p.score for p in room.participants.values()] == [1, 0, 0]


def test_answers_from_departed_players_are_skipped():
    room = _room('Ann')
    room.answers = {'gone': 1}
    assert score_current_round(room) == []


def test_scoreboard_is_descending_and_stable():
    room = _room('Ann', 'Bob', 'Cy', 'Di')
    room.participants['p0'].score = 1
    room.participants['p1'].score = 3
    room.participants['p2'].score = 1
    room.participants['p3'].score = 3
    assert scoreboard(room) == [
        {'name': 'Bob', 'score': 3},
        {'name': 'Di', 'score': 3},
        {'name': 'Ann', 'score': 1},
        {'name': 'Cy', 'score': 1},
    ]


def test_question_shape_is_validated():
    with pytest.raises(ValueError):
        Question('Q?', ('only',), 0)
    with pytest.raises(ValueError):
        Question('Q?', ('a', 'b'), 2)
    q = Question('Q?', ['a', 'b'], 0)
    assert q.choices == ('a', 'b')
    assert q.to_public_dict() == {'statement': 'Q?', 'choices': ['a', 'b']}
