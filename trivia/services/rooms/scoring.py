from typing import List

from trivia.models import Room


def score_current_round(room: Room) -> List[str]:
    """Apply scoring for the current round.

    +1 to each participant whose recorded answer matches the correct
    index. No partial credit and no speed bonus. Returns the ids of the
    correct answerers.
    """
    if room.current_question is None:
        return []
    correct = room.current_question.correct_index
    correct_ids = []
    for identity, choice in room.answers.items():
        participant = room.participants.get(identity)
        if participant is None:
            continue
        if choice == correct:
            participant.score += 1
            correct_ids.append(identity)
    return correct_ids


def scoreboard(room: Room) -> List[dict]:
    # sorted() is stable, so equal scores keep arrival order
    ranked = sorted(room.participants.values(), key=lambda p: p.score, reverse=True)
    return [p.to_dict() for p in ranked]
