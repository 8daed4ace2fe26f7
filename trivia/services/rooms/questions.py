from trivia.models import Question


def sample_question() -> Question:
    """Default question provider: one fixed question per round."""
    return Question(
        statement='What is 2 + 2?',
        choices=('3', '4', '5', '22'),
        correct_index=1,
    )
