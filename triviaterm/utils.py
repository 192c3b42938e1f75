import html
import random

from triviaterm.quiz_types import QuestionRecord


def unescape(text: str) -> str:
    """Decode HTML entities (&quot;, &#039;, ...) from the trivia API."""
    return html.unescape(text)


def build_choices(record: QuestionRecord, rng: random.Random | None = None) -> list[str]:
    """Return the decoded answers of `record` in a fresh random order.

    The incorrect answers are combined with the correct one and the whole
    list gets a uniform permutation, so the correct answer's position
    carries no information about input order.
    """
    choices = [unescape(a) for a in record.incorrect_answers]
    choices.append(unescape(record.correct_answer))
    # random.shuffle is Fisher-Yates
    (rng or random).shuffle(choices)
    return choices


def format_question_title(number: int, score: int, question_text: str) -> str:
    return f"Question #{number} - Score:{score} \n{question_text}"


def format_choice_label(index: int, choice: str) -> str:
    """'1. Paris' style label for a 0-based list index."""
    return f"{index + 1}. {choice}"
