"""Quiz data types and session state."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

QUESTION_FIELDS = ("category", "type", "difficulty", "question", "correct_answer")


class SessionPhase(Enum):
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    ENDED = "ended"


@dataclass(frozen=True)
class QuestionRecord:
    """One trivia question, text still HTML-entity-encoded as received."""
    category: str
    type: str           # "multiple" / "boolean"
    difficulty: str
    question: str
    correct_answer: str
    incorrect_answers: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "QuestionRecord":
        if not isinstance(data, dict):
            raise ValueError(f"question entry must be an object, got {type(data).__name__}")

        values = {}
        for name in QUESTION_FIELDS:
            value = data.get(name)
            if not isinstance(value, str):
                raise ValueError(f"question field '{name}' must be a string")
            values[name] = value

        incorrect = data.get("incorrect_answers")
        if not isinstance(incorrect, list) or not all(isinstance(a, str) for a in incorrect):
            raise ValueError("question field 'incorrect_answers' must be a list of strings")

        return cls(incorrect_answers=tuple(incorrect), **values)


@dataclass(frozen=True)
class QuestionBatch:
    """A fetched set of questions plus the API's response code."""
    response_code: int = 0
    questions: Tuple[QuestionRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.questions)

    @property
    def is_usable(self) -> bool:
        return self.response_code == 0 and len(self.questions) > 0

    @classmethod
    def from_dict(cls, data: dict) -> "QuestionBatch":
        if not isinstance(data, dict):
            raise ValueError(f"payload must be an object, got {type(data).__name__}")

        code = data.get("response_code", 0)
        # bool is an int subclass; reject it explicitly
        if not isinstance(code, int) or isinstance(code, bool):
            raise ValueError("'response_code' must be an integer")

        results = data.get("results", [])
        if not isinstance(results, list):
            raise ValueError("'results' must be a list")

        return cls(
            response_code=code,
            questions=tuple(QuestionRecord.from_dict(r) for r in results),
        )


@dataclass
class SessionState:
    """Mutable state owned by the quiz controller."""
    phase: SessionPhase = SessionPhase.NOT_STARTED
    batch: QuestionBatch = field(default_factory=QuestionBatch)
    cursor: int = 0                 # next question to build, not the one on screen
    total_asked: int = 0
    score: int = 0
    pending_correct_answer: Optional[str] = None
    fetch_in_flight: bool = False

    @property
    def question_on_screen(self) -> bool:
        return self.pending_correct_answer is not None

    def install_batch(self, batch: QuestionBatch) -> None:
        self.batch = batch
        self.cursor = 0

    def to_dict(self) -> dict:
        return {
            "phase": self.phase.value,
            "cursor": self.cursor,
            "batch_size": len(self.batch),
            "total_asked": self.total_asked,
            "score": self.score,
            "fetch_in_flight": self.fetch_in_flight,
        }


