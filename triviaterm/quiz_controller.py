"""Quiz session controller (question sequencing, scoring and batch refresh).

This module performs no I/O of its own. The Textual app feeds it one event at
a time (start, fetch completed, confirm, retry, quit) and supplies two
collaborators:

- `view`: the presentation adapter (`render`, `current_selection`,
  `show_status`)
- `request_fetch`: starts a background fetch whose completion comes back
  through `on_batch_fetched` / `on_fetch_failed`

Transitions:

    NOT_STARTED --start--> (fetch) --batch--> ACTIVE
    ACTIVE --confirm--> score, then next question or (fetch)
    any --quit--> ENDED
"""

from __future__ import annotations

import random
from typing import Any, Callable, Optional, Protocol, Sequence

from triviaterm.common import logger
from triviaterm.http_client import FetchError
from triviaterm.quiz_types import QuestionBatch, SessionPhase, SessionState
from triviaterm.utils import build_choices, format_question_title, unescape

START_PROMPT = "Press 's' To Start Quiz"
FETCHING_PROMPT = "Fetching questions..."
RETRY_HINT = "press 'r' to retry"
IDLE_PROMPT = "Press 'r' To Fetch Questions"

_UNSET: Any = object()


class QuizView(Protocol):
    def render(self, title: str, items: Sequence[str]) -> None: ...
    def current_selection(self) -> Optional[str]: ...
    def show_status(self, text: str) -> None: ...


class QuizController:
    """Drives a single quiz session."""

    def __init__(self, view: QuizView, request_fetch: Callable[[], None],
                 rng: random.Random | None = None) -> None:
        self.view = view
        self.request_fetch = request_fetch
        self.rng = rng
        self.state = SessionState()

    # ---------- Read-only helpers ----------

    @property
    def phase(self) -> SessionPhase:
        return self.state.phase

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def ended(self) -> bool:
        return self.state.phase is SessionPhase.ENDED

    # ---------- Events ----------

    def start(self) -> None:
        """User pressed start. Only meaningful before the first batch."""
        if self.state.phase is not SessionPhase.NOT_STARTED:
            logger.debug(f"start ignored in phase {self.state.phase.value}")
            return
        self._issue_fetch()

    def retry(self) -> None:
        """Re-issue the fetch, dropping any question on screen."""
        if self.ended:
            return
        self._issue_fetch()

    def on_batch_fetched(self, batch: QuestionBatch) -> None:
        self.state.fetch_in_flight = False
        if self.ended:
            logger.debug("Batch arrived after quit; ignoring.")
            return

        if not batch.is_usable:
            logger.warning(f"Unusable batch: response_code={batch.response_code}, "
                           f"{len(batch)} questions")
            self._show_idle()
            self.view.show_status(
                f"No questions available (response code {batch.response_code}), {RETRY_HINT}.")
            return

        self.state.install_batch(batch)
        if self.state.phase is SessionPhase.NOT_STARTED:
            self.state.phase = SessionPhase.ACTIVE
            logger.info("Quiz started.")
        self._build_question(0)

    def on_fetch_failed(self, error: FetchError) -> None:
        self.state.fetch_in_flight = False
        if self.ended:
            logger.debug(f"Fetch failure after quit ignored: {error}")
            return
        self._show_idle()
        self.view.show_status(f"Error fetching questions ({error}), {RETRY_HINT}.")

    def confirm(self, selection: Optional[str] = _UNSET) -> None:
        """Lock in the highlighted choice and move on.

        `selection` defaults to whatever the view reports as highlighted.
        """
        if self.state.phase is not SessionPhase.ACTIVE or not self.state.question_on_screen:
            logger.debug("confirm ignored: no question on screen")
            return

        if selection is _UNSET:
            selection = self.view.current_selection()

        if selection is not None and selection == self.state.pending_correct_answer:
            self.state.score += 1
            logger.debug(f"Correct answer, score now {self.state.score}")
        else:
            logger.debug(f"Wrong or no answer ({selection!r})")

        self.state.pending_correct_answer = None

        if self.state.cursor < len(self.state.batch):
            self._build_question(self.state.cursor)
        else:
            # batch exhausted
            self.state.cursor = 0
            self._issue_fetch()

    def quit(self) -> int:
        """End the session and return the frozen score."""
        if not self.ended:
            self.state.phase = SessionPhase.ENDED
            self.state.pending_correct_answer = None
            logger.info(f"Quiz ended with score {self.state.score}/{self.state.total_asked}")
        return self.state.score

    # ---------- Internals ----------

    def _issue_fetch(self) -> None:
        if self.state.fetch_in_flight:
            logger.debug("Fetch already in flight.")
            return
        self.state.fetch_in_flight = True
        self.state.pending_correct_answer = None
        self.view.render(FETCHING_PROMPT, [])
        self.view.show_status("")
        logger.debug(f"Requesting batch: {self.state.to_dict()}")
        self.request_fetch()

    def _show_idle(self) -> None:
        """Clear the list after a fetch that produced no question."""
        prompt = START_PROMPT if self.state.phase is SessionPhase.NOT_STARTED else IDLE_PROMPT
        self.view.render(prompt, [])

    def _build_question(self, index: int) -> None:
        record = self.state.batch.questions[index]

        self.state.pending_correct_answer = unescape(record.correct_answer)
        self.state.total_asked += 1

        choices = build_choices(record, self.rng)
        title = format_question_title(self.state.total_asked, self.state.score,
                                      unescape(record.question))
        self.view.render(title, choices)
        self.view.show_status(f"{unescape(record.category)} | {record.difficulty}")

        self.state.cursor = index + 1
        logger.debug(f"Built question {index}: {self.state.to_dict()}")
