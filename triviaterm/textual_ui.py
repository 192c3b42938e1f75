# triviaterm/textual_ui.py
# =====================================================================================
# PURPOSE
#   Textual TUI that:
#     - Shows the current question and a numbered answer list
#     - Starts on 's', locks in the highlighted answer on Enter, quits on 'q'
#     - Fetches question batches in a background daemon thread and feeds the
#       result back into the event loop as a message
#
# KEY TECHNOLOGIES
#   - Textual: terminal UI framework (asyncio-based)
#   - requests (via http_client): blocking fetch, run on a daemon thread
# =====================================================================================

import threading

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Footer, Header

from triviaterm.common import logger
from triviaterm.config import QuizConfig
from triviaterm.http_client import FetchError, fetch_batch
from triviaterm.quiz_controller import START_PROMPT, QuizController
from triviaterm.quiz_types import QuestionBatch
from triviaterm.widgets.choice_list import ChoiceListWidget


class QuestionsFetched(Message):
    def __init__(self, batch: QuestionBatch) -> None:
        self.batch = batch
        super().__init__()


class FetchFailed(Message):
    def __init__(self, error: FetchError) -> None:
        self.error = error
        super().__init__()


class TriviaApp(App):
    """Main Textual application for the trivia quiz.

    Every key press and fetch completion is handled on the event loop, one
    message at a time, by calling a single QuizController method.
    """

    CSS = """
    Screen  { layout: vertical; padding: 1 0; }
    #quiz   { height: auto; }
    #question-title { text-style: bold; margin-bottom: 1; }
    #choice-list { border: none; background: $background; }
    #choice-list > .option-list--option-highlighted {
        color: $choice-selected;
        text-style: bold;
    }
    #status { color: $text-muted; }
    """

    # enter/q/ctrl+c must reach the app even while the option list has focus
    BINDINGS = [
        Binding("s", "start", "Start"),
        Binding("enter", "confirm", "Confirm", priority=True),
        Binding("r", "retry", "Retry fetch"),
        Binding("d", "toggle_dark", "Toggle dark mode"),
        Binding("q", "quit_quiz", "Quit", priority=True),
        Binding("ctrl+c", "quit_quiz", "Quit", priority=True, show=False),
    ]

    def __init__(self, config: QuizConfig | None = None) -> None:
        # get_css_variables() can run during App.__init__, so set config first
        self.config = config or QuizConfig()
        super().__init__()
        self.controller: QuizController | None = None
        self.fetch_thread: threading.Thread | None = None

    def get_css_variables(self) -> dict[str, str]:
        variables = super().get_css_variables()
        variables["choice-selected"] = self.config.selected_color
        return variables

    def compose(self) -> ComposeResult:
        yield Header()
        yield ChoiceListWidget(self.config, id="quiz")
        yield Footer()

    def on_mount(self) -> None:
        self.theme = self.config.theme
        self.title = "Trivia"

        quiz = self.query_one(ChoiceListWidget)
        self.controller = QuizController(quiz.presenter, self.fetch_questions)
        quiz.presenter.render(START_PROMPT, [])
        quiz.option_list.focus()
        logger.info("Trivia UI mounted.")

    # -----------------------------------------------------------------------------
    # Network (daemon thread) -> event loop
    # -----------------------------------------------------------------------------
    def fetch_questions(self) -> None:
        """Run the blocking fetch on a daemon thread; exit never waits on it."""
        self.fetch_thread = threading.Thread(
            target=self._fetch_in_thread, name="trivia-fetch", daemon=True)
        self.fetch_thread.start()

    def _fetch_in_thread(self) -> None:
        try:
            batch = fetch_batch(self.config.questions_url,
                                timeout=self.config.request_timeout)
        except FetchError as e:
            self.post_message(FetchFailed(e))
        else:
            # post_message is thread-safe; it is a no-op once the app has closed
            self.post_message(QuestionsFetched(batch))

    def on_questions_fetched(self, message: QuestionsFetched) -> None:
        self.controller.on_batch_fetched(message.batch)

    def on_fetch_failed(self, message: FetchFailed) -> None:
        logger.error(f"Fetch failed: {message.error}")
        self.controller.on_fetch_failed(message.error)

    # -----------------------------------------------------------------------------
    # Keyboard -> controller
    # -----------------------------------------------------------------------------
    def action_start(self) -> None:
        self.controller.start()

    def action_confirm(self) -> None:
        self.controller.confirm()

    def action_retry(self) -> None:
        self.controller.retry()

    def action_toggle_dark(self) -> None:
        theme = self.config.theme
        self.theme = theme if self.theme != theme else "textual-dark"

    def action_quit_quiz(self) -> None:
        score = self.controller.quit()
        self.exit(result=score, message=f"Game Over! Your score is: {score}")
