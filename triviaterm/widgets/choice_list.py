from typing import List, Optional, Sequence

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import OptionList, Static

from triviaterm.common import logger
from triviaterm.config import QuizConfig
from triviaterm.utils import format_choice_label


class ChoicePresenter:
    """Translates controller output into the list widgets and reads the
    highlighted choice back.

    Public API (what the quiz controller calls):

        presenter.render(title, items)     # replace title + list contents
        presenter.current_selection()      # highlighted item text or None
        presenter.show_status(text)        # one-line status under the list
    """

    def __init__(self, title: Static, options: OptionList, status: Static,
                 config: QuizConfig) -> None:
        self.title = title
        self.options = options
        self.status = status
        self.config = config
        # raw item text, index-aligned with the option list
        self._items: List[str] = []
        self._marked: Optional[int] = None
        self._apply_styles()

    def render(self, title: str, items: Sequence[str]) -> None:
        self.title.update(Text(title, overflow="fold", no_wrap=False))

        self._items = list(items)
        self._marked = 0 if self._items else None
        self.options.clear_options()
        self.options.add_options([self._label(i) for i in range(len(self._items))])
        if self._items:
            self.options.highlighted = 0

    def current_selection(self) -> Optional[str]:
        idx = self.options.highlighted
        if idx is None or not (0 <= idx < len(self._items)):
            return None
        return self._items[idx]

    def show_status(self, text: str) -> None:
        self.status.update(Text(text))

    def mark_highlighted(self, index: Optional[int]) -> None:
        """Move the "> " cursor to the highlighted row."""
        if index == self._marked:
            return
        previous, self._marked = self._marked, index
        for i in (previous, index):
            if i is not None and 0 <= i < len(self._items):
                self.options.replace_option_prompt_at_index(i, self._label(i))

    def _label(self, index: int) -> Text:
        cursor = "> " if index == self._marked else "  "
        return Text(cursor + format_choice_label(index, self._items[index]))

    def _apply_styles(self) -> None:
        cfg = self.config
        self.title.styles.margin = (0, 0, 0, cfg.title_margin_left)
        self.options.styles.height = cfg.list_height
        self.options.styles.padding = (0, 0, 0, cfg.item_padding_left)
        self.status.styles.margin = (0, 0, 0, cfg.item_padding_left + 2)


class ChoiceListWidget(Vertical):
    """Question title, numbered answer list and status line."""

    def __init__(self, config: QuizConfig, **kwargs) -> None:
        super().__init__(**kwargs)
        self.config = config
        self._presenter: ChoicePresenter | None = None

    def compose(self) -> ComposeResult:
        yield Static("", id="question-title")
        yield OptionList(id="choice-list")
        yield Static("", id="status")

    # --- Convenience accessors ---

    @property
    def presenter(self) -> ChoicePresenter:
        if self._presenter is None:
            self._presenter = ChoicePresenter(
                self.query_one("#question-title", Static),
                self.option_list,
                self.query_one("#status", Static),
                self.config,
            )
            logger.debug("ChoicePresenter attached.")
        return self._presenter

    @property
    def option_list(self) -> OptionList:
        return self.query_one("#choice-list", OptionList)

    def on_option_list_option_highlighted(self, event: OptionList.OptionHighlighted) -> None:
        # read the live value; the event may predate a re-render
        self.presenter.mark_highlighted(self.option_list.highlighted)
