# triviaterm/config.py
# Startup configuration: question endpoint plus the layout/style values the
# list presenter needs. Built once in main() and handed around by reference.

from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlencode

THEME = "flexoki"


@dataclass
class QuizConfig:
    # Open Trivia DB endpoint (category 11 = Entertainment: Film)
    api_url: str = "https://opentdb.com/api.php"
    amount: int = 50
    category: int = 11
    request_timeout: float | None = 30.0

    # list layout
    list_height: int = 14
    title_margin_left: int = 2
    item_padding_left: int = 2       # plus the two-column "> " cursor
    selected_color: str = "#d75fd7"   # xterm 170
    theme: str = THEME

    log_dir: str = "logs"
    log_file: str = "triviaterm.log"

    @property
    def questions_url(self) -> str:
        query = urlencode({"amount": self.amount, "category": self.category})
        return f"{self.api_url}?{query}"

    @property
    def log_path(self) -> Path:
        return Path(self.log_dir) / self.log_file
