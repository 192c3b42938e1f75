# triviaterm/main_tui.py
# Entry point for the trivia TUI.

import sys

from triviaterm.common import logger, setup_logging
from triviaterm.config import QuizConfig
from triviaterm.textual_ui import TriviaApp


def main() -> int:
    config = QuizConfig()
    setup_logging(config)
    logger.info("Trivia UI starting up...")

    try:
        app = TriviaApp(config)
        app.run()
    except Exception as e:
        logger.exception("Error running program")
        print(f"Error running program: {e}", file=sys.stderr)
        return 1

    return app.return_code or 0


if __name__ == "__main__":
    sys.exit(main())
