# triviaterm/common.py
import logging

from triviaterm.config import QuizConfig

logger = logging.getLogger("triviaterm")


def setup_logging(config: QuizConfig) -> None:
    """Send log output to a file; the terminal belongs to the TUI."""
    log_path = config.log_path
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        filename=log_path,
        level=logging.INFO,
        format='%(asctime)s %(levelname)s %(message)s',
        filemode='w',
        force=True
    )
    logger.setLevel(logging.DEBUG)
    logger.debug("Logger configured from common.")
