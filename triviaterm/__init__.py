"""Terminal trivia quiz built on Textual."""

__version__ = "0.1.0"
