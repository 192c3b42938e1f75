"""
Unit tests for QuizController state transitions and scoring.
"""
import random
import unittest
from unittest.mock import Mock

from triviaterm.http_client import FetchError, FetchErrorKind
from triviaterm.quiz_controller import FETCHING_PROMPT, IDLE_PROMPT, START_PROMPT, QuizController
from triviaterm.quiz_types import SessionPhase
from tests.test_fixtures import FakeView, TestFixtures


class ControllerTestCase(unittest.TestCase):

    def setUp(self):
        self.view = FakeView()
        self.request_fetch = Mock()
        self.controller = QuizController(self.view, self.request_fetch, rng=random.Random(7))

    def start_with(self, *records):
        self.controller.start()
        self.controller.on_batch_fetched(TestFixtures.batch(*records))

    def assertInvariants(self):
        state = self.controller.state
        self.assertTrue(0 <= state.cursor <= len(state.batch))
        self.assertTrue(0 <= state.score <= state.total_asked)
        if state.phase is not SessionPhase.ACTIVE:
            self.assertIsNone(state.pending_correct_answer)


class TestStart(ControllerTestCase):

    def test_start_requests_fetch(self):
        self.controller.start()

        self.request_fetch.assert_called_once_with()
        self.assertIs(self.controller.phase, SessionPhase.NOT_STARTED)
        self.assertTrue(self.controller.state.fetch_in_flight)
        self.assertEqual(self.view.title, FETCHING_PROMPT)

    def test_start_twice_fetches_once(self):
        self.controller.start()
        self.controller.start()
        self.request_fetch.assert_called_once_with()

    def test_batch_activates_and_builds_first_question(self):
        self.start_with(TestFixtures.record(), TestFixtures.record(question="Second?"))

        state = self.controller.state
        self.assertIs(state.phase, SessionPhase.ACTIVE)
        self.assertEqual(state.cursor, 1)
        self.assertEqual(state.total_asked, 1)
        self.assertEqual(state.pending_correct_answer, "Paris")
        self.assertFalse(state.fetch_in_flight)
        self.assertEqual(self.view.title, "Question #1 - Score:0 \nWhat is the capital of France?")
        self.assertCountEqual(self.view.items, ["Paris", "London", "Rome"])
        self.assertEqual(self.view.status, "Geography | easy")

    def test_start_ignored_once_active(self):
        self.start_with(TestFixtures.record())
        self.controller.start()
        self.request_fetch.assert_called_once_with()

    def test_confirm_before_start_is_noop(self):
        self.controller.confirm("Paris")

        self.assertEqual(self.controller.score, 0)
        self.assertEqual(self.controller.state.total_asked, 0)
        self.request_fetch.assert_not_called()


class TestScoring(ControllerTestCase):

    def test_single_question_correct_answer_refetches(self):
        self.start_with(TestFixtures.record(correct="Paris", incorrect=["London", "Rome"]))
        self.view.selection = "Paris"

        self.controller.confirm()

        state = self.controller.state
        self.assertEqual(state.score, 1)
        self.assertEqual(state.total_asked, 1)
        self.assertEqual(state.cursor, 0)
        self.assertEqual(self.request_fetch.call_count, 2)
        self.assertTrue(state.fetch_in_flight)
        self.assertIsNone(state.pending_correct_answer)
        self.assertEqual(self.view.items, [])
        self.assertInvariants()

    def test_confirm_without_selection_advances(self):
        self.start_with(TestFixtures.record(), TestFixtures.record(question="Second?", correct="4",
                                                                   incorrect=["3", "5"]))
        self.view.selection = None

        self.controller.confirm()

        state = self.controller.state
        self.assertEqual(state.score, 0)
        self.assertEqual(state.total_asked, 2)
        self.assertEqual(state.cursor, 2)
        self.assertEqual(state.pending_correct_answer, "4")
        self.assertTrue(self.view.title.endswith("Second?"))
        self.request_fetch.assert_called_once_with()

    def test_explicit_none_is_not_read_from_view(self):
        self.start_with(TestFixtures.record(), TestFixtures.record())
        self.view.selection = "Paris"

        self.controller.confirm(None)

        self.assertEqual(self.controller.score, 0)
        self.assertEqual(self.controller.state.total_asked, 2)

    def test_wrong_answer_keeps_score(self):
        self.start_with(TestFixtures.record(), TestFixtures.record())
        self.controller.confirm("London")
        self.assertEqual(self.controller.score, 0)
        self.assertEqual(self.controller.state.total_asked, 2)

    def test_title_shows_running_score(self):
        self.start_with(TestFixtures.record(), TestFixtures.record(question="Next?"))
        self.controller.confirm("Paris")
        self.assertEqual(self.view.title, "Question #2 - Score:1 \nNext?")

    def test_entities_decoded_for_display_and_compare(self):
        self.start_with(TestFixtures.record(question="Who wrote &quot;1984&quot;?",
                                            correct="George Orwell &amp; nobody else",
                                            incorrect=["Aldous Huxley"]))

        self.assertTrue(self.view.title.endswith('Who wrote "1984"?'))
        self.assertIn("George Orwell & nobody else", self.view.items)

        self.controller.confirm("George Orwell & nobody else")
        self.assertEqual(self.controller.score, 1)

    def test_new_batch_continues_numbering(self):
        self.start_with(TestFixtures.record())
        self.controller.confirm("Paris")
        self.controller.on_batch_fetched(TestFixtures.batch(TestFixtures.record(question="Fresh?")))

        state = self.controller.state
        self.assertEqual(state.total_asked, 2)
        self.assertEqual(state.cursor, 1)
        self.assertEqual(self.view.title, "Question #2 - Score:1 \nFresh?")

    def test_confirm_while_fetching_is_noop(self):
        self.start_with(TestFixtures.record())
        self.controller.confirm("Paris")
        self.controller.confirm("Paris")

        self.assertEqual(self.controller.score, 1)
        self.assertEqual(self.request_fetch.call_count, 2)

    def test_invariants_hold_through_a_batch(self):
        records = [TestFixtures.record(question=f"Q{i}?") for i in range(5)]
        self.start_with(*records)
        for answer in ["Paris", None, "Rome", "Paris", "London"]:
            self.assertInvariants()
            self.controller.confirm(answer)
        self.assertInvariants()
        self.assertEqual(self.controller.score, 2)
        self.assertEqual(self.controller.state.total_asked, 5)


class TestFetchOutcomes(ControllerTestCase):

    def test_nonzero_response_code_shows_nothing(self):
        self.controller.start()
        self.controller.on_batch_fetched(TestFixtures.batch(TestFixtures.record(), response_code=1))

        state = self.controller.state
        self.assertIs(state.phase, SessionPhase.NOT_STARTED)
        self.assertIsNone(state.pending_correct_answer)
        self.assertFalse(state.fetch_in_flight)
        self.assertEqual(self.view.items, [])
        self.assertIn("response code 1", self.view.status)

    def test_empty_batch_while_active(self):
        self.start_with(TestFixtures.record())
        self.controller.confirm("Paris")
        self.controller.on_batch_fetched(TestFixtures.batch())

        self.assertIs(self.controller.phase, SessionPhase.ACTIVE)
        self.assertFalse(self.controller.state.question_on_screen)
        self.assertInvariants()

        # nothing on screen, so confirm does nothing
        self.controller.confirm("Paris")
        self.assertEqual(self.controller.score, 1)

    def test_unusable_first_batch_restores_start_prompt(self):
        self.controller.start()
        self.controller.on_batch_fetched(TestFixtures.batch())

        self.assertEqual(self.view.title, START_PROMPT)
        self.assertEqual(self.view.items, [])
        self.assertIn("response code 0", self.view.status)

    def test_failed_refetch_shows_idle_prompt(self):
        self.start_with(TestFixtures.record())
        self.controller.confirm("Paris")
        self.assertEqual(self.view.title, FETCHING_PROMPT)

        self.controller.on_fetch_failed(FetchError(FetchErrorKind.DECODE, "bad payload"))

        self.assertEqual(self.view.title, IDLE_PROMPT)
        self.assertEqual(self.view.items, [])
        self.assertIn("decode error: bad payload", self.view.status)

    def test_fetch_error_surfaced_then_retry(self):
        self.controller.start()
        self.controller.on_fetch_failed(FetchError(FetchErrorKind.NETWORK, "timed out"))

        self.assertIn("network error: timed out", self.view.status)
        self.assertIs(self.controller.phase, SessionPhase.NOT_STARTED)
        self.assertFalse(self.controller.state.fetch_in_flight)

        self.controller.retry()
        self.assertEqual(self.request_fetch.call_count, 2)
        self.controller.on_batch_fetched(TestFixtures.batch(TestFixtures.record()))
        self.assertIs(self.controller.phase, SessionPhase.ACTIVE)

    def test_retry_ignored_while_fetch_in_flight(self):
        self.controller.start()
        self.controller.retry()
        self.request_fetch.assert_called_once_with()

    def test_retry_while_active_replaces_batch(self):
        self.start_with(TestFixtures.record(), TestFixtures.record())
        self.controller.retry()

        self.assertFalse(self.controller.state.question_on_screen)
        self.controller.on_batch_fetched(TestFixtures.batch(TestFixtures.record(question="New?")))
        self.assertEqual(self.controller.state.cursor, 1)
        self.assertEqual(self.controller.state.total_asked, 2)
        self.assertInvariants()


class TestQuit(ControllerTestCase):

    def test_quit_returns_score(self):
        self.start_with(TestFixtures.record(), TestFixtures.record())
        self.controller.confirm("Paris")

        self.assertEqual(self.controller.quit(), 1)
        self.assertIs(self.controller.phase, SessionPhase.ENDED)
        self.assertIsNone(self.controller.state.pending_correct_answer)

    def test_quit_is_idempotent(self):
        self.start_with(TestFixtures.record())
        self.controller.confirm("Paris")
        first = self.controller.quit()
        snapshot = self.controller.state.to_dict()

        self.assertEqual(self.controller.quit(), first)
        self.assertEqual(self.controller.state.to_dict(), snapshot)

    def test_quit_before_start(self):
        self.assertEqual(self.controller.quit(), 0)
        self.assertTrue(self.controller.ended)

    def test_events_after_quit_ignored(self):
        self.controller.start()
        self.controller.quit()
        self.controller.on_batch_fetched(TestFixtures.batch(TestFixtures.record()))
        self.controller.confirm("Paris")
        self.controller.retry()
        self.controller.start()

        self.assertIs(self.controller.phase, SessionPhase.ENDED)
        self.assertEqual(self.controller.state.total_asked, 0)
        self.assertEqual(self.controller.score, 0)
        self.request_fetch.assert_called_once_with()

    def test_fetch_failure_after_quit_ignored(self):
        self.controller.start()
        self.controller.quit()
        self.controller.on_fetch_failed(FetchError(FetchErrorKind.DECODE, "bad"))
        self.assertEqual(self.view.status, "")


if __name__ == "__main__":
    unittest.main()
