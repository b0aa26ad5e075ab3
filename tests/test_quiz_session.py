"""
Unit tests for QuizSession.
"""
import unittest

from errors import AlreadyAnswered, AlreadyCompleted, NotFound, NotParticipant
from locking import KeyedLock
from quizzes import QuizCatalog, QuizSession
from tests.test_fixtures import TestFixtures


class TestQuizSession(unittest.TestCase):

    def setUp(self):
        self.repository = TestFixtures.create_repository()
        self.catalog = QuizCatalog(self.repository, settings=TestFixtures.quiz_settings(), locks=KeyedLock())
        self.session = QuizSession(self.repository, self.catalog)

        self.quiz = self.catalog.create(TestFixtures.create_quiz_data())
        self.questions = self.catalog.list_questions(self.quiz.id)
        self.catalog.join(self.quiz.id, 42, 'alice')

    def _answer(self, index, correct=True, fid=42):
        question = self.questions[index]
        selected = question.correct_answer if correct else next(
            option for option in question.options if option != question.correct_answer)
        return self.session.submit_answer(self.quiz.id, fid, question.id, selected, time_spent=3.5)

    def test_correct_answer_scores_points(self):
        result = self._answer(0)

        self.assertEqual(result, {'isCorrect': True, 'pointsEarned': 10, 'newScore': 10, 'newStreak': 1})

        participant = self.repository.get_participant(self.quiz.id, 42)
        self.assertEqual(len(participant.answers), 1)
        self.assertEqual(participant.answers[0].time_spent, 3.5)

    def test_wrong_answer_resets_streak(self):
        self._answer(0)
        self._answer(1)
        result = self._answer(2, correct=False)

        self.assertFalse(result['isCorrect'])
        self.assertEqual(result['pointsEarned'], 0)
        self.assertEqual(result['newScore'], 20)
        self.assertEqual(result['newStreak'], 0)

    def test_score_equals_sum_of_points_earned(self):
        self._answer(0, correct=False)
        self._answer(1)
        self._answer(2)

        participant = self.repository.get_participant(self.quiz.id, 42)
        self.assertEqual(participant.score, sum(a.points_earned for a in participant.answers))
        self.assertEqual(participant.streak, 2)
        self.assertEqual(len({a.question_id for a in participant.answers}), 3)

    def test_answer_each_question_once(self):
        self._answer(0)
        with self.assertRaises(AlreadyAnswered):
            self._answer(0, correct=False)

        participant = self.repository.get_participant(self.quiz.id, 42)
        self.assertEqual(participant.score, 10)
        self.assertEqual(len(participant.answers), 1)

    def test_non_participant_cannot_answer(self):
        with self.assertRaises(NotParticipant):
            self._answer(0, fid=7)

    def test_unknown_question(self):
        with self.assertRaises(NotFound):
            self.session.submit_answer(self.quiz.id, 42, 'q_missing', 'anything')

    def test_unknown_quiz(self):
        with self.assertRaises(NotFound):
            self.session.submit_answer('quiz_missing', 42, self.questions[0].id, 'anything')

    def test_complete_returns_final_score(self):
        self._answer(0)
        self.assertEqual(self.session.complete(self.quiz.id, 42), 10)

        participant = self.repository.get_participant(self.quiz.id, 42)
        self.assertIsNotNone(participant.completed_at)

    def test_complete_twice(self):
        self.session.complete(self.quiz.id, 42)
        with self.assertRaises(AlreadyCompleted):
            self.session.complete(self.quiz.id, 42)

    def test_no_answers_after_completion(self):
        self.session.complete(self.quiz.id, 42)
        with self.assertRaises(AlreadyCompleted):
            self._answer(0)

    def test_complete_requires_participation(self):
        with self.assertRaises(NotParticipant):
            self.session.complete(self.quiz.id, 7)


if __name__ == '__main__':
    unittest.main()
