"""
Unit tests for InMemoryRepository and sample quiz seeding.
"""
import unittest
from decimal import Decimal

from models import MAX_TOKEN_AMOUNT, Answer, Participant, Question, Quiz, format_amount, parse_amount
from quizzes import seed_sample_quizzes
from tests.test_fixtures import TestFixtures


def create_quiz(quiz_id='quiz_a'):
    return Quiz(
        id=quiz_id,
        title='Quiz',
        description='Description',
        host_fid=1,
        host_username='host',
        host_wallet_address=None,
        category='General Knowledge',
        difficulty='easy',
        entry_fee='0',
        prize_pool='10',
        max_participants=2,
    )


class TestInMemoryRepository(unittest.TestCase):

    def setUp(self):
        self.repository = TestFixtures.create_repository()
        self.repository.create_quiz(create_quiz(), [
            Question(id='q_quiz_a_1', quiz_id='quiz_a', question='B?', options=['x'], correct_answer='x', order=1),
            Question(id='q_quiz_a_0', quiz_id='quiz_a', question='A?', options=['y'], correct_answer='y', order=0),
        ])

    def test_reads_are_copies(self):
        quiz = self.repository.get_quiz('quiz_a')
        quiz.title = 'Changed'
        self.assertEqual(self.repository.get_quiz('quiz_a').title, 'Quiz')

    def test_questions_sorted_by_order(self):
        ids = [q.id for q in self.repository.get_questions('quiz_a')]
        self.assertEqual(ids, ['q_quiz_a_0', 'q_quiz_a_1'])

    def test_duplicate_quiz_rejected(self):
        with self.assertRaises(KeyError):
            self.repository.create_quiz(create_quiz(), [])

    def test_participant_answers_persist(self):
        quiz = self.repository.get_quiz('quiz_a')
        quiz.current_participants = 1
        self.repository.add_participant(quiz, Participant(id='p1', quiz_id='quiz_a', fid=5, username='eve'))

        participant = self.repository.get_participant('quiz_a', 5)
        participant.answers.append(Answer(id='a1', participant_id='p1', question_id='q_quiz_a_0',
                                          selected_answer='y', is_correct=True, time_spent=1,
                                          points_earned=10))
        participant.score = 10
        self.repository.save_participant(participant)

        stored = self.repository.get_participant('quiz_a', 5)
        self.assertEqual(stored.score, 10)
        self.assertEqual(stored.answers[0].question_id, 'q_quiz_a_0')
        self.assertEqual(self.repository.get_quiz('quiz_a').current_participants, 1)

    def test_save_unknown_participant(self):
        with self.assertRaises(KeyError):
            self.repository.save_participant(Participant(id='p9', quiz_id='quiz_a', fid=9, username='x'))

    def test_participant_record_round_trip(self):
        participant = Participant(id='p1', quiz_id='quiz_a', fid=5, username='eve', answers=[
            Answer(id='a1', participant_id='p1', question_id='q', selected_answer='y', is_correct=True,
                   time_spent=1, points_earned=10),
        ])
        restored = Participant.from_record(participant.to_record())
        self.assertIsInstance(restored.answers[0], Answer)
        self.assertEqual(restored.joined_at, participant.joined_at)


class TestAmounts(unittest.TestCase):

    def test_format_amount_beyond_default_precision(self):
        self.assertEqual(format_amount(Decimal('123456789012345678901234567890')),
                         '123456789012345678901234567890')
        self.assertEqual(format_amount(Decimal('10000000000.123456789012345678')),
                         '10000000000.123456789012345678')

    def test_format_amount_truncates_to_wei(self):
        self.assertEqual(format_amount(Decimal('1.0000000000000000019')), '1.000000000000000001')
        self.assertEqual(format_amount(Decimal('0.0000000000000000001')), '0')

    def test_parse_amount_rejects_uint256_overflow(self):
        self.assertEqual(parse_amount(MAX_TOKEN_AMOUNT), MAX_TOKEN_AMOUNT)
        with self.assertRaises(ValueError):
            parse_amount('1e60')
        with self.assertRaises(ValueError):
            parse_amount('-1e60')

    def test_format_amount(self):
        self.assertEqual(format_amount(Decimal('50.000')), '50')
        self.assertEqual(format_amount(Decimal('12.50')), '12.5')
        self.assertEqual(format_amount(Decimal('1E+2')), '100')
        self.assertEqual(format_amount(Decimal('0.00')), '0')

    def test_parse_amount(self):
        self.assertEqual(parse_amount(' 7.5 '), Decimal('7.5'))
        self.assertEqual(parse_amount(3), Decimal('3'))
        for value in ('abc', None, 'Infinity'):
            with self.assertRaises(ValueError):
                parse_amount(value)


class TestSampleQuizzes(unittest.TestCase):

    def test_seed_once(self):
        repository = TestFixtures.create_repository()

        self.assertEqual(seed_sample_quizzes(repository), 3)
        self.assertEqual(seed_sample_quizzes(repository), 0)

        quizzes = repository.list_quizzes()
        self.assertEqual(len(quizzes), 3)
        for quiz in quizzes:
            self.assertEqual(quiz.current_participants, len(repository.get_participants(quiz.id)))
            for question in repository.get_questions(quiz.id):
                self.assertIn(question.correct_answer, question.options)


if __name__ == '__main__':
    unittest.main()
