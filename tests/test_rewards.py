"""
Unit tests for RewardCalculator.
"""
import unittest
from decimal import Decimal

from trivia import RewardCalculator, RewardSettings


class TestRewardCalculator(unittest.TestCase):
    """Test cases for per-answer BLITZ rewards."""

    def setUp(self):
        self.calculator = RewardCalculator(RewardSettings())

    def test_correct_answer_earns_base_reward(self):
        self.assertEqual(self.calculator.calculate(True, 1), Decimal('10'))

    def test_incorrect_answer_earns_participation_reward(self):
        self.assertEqual(self.calculator.calculate(False, 0), Decimal('1'))
        # Streak is irrelevant for a wrong answer
        self.assertEqual(self.calculator.calculate(False, 5), Decimal('1'))

    def test_every_fifth_streak_adds_bonus(self):
        for streak in (5, 10, 15):
            self.assertEqual(self.calculator.calculate(True, streak), Decimal('15'))

    def test_zero_streak_never_gets_bonus(self):
        self.assertEqual(self.calculator.calculate(True, 0), Decimal('10'))

    def test_reward_only_changes_on_bonus_boundaries(self):
        """Reward at s equals reward at s+1 unless s+1 is a multiple of 5."""
        for streak in range(1, 50):
            current = self.calculator.calculate(True, streak)
            following = self.calculator.calculate(True, streak + 1)
            if (streak + 1) % 5 == 0:
                self.assertEqual(following, Decimal('15'))
            elif streak % 5 != 0:
                self.assertEqual(current, following)

    def test_custom_settings(self):
        calculator = RewardCalculator(RewardSettings(
            correct_answer=Decimal('2.5'),
            participation=Decimal('0'),
            streak_bonus=Decimal('1'),
            streak_interval=3,
        ))
        self.assertEqual(calculator.calculate(True, 3), Decimal('3.5'))
        self.assertEqual(calculator.calculate(True, 4), Decimal('2.5'))
        self.assertEqual(calculator.calculate(False, 3), Decimal('0'))

    def test_settings_from_config(self):
        settings = RewardSettings.from_config({
            'CORRECT_ANSWER': '20',
            'PARTICIPATION': '2',
            'STREAK_BONUS': '7',
            'STREAK_INTERVAL': 4,
        })
        self.assertEqual(settings.correct_answer, Decimal('20'))
        self.assertEqual(settings.streak_interval, 4)

    def test_negative_settings_rejected(self):
        with self.assertRaises(ValueError):
            RewardSettings(correct_answer=Decimal('-1'))
        with self.assertRaises(ValueError):
            RewardSettings(streak_interval=0)


if __name__ == '__main__':
    unittest.main()
