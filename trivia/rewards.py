from dataclasses import dataclass
from decimal import Decimal

from config import REWARDS_CONFIG
from models import parse_amount


@dataclass(frozen=True)
class RewardSettings:
    correct_answer: Decimal = Decimal('10')
    participation: Decimal = Decimal('1')
    streak_bonus: Decimal = Decimal('5')
    streak_interval: int = 5

    def __post_init__(self):
        for name in ('correct_answer', 'participation', 'streak_bonus'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if self.streak_interval < 1:
            raise ValueError("streak_interval must be at least 1")

    @classmethod
    def from_config(cls, config=None):
        config = config or REWARDS_CONFIG
        return cls(
            correct_answer=parse_amount(config['CORRECT_ANSWER']),
            participation=parse_amount(config['PARTICIPATION']),
            streak_bonus=parse_amount(config['STREAK_BONUS']),
            streak_interval=int(config['STREAK_INTERVAL']),
        )


class RewardCalculator:
    """Maps a trivia answer to a BLITZ reward"""

    def __init__(self, settings: RewardSettings = None):
        self.settings = settings or RewardSettings()

    def is_streak_bonus(self, is_correct: bool, streak: int) -> bool:
        return bool(is_correct) and streak > 0 and streak % self.settings.streak_interval == 0

    def calculate(self, is_correct: bool, streak: int) -> Decimal:
        """
        Args:
            is_correct: whether the answer was right
            streak: consecutive correct answers including this one
        """
        if not is_correct:
            return self.settings.participation

        reward = self.settings.correct_answer
        if self.is_streak_bonus(is_correct, streak):
            reward += self.settings.streak_bonus
        return reward
