import logging

from errors import ValidationError
from models import GameResult, format_amount
from wallet_connect import resolve_wallet_address

logger = logging.getLogger(__name__)


class TriviaManager:
    """Single-player round flow: compute reward, stage it, refresh leaderboard"""

    def __init__(self, repository, calculator, ledger, leaderboard):
        self.repository = repository
        self.calculator = calculator
        self.ledger = ledger
        self.leaderboard = leaderboard

        logger.info("🎮 Trivia Manager initialized")

    def record_round(self, fid, username, score=0, streak=0, is_correct=False, round_id=None,
                     question=None, selected_answer=None, correct_answer=None,
                     wallet_address=None, context=None) -> dict:
        if not fid or not username:
            raise ValidationError("Missing user information")

        user_wallet = resolve_wallet_address(wallet_address, context, fid)

        reward = self.calculator.calculate(is_correct, streak)
        amount = format_amount(reward)
        streak_bonus = self.calculator.is_streak_bonus(is_correct, streak)

        self.repository.add_game_result(GameResult(
            fid=fid,
            username=username,
            score=score,
            streak=streak,
            is_correct=bool(is_correct),
            token_amount=amount,
            wallet_address=user_wallet,
            round_id=round_id,
            question=question,
            selected_answer=selected_answer,
            correct_answer=correct_answer,
        ))

        # Tokens go to pending claims instead of being minted per round
        pending_amount = self.ledger.add_pending(fid, reward) if reward > 0 else self.ledger.get_pending(fid)

        # Best effort - a leaderboard failure must not lose the staged reward
        try:
            self.leaderboard.upsert(fid, username, score, streak, user_wallet)
        except Exception as e:
            logger.error(f"❌ Failed to update leaderboard for {fid}: {e}")

        if is_correct:
            message = f"Correct! {amount} $BLITZ earned{' (with streak bonus!)' if streak_bonus else ''}"
        else:
            message = f"Good try! {amount} $BLITZ for participation"

        logger.info(f"🎯 Round recorded for {username} ({fid}): correct={bool(is_correct)} reward={amount}")

        return {
            'tokenReward': bool(is_correct),
            'tokenAmount': amount if is_correct else '0',
            'participationReward': not is_correct,
            'participationAmount': '0' if is_correct else amount,
            'streakBonus': streak_bonus,
            'pendingAmount': pending_amount,
            'walletAddress': user_wallet,
            'message': message,
        }

    def get_history(self, fid, limit=50) -> list:
        return [result.to_dict() for result in self.repository.list_game_results(fid, limit)]
