import logging
from typing import List, Optional

from models import (GameResult, LeaderboardEntry, Participant, PendingClaim, Question, Quiz,
                    format_amount, parse_amount)
from supabase_client import get_supabase_client, retry_on_connection_error
from .base import Repository

logger = logging.getLogger(__name__)


def _amount_str(value):
    # NUMERIC columns come back as JSON numbers
    if value is None:
        return None
    return format_amount(parse_amount(value))


def _quiz_from_row(row) -> Quiz:
    quiz = Quiz.from_record(row)
    quiz.entry_fee = _amount_str(quiz.entry_fee)
    quiz.prize_pool = _amount_str(quiz.prize_pool)
    return quiz


def _participant_from_row(row) -> Participant:
    participant = Participant.from_record(row)
    participant.reward_amount = _amount_str(participant.reward_amount)
    return participant


class SupabaseRepository(Repository):
    """Repository backed by the Supabase tables in supabase_client.py"""

    def __init__(self, client=None):
        self.supabase = client or get_supabase_client()
        if not self.supabase:
            raise RuntimeError("Supabase not configured")

        logger.info("🗄️ Supabase repository initialized")

    @retry_on_connection_error()
    def create_quiz(self, quiz, questions):
        self.supabase.table('quizzes').insert(quiz.to_record()).execute()
        try:
            if questions:
                self.supabase.table('quiz_questions')\
                    .insert([q.to_record() for q in questions])\
                    .execute()
        except Exception as e:
            # Roll back the quiz row so a quiz never exists without its questions
            logger.error(f"❌ Failed to store questions for {quiz.id}, removing quiz: {e}")
            self.supabase.table('quizzes').delete().eq('id', quiz.id).execute()
            raise

    @retry_on_connection_error()
    def get_quiz(self, quiz_id) -> Optional[Quiz]:
        result = self.supabase.table('quizzes')\
            .select('*')\
            .eq('id', quiz_id)\
            .execute()
        if not result.data:
            return None
        return _quiz_from_row(result.data[0])

    @retry_on_connection_error()
    def list_quizzes(self) -> List[Quiz]:
        result = self.supabase.table('quizzes').select('*').execute()
        return [_quiz_from_row(row) for row in (result.data or [])]

    @retry_on_connection_error()
    def save_quiz(self, quiz):
        self.supabase.table('quizzes')\
            .update(quiz.to_record())\
            .eq('id', quiz.id)\
            .execute()

    @retry_on_connection_error()
    def get_questions(self, quiz_id) -> List[Question]:
        result = self.supabase.table('quiz_questions')\
            .select('*')\
            .eq('quiz_id', quiz_id)\
            .order('order')\
            .execute()
        return [Question.from_record(row) for row in (result.data or [])]

    @retry_on_connection_error()
    def get_participants(self, quiz_id) -> List[Participant]:
        result = self.supabase.table('quiz_participants')\
            .select('*')\
            .eq('quiz_id', quiz_id)\
            .order('joined_at')\
            .execute()
        return [_participant_from_row(row) for row in (result.data or [])]

    @retry_on_connection_error()
    def get_participant(self, quiz_id, fid) -> Optional[Participant]:
        result = self.supabase.table('quiz_participants')\
            .select('*')\
            .eq('quiz_id', quiz_id)\
            .eq('fid', fid)\
            .execute()
        if not result.data:
            return None
        return _participant_from_row(result.data[0])

    @retry_on_connection_error()
    def add_participant(self, quiz, participant):
        self.supabase.table('quiz_participants').insert(participant.to_record()).execute()
        try:
            self.supabase.table('quizzes')\
                .update({
                    'current_participants': quiz.current_participants,
                    'updated_at': quiz.updated_at.isoformat()
                })\
                .eq('id', quiz.id)\
                .execute()
        except Exception as e:
            logger.error(f"❌ Failed to bump participant count for {quiz.id}, removing participant: {e}")
            self.supabase.table('quiz_participants').delete().eq('id', participant.id).execute()
            raise

    @retry_on_connection_error()
    def save_participant(self, participant):
        self.supabase.table('quiz_participants')\
            .update(participant.to_record())\
            .eq('id', participant.id)\
            .execute()

    @retry_on_connection_error()
    def save_leaderboard_entry(self, entry):
        self.supabase.table('leaderboard').upsert(entry.to_record()).execute()

    @retry_on_connection_error()
    def list_leaderboard_entries(self) -> List[LeaderboardEntry]:
        result = self.supabase.table('leaderboard').select('*').execute()
        return [LeaderboardEntry.from_record(row) for row in (result.data or [])]

    @retry_on_connection_error()
    def get_pending_claim(self, fid) -> Optional[PendingClaim]:
        result = self.supabase.table('pending_claims')\
            .select('*')\
            .eq('fid', fid)\
            .execute()
        if not result.data:
            return None
        claim = PendingClaim.from_record(result.data[0])
        claim.amount = _amount_str(claim.amount)
        return claim

    @retry_on_connection_error()
    def save_pending_claim(self, claim):
        self.supabase.table('pending_claims').upsert(claim.to_record()).execute()

    @retry_on_connection_error()
    def delete_pending_claim(self, fid):
        self.supabase.table('pending_claims').delete().eq('fid', fid).execute()

    @retry_on_connection_error()
    def add_game_result(self, result):
        self.supabase.table('game_results').insert(result.to_record()).execute()

    @retry_on_connection_error()
    def list_game_results(self, fid, limit=50) -> List[GameResult]:
        result = self.supabase.table('game_results')\
            .select('*')\
            .eq('fid', fid)\
            .order('created_at', desc=True)\
            .limit(limit)\
            .execute()
        results = []
        for row in (result.data or []):
            game_result = GameResult.from_record(row)
            game_result.token_amount = _amount_str(game_result.token_amount)
            results.append(game_result)
        return results
