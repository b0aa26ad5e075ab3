"""
Storage interface for quizzes, rosters, the leaderboard and pending claims.

Services only talk to this interface; the backend is chosen from
``config.STORAGE_BACKEND`` when the app is built.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from models import GameResult, LeaderboardEntry, Participant, PendingClaim, Question, Quiz


class Repository(ABC):

    # Quizzes

    @abstractmethod
    def create_quiz(self, quiz: Quiz, questions: List[Question]) -> None:
        """Store a quiz, its questions and an empty roster together or not at all"""

    @abstractmethod
    def get_quiz(self, quiz_id: str) -> Optional[Quiz]:
        pass

    @abstractmethod
    def list_quizzes(self) -> List[Quiz]:
        pass

    @abstractmethod
    def save_quiz(self, quiz: Quiz) -> None:
        pass

    @abstractmethod
    def get_questions(self, quiz_id: str) -> List[Question]:
        """Questions ordered by ``order``"""

    # Participants

    @abstractmethod
    def get_participants(self, quiz_id: str) -> List[Participant]:
        """Roster in join order"""

    @abstractmethod
    def get_participant(self, quiz_id: str, fid: int) -> Optional[Participant]:
        pass

    @abstractmethod
    def add_participant(self, quiz: Quiz, participant: Participant) -> None:
        """Append to the roster and save the bumped participant count as one write"""

    @abstractmethod
    def save_participant(self, participant: Participant) -> None:
        pass

    # Leaderboard

    @abstractmethod
    def save_leaderboard_entry(self, entry: LeaderboardEntry) -> None:
        pass

    @abstractmethod
    def list_leaderboard_entries(self) -> List[LeaderboardEntry]:
        """Entries in first-insert order"""

    # Pending claims

    @abstractmethod
    def get_pending_claim(self, fid: int) -> Optional[PendingClaim]:
        pass

    @abstractmethod
    def save_pending_claim(self, claim: PendingClaim) -> None:
        pass

    @abstractmethod
    def delete_pending_claim(self, fid: int) -> None:
        pass

    # Round history

    @abstractmethod
    def add_game_result(self, result: GameResult) -> None:
        pass

    @abstractmethod
    def list_game_results(self, fid: int, limit: int = 50) -> List[GameResult]:
        """Most recent first"""
