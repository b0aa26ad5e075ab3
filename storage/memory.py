import copy
import logging
import threading
from typing import Dict, List, Optional

from models import GameResult, LeaderboardEntry, Participant, PendingClaim, Question, Quiz
from .base import Repository

logger = logging.getLogger(__name__)


class InMemoryRepository(Repository):
    """Process-local store; every read and write copies so callers never share state"""

    def __init__(self):
        self._lock = threading.RLock()
        self._quizzes: Dict[str, Quiz] = {}
        self._questions: Dict[str, List[Question]] = {}
        self._participants: Dict[str, List[Participant]] = {}
        self._leaderboard: Dict[int, LeaderboardEntry] = {}
        self._pending: Dict[int, PendingClaim] = {}
        self._results: List[GameResult] = []

        logger.info("🗄️ In-memory repository initialized")

    def create_quiz(self, quiz, questions):
        with self._lock:
            if quiz.id in self._quizzes:
                raise KeyError(f"Quiz {quiz.id} already exists")
            self._quizzes[quiz.id] = copy.deepcopy(quiz)
            self._questions[quiz.id] = copy.deepcopy(list(questions))
            self._participants[quiz.id] = []

    def get_quiz(self, quiz_id) -> Optional[Quiz]:
        with self._lock:
            return copy.deepcopy(self._quizzes.get(quiz_id))

    def list_quizzes(self) -> List[Quiz]:
        with self._lock:
            return copy.deepcopy(list(self._quizzes.values()))

    def save_quiz(self, quiz):
        with self._lock:
            if quiz.id not in self._quizzes:
                raise KeyError(f"Quiz {quiz.id} not found")
            self._quizzes[quiz.id] = copy.deepcopy(quiz)

    def get_questions(self, quiz_id) -> List[Question]:
        with self._lock:
            questions = self._questions.get(quiz_id, [])
            return copy.deepcopy(sorted(questions, key=lambda q: q.order))

    def get_participants(self, quiz_id) -> List[Participant]:
        with self._lock:
            return copy.deepcopy(self._participants.get(quiz_id, []))

    def get_participant(self, quiz_id, fid) -> Optional[Participant]:
        with self._lock:
            for participant in self._participants.get(quiz_id, []):
                if participant.fid == fid:
                    return copy.deepcopy(participant)
            return None

    def add_participant(self, quiz, participant):
        with self._lock:
            if quiz.id not in self._quizzes:
                raise KeyError(f"Quiz {quiz.id} not found")
            self._participants.setdefault(quiz.id, []).append(copy.deepcopy(participant))
            self._quizzes[quiz.id] = copy.deepcopy(quiz)

    def save_participant(self, participant):
        with self._lock:
            roster = self._participants.get(participant.quiz_id, [])
            for index, existing in enumerate(roster):
                if existing.fid == participant.fid:
                    roster[index] = copy.deepcopy(participant)
                    return
            raise KeyError(f"Participant {participant.id} not found")

    def save_leaderboard_entry(self, entry):
        with self._lock:
            self._leaderboard[entry.fid] = copy.deepcopy(entry)

    def list_leaderboard_entries(self) -> List[LeaderboardEntry]:
        with self._lock:
            return copy.deepcopy(list(self._leaderboard.values()))

    def get_pending_claim(self, fid) -> Optional[PendingClaim]:
        with self._lock:
            return copy.deepcopy(self._pending.get(fid))

    def save_pending_claim(self, claim):
        with self._lock:
            self._pending[claim.fid] = copy.deepcopy(claim)

    def delete_pending_claim(self, fid):
        with self._lock:
            self._pending.pop(fid, None)

    def add_game_result(self, result):
        with self._lock:
            self._results.append(copy.deepcopy(result))

    def list_game_results(self, fid, limit=50) -> List[GameResult]:
        with self._lock:
            results = [r for r in reversed(self._results) if r.fid == fid]
            return copy.deepcopy(results[:limit])
