import logging

from errors import AlreadyAnswered, AlreadyCompleted, NotFound, NotParticipant
from models import Answer, utcnow

logger = logging.getLogger(__name__)


class QuizSession:
    """Scores a participant's answers and marks completion"""

    def __init__(self, repository, catalog):
        self.repository = repository
        self.catalog = catalog

    def _participant(self, quiz_id, fid):
        participant = self.repository.get_participant(quiz_id, fid)
        if not participant:
            raise NotParticipant()
        return participant

    def submit_answer(self, quiz_id, fid, question_id, selected_answer, time_spent=0) -> dict:
        with self.catalog.locks.hold(self.catalog.lock_key(quiz_id)):
            self.catalog.get(quiz_id)

            question = next((q for q in self.repository.get_questions(quiz_id) if q.id == question_id), None)
            if not question:
                raise NotFound("Question not found")

            participant = self._participant(quiz_id, fid)
            if participant.completed_at:
                raise AlreadyCompleted()
            if participant.find_answer(question_id):
                raise AlreadyAnswered()

            is_correct = selected_answer == question.correct_answer
            points_earned = question.points if is_correct else 0

            participant.answers.append(Answer(
                id=f"answer_{question_id}_{fid}",
                participant_id=participant.id,
                question_id=question_id,
                selected_answer=selected_answer,
                is_correct=is_correct,
                time_spent=time_spent,
                points_earned=points_earned,
                answered_at=utcnow(),
            ))
            participant.score += points_earned
            participant.streak = participant.streak + 1 if is_correct else 0

            # Score, streak and answer list land in one write
            self.repository.save_participant(participant)

        return {
            'isCorrect': is_correct,
            'pointsEarned': points_earned,
            'newScore': participant.score,
            'newStreak': participant.streak,
        }

    def complete(self, quiz_id, fid) -> int:
        with self.catalog.locks.hold(self.catalog.lock_key(quiz_id)):
            self.catalog.get(quiz_id)
            participant = self._participant(quiz_id, fid)

            if participant.completed_at:
                raise AlreadyCompleted()

            participant.completed_at = utcnow()
            self.repository.save_participant(participant)

        logger.info(f"🏁 {participant.username} ({fid}) completed {quiz_id} with {participant.score} points")
        return participant.score
