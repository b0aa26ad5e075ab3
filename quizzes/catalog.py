import logging
import time
import uuid
from datetime import datetime
from typing import List, Optional

from config import QUIZ_CONFIG
from errors import (AlreadyJoined, InvalidStatusTransition, NotFound, NotJoinable, NotQuizHost,
                    QuizFull, ValidationError)
from locking import keyed_lock
from models import (DIFFICULTIES, QUIZ_STATUSES, Participant, Question, Quiz, format_amount,
                    parse_amount, utcnow)

logger = logging.getLogger(__name__)

# draft -> active -> completed
STATUS_TRANSITIONS = {
    'draft': ('active',),
    'active': ('completed',),
    'completed': (),
}


def _parse_time(value, field_name):
    if value is None or value == '' or isinstance(value, datetime):
        return value or None
    try:
        return datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        raise ValidationError(f"Invalid {field_name}")


def _get(data, key, default=None):
    value = data.get(key) if isinstance(data, dict) else getattr(data, key, None)
    return default if value is None else value


class QuizCatalog:
    """Quiz definitions, their questions and participant rosters"""

    def __init__(self, repository, settings=None, locks=None):
        self.repository = repository
        self.settings = settings or QUIZ_CONFIG
        self.locks = locks or keyed_lock

        default_status = self.settings['DEFAULT_STATUS']
        if default_status not in ('draft', 'active'):
            raise ValueError(f"Invalid default quiz status: {default_status}")

        logger.info(f"📚 Quiz Catalog initialized (new quizzes start as '{default_status}')")

    def lock_key(self, quiz_id):
        return f"quiz:{quiz_id}"

    # Creation

    def _build_questions(self, quiz_id, questions) -> List[Question]:
        built = []
        for index, item in enumerate(questions):
            text = _get(item, 'question')
            options = list(_get(item, 'options', []))
            correct_answer = _get(item, 'correct_answer')

            if not text or not options:
                raise ValidationError(f"Question {index + 1} needs text and options")
            if correct_answer not in options:
                raise ValidationError(f"Question {index + 1}: correct answer must be one of the options")

            built.append(Question(
                id=f"q_{quiz_id}_{index}",
                quiz_id=quiz_id,
                question=text,
                options=options,
                correct_answer=correct_answer,
                points=int(_get(item, 'points', self.settings['DEFAULT_POINTS'])),
                time_limit=int(_get(item, 'time_limit', self.settings['DEFAULT_TIME_LIMIT'])),
                order=index,
            ))
        return built

    def create(self, data) -> Quiz:
        """Validate and store a quiz together with its questions"""
        title = _get(data, 'title')
        description = _get(data, 'description')
        category = _get(data, 'category')
        host_fid = _get(data, 'host_fid')
        host_username = _get(data, 'host_username')

        if not title or not description or not category or not host_fid or not host_username:
            raise ValidationError("Missing required fields")

        try:
            entry_fee = parse_amount(_get(data, 'entry_fee', '0'))
            prize_pool = parse_amount(_get(data, 'prize_pool', '0'))
        except ValueError:
            raise ValidationError("Invalid amounts")
        if entry_fee < 0 or prize_pool < 0:
            raise ValidationError("Invalid amounts")

        difficulty = _get(data, 'difficulty', 'medium')
        if difficulty not in DIFFICULTIES:
            raise ValidationError(f"Invalid difficulty: {difficulty}")

        max_participants = int(_get(data, 'max_participants', self.settings['DEFAULT_MAX_PARTICIPANTS']))
        if max_participants < 1:
            raise ValidationError("maxParticipants must be at least 1")

        questions = _get(data, 'questions', [])
        if not questions:
            raise ValidationError("At least one question is required")

        quiz_id = f"quiz_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"
        now = utcnow()

        quiz = Quiz(
            id=quiz_id,
            title=title,
            description=description,
            host_fid=host_fid,
            host_username=host_username,
            host_wallet_address=_get(data, 'host_wallet_address'),
            category=category,
            difficulty=difficulty,
            entry_fee=format_amount(entry_fee),
            prize_pool=format_amount(prize_pool),
            max_participants=max_participants,
            current_participants=0,
            status=self.settings['DEFAULT_STATUS'],
            start_time=_parse_time(_get(data, 'start_time'), 'startTime') or now,
            end_time=_parse_time(_get(data, 'end_time'), 'endTime'),
            created_at=now,
            updated_at=now,
        )

        self.repository.create_quiz(quiz, self._build_questions(quiz_id, questions))

        logger.info(f"📝 Quiz created: {quiz_id} '{title}' by {host_username} ({len(questions)} questions)")
        return quiz

    # Reads

    def get(self, quiz_id) -> Quiz:
        quiz = self.repository.get_quiz(quiz_id)
        if not quiz:
            raise NotFound("Quiz not found")
        return quiz

    def list_questions(self, quiz_id) -> List[Question]:
        self.get(quiz_id)
        return self.repository.get_questions(quiz_id)

    def list(self, category: Optional[str] = None, status: Optional[str] = None,
             host_fid: Optional[int] = None) -> List[Quiz]:
        quizzes = self.repository.list_quizzes()

        if category:
            quizzes = [q for q in quizzes if q.category == category]
        if status:
            quizzes = [q for q in quizzes if q.status == status]
        if host_fid:
            quizzes = [q for q in quizzes if q.host_fid == host_fid]

        # Newest first
        return sorted(quizzes, key=lambda q: q.created_at, reverse=True)

    def featured(self) -> List[Quiz]:
        quizzes = [q for q in self.repository.list_quizzes()
                   if q.status == 'active' and q.current_participants > 0]
        quizzes.sort(key=lambda q: q.current_participants, reverse=True)
        return quizzes[:self.settings['FEATURED_LIMIT']]

    def trending(self) -> List[Quiz]:
        quizzes = [q for q in self.repository.list_quizzes() if q.status == 'active']
        # Prize pool weighted by participants
        quizzes.sort(key=lambda q: parse_amount(q.prize_pool) * q.current_participants, reverse=True)
        return quizzes[:self.settings['TRENDING_LIMIT']]

    # Roster

    def join(self, quiz_id, fid, username, wallet_address=None) -> Participant:
        with self.locks.hold(self.lock_key(quiz_id)):
            quiz = self.get(quiz_id)

            if quiz.status != 'active':
                raise NotJoinable()
            if quiz.is_full:
                raise QuizFull()
            if self.repository.get_participant(quiz_id, fid):
                raise AlreadyJoined()

            participant = Participant(
                id=f"participant_{quiz_id}_{fid}",
                quiz_id=quiz_id,
                fid=fid,
                username=username,
                wallet_address=wallet_address,
                joined_at=utcnow(),
            )

            quiz.current_participants += 1
            quiz.updated_at = utcnow()
            self.repository.add_participant(quiz, participant)

        logger.info(f"🙋 {username} ({fid}) joined {quiz_id} ({quiz.current_participants}/{quiz.max_participants})")
        return participant

    # Status

    def set_status(self, quiz_id, fid, new_status) -> Quiz:
        if new_status not in QUIZ_STATUSES:
            raise ValidationError(f"Invalid status: {new_status}")

        with self.locks.hold(self.lock_key(quiz_id)):
            quiz = self.get(quiz_id)
            if quiz.host_fid != fid:
                raise NotQuizHost()
            if new_status not in STATUS_TRANSITIONS[quiz.status]:
                raise InvalidStatusTransition(f"Cannot move quiz from '{quiz.status}' to '{new_status}'")

            quiz.status = new_status
            quiz.updated_at = utcnow()
            self.repository.save_quiz(quiz)

        logger.info(f"🔁 Quiz {quiz_id} is now '{new_status}'")
        return quiz

    def activate(self, quiz_id, fid) -> Quiz:
        return self.set_status(quiz_id, fid, 'active')

    def close(self, quiz_id, fid) -> Quiz:
        return self.set_status(quiz_id, fid, 'completed')
