"""
Records shared by the trivia game and the quiz marketplace.

``to_dict`` renders the camelCase JSON the mini-app front end expects,
``to_record`` / ``from_record`` map to snake_case database rows.
"""
import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_DOWN, getcontext, localcontext
from typing import Any, Dict, List, Optional

from pydantic.alias_generators import to_camel

QUIZ_STATUSES = ('draft', 'active', 'completed')
DIFFICULTIES = ('easy', 'medium', 'hard')

# BLITZ has 18 decimals like ether
TOKEN_QUANTUM = Decimal('1e-18')

# Largest amount whose wei value still fits in a uint256
MAX_TOKEN_AMOUNT = Decimal(f"{2 ** 256 - 1}e-18")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def amount_context():
    """Decimal context wide enough for any uint256 wei value at full resolution"""
    context = getcontext().copy()
    context.prec = 96
    return localcontext(context)


def parse_amount(value) -> Decimal:
    """Parse a token amount, raising ValueError on anything non-numeric or out of uint256 range"""
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, TypeError):
            raise ValueError(f"Invalid amount: {value!r}")
    if not amount.is_finite() or amount.copy_abs() > MAX_TOKEN_AMOUNT:
        raise ValueError(f"Invalid amount: {value!r}")
    return amount


def quantize_amount(amount: Decimal) -> Decimal:
    """Truncate to whole wei"""
    with amount_context():
        return amount.quantize(TOKEN_QUANTUM, rounding=ROUND_DOWN)


def format_amount(amount: Decimal) -> str:
    """Render an amount without exponent or trailing zeros ("50", "12.5")"""
    with amount_context():
        amount = quantize_amount(amount).normalize()
    if amount == 0:
        return '0'
    return format(amount, 'f')


def _parse_time(value):
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace('Z', '+00:00'))


def _json_value(value, camel=True):
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, list):
        return [_json_value(item, camel) for item in value]
    if dataclasses.is_dataclass(value):
        return value.to_dict() if camel else value.to_record()
    return value


class _Record:
    """Serialization helpers for the dataclasses below"""

    _time_fields = ()

    def to_dict(self) -> Dict[str, Any]:
        return {to_camel(f.name): _json_value(getattr(self, f.name))
                for f in dataclasses.fields(self)}

    def to_record(self) -> Dict[str, Any]:
        return {f.name: _json_value(getattr(self, f.name), camel=False)
                for f in dataclasses.fields(self)}

    @classmethod
    def from_record(cls, row: Dict[str, Any]):
        names = {f.name for f in dataclasses.fields(cls)}
        values = {k: v for k, v in row.items() if k in names}
        for name in cls._time_fields:
            if name in values:
                values[name] = _parse_time(values[name])
        return cls(**values)


@dataclass
class Quiz(_Record):
    id: str
    title: str
    description: str
    host_fid: int
    host_username: str
    host_wallet_address: Optional[str]
    category: str
    difficulty: str
    entry_fee: str
    prize_pool: str
    max_participants: int
    current_participants: int = 0
    status: str = 'active'
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    _time_fields = ('start_time', 'end_time', 'created_at', 'updated_at')

    @property
    def is_full(self) -> bool:
        return self.current_participants >= self.max_participants


@dataclass
class Question(_Record):
    id: str
    quiz_id: str
    question: str
    options: List[str]
    correct_answer: str
    points: int = 10
    time_limit: int = 30
    order: int = 0


@dataclass
class Answer(_Record):
    id: str
    participant_id: str
    question_id: str
    selected_answer: str
    is_correct: bool
    time_spent: float
    points_earned: int
    answered_at: datetime = field(default_factory=utcnow)

    _time_fields = ('answered_at',)


@dataclass
class Participant(_Record):
    id: str
    quiz_id: str
    fid: int
    username: str
    wallet_address: Optional[str] = None
    score: int = 0
    streak: int = 0
    answers: List[Answer] = field(default_factory=list)
    joined_at: datetime = field(default_factory=utcnow)
    completed_at: Optional[datetime] = None
    reward_amount: Optional[str] = None
    reward_tx_hash: Optional[str] = None

    _time_fields = ('joined_at', 'completed_at')

    @classmethod
    def from_record(cls, row):
        participant = super().from_record(row)
        participant.answers = [a if isinstance(a, Answer) else Answer.from_record(a)
                               for a in (participant.answers or [])]
        return participant

    def find_answer(self, question_id: str) -> Optional[Answer]:
        for answer in self.answers:
            if answer.question_id == question_id:
                return answer
        return None


@dataclass
class LeaderboardEntry(_Record):
    fid: int
    username: str
    score: int = 0
    streak: int = 0
    last_played: datetime = field(default_factory=utcnow)
    wallet_address: Optional[str] = None

    _time_fields = ('last_played',)


@dataclass
class PendingClaim(_Record):
    fid: int
    amount: str
    updated_at: datetime = field(default_factory=utcnow)

    _time_fields = ('updated_at',)


@dataclass
class GameResult(_Record):
    fid: int
    username: str
    score: int
    streak: int
    is_correct: bool
    token_amount: str
    wallet_address: Optional[str] = None
    round_id: Optional[str] = None
    question: Optional[str] = None
    selected_answer: Optional[str] = None
    correct_answer: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)

    _time_fields = ('created_at',)
