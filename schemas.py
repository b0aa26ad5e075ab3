"""
Request bodies for the mini-app API, one model per ``action``.

Bodies are camelCase on the wire; fields are snake_case in Python.
"""
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from config import LEADERBOARD_DEFAULT_LIMIT
from errors import BlitzError, ValidationError, error_response


class RequestSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra='ignore',
    )


class UserSchema(RequestSchema):
    fid: Optional[int] = None
    username: Optional[str] = None
    wallet_address: Optional[str] = None
    context: Optional[Dict[str, Any]] = None


# Quizzes

class QuestionSchema(RequestSchema):
    question: str
    options: List[str] = Field(..., min_length=1)
    correct_answer: str
    points: Optional[int] = Field(None, ge=0)
    time_limit: Optional[int] = Field(None, gt=0)


class CreateQuizSchema(RequestSchema):
    action: Literal['create']
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    difficulty: Literal['easy', 'medium', 'hard'] = 'medium'
    entry_fee: str = '0'
    prize_pool: str = '0'
    max_participants: Optional[int] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    questions: List[QuestionSchema] = Field(default_factory=list)
    host_fid: Optional[int] = None
    host_username: Optional[str] = None
    host_wallet_address: Optional[str] = None


class JoinQuizSchema(RequestSchema):
    action: Literal['join']
    quiz_id: str
    fid: int
    username: str
    wallet_address: Optional[str] = None


class SubmitAnswerSchema(RequestSchema):
    action: Literal['submit-answer']
    quiz_id: str
    fid: int
    question_id: str
    selected_answer: str
    time_spent: float = 0


class CompleteQuizSchema(RequestSchema):
    action: Literal['complete']
    quiz_id: str
    fid: int


class ClaimQuizRewardSchema(RequestSchema):
    action: Literal['claim-reward']
    quiz_id: str
    fid: int
    wallet_address: Optional[str] = None
    context: Optional[Dict[str, Any]] = None


class QuizStatusSchema(RequestSchema):
    action: Literal['activate', 'close']
    quiz_id: str
    fid: int


QuizAction = Annotated[
    Union[CreateQuizSchema, JoinQuizSchema, SubmitAnswerSchema, CompleteQuizSchema,
          ClaimQuizRewardSchema, QuizStatusSchema],
    Field(discriminator='action'),
]

# Leaderboard

class LeaderboardGetSchema(RequestSchema):
    action: Literal['get']
    limit: int = Field(LEADERBOARD_DEFAULT_LIMIT, ge=0)


class LeaderboardUpdateSchema(UserSchema):
    action: Literal['update']
    score: int = 0
    streak: int = 0


class LeaderboardClaimSchema(UserSchema):
    action: Literal['claim']


class AddPendingSchema(RequestSchema):
    action: Literal['addPending']
    fid: Optional[int] = None
    amount: Optional[str] = None


class GetPendingSchema(RequestSchema):
    action: Literal['getPending']
    fid: Optional[int] = None


LeaderboardAction = Annotated[
    Union[LeaderboardGetSchema, LeaderboardUpdateSchema, LeaderboardClaimSchema,
          AddPendingSchema, GetPendingSchema],
    Field(discriminator='action'),
]

# Single-player rounds

class GameResultSchema(UserSchema):
    score: int = 0
    streak: int = Field(0, ge=0)
    round_id: Optional[str] = None
    is_correct: bool = False
    question: Optional[str] = None
    selected_answer: Optional[str] = None
    correct_answer: Optional[str] = None


quiz_action_adapter = TypeAdapter(QuizAction)
leaderboard_action_adapter = TypeAdapter(LeaderboardAction)


def describe_validation_error(error) -> str:
    """Turn a pydantic ValidationError into a one-line message"""
    details = error.errors()
    if not details:
        return "Invalid request"
    first = details[0]
    if first.get('type') in ('union_tag_invalid', 'union_tag_not_found'):
        return "Invalid action"
    location = '.'.join(str(part) for part in first.get('loc', ()) if part is not None)
    return f"{location}: {first.get('msg')}" if location else first.get('msg', "Invalid request")


def error_payload(error):
    """(body, status) for known client/collaborator errors, None for anything else"""
    if isinstance(error, BlitzError):
        return error_response(error)
    if isinstance(error, PydanticValidationError):
        return {'success': False, 'error': describe_validation_error(error), 'kind': ValidationError.kind}, 400
    return None
