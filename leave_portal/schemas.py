from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Role = Literal["employee", "manager"]
LeaveStatus = Literal["Pending", "Approved", "Rejected"]

# Order matters: the first category found in a leave type wins on approval.
LEAVE_CATEGORIES = ("annual", "medical", "compassionate")


class CamelModel(BaseModel):
    # JSON keys are camelCase (userId, startDate, ...)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class User(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: int
    name: str
    email: str
    role: Role
    manager_id: Optional[int] = None


class LeaveBalance(CamelModel):
    annual: int
    medical: int
    compassionate: int


class LeaveRequest(CamelModel):
    id: int
    user_id: int
    type: str
    dates: str
    start_date: date
    end_date: date
    days: int
    status: LeaveStatus = "Pending"
    reason: str = ""
    created_at: datetime


class TeamRequest(CamelModel):
    id: int
    employee: str
    user_id: int
    type: str
    dates: str
    start_date: date
    end_date: date
    days: int
    status: LeaveStatus
    reason: Optional[str] = None


class LeaveStatistics(CamelModel):
    total_requests: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    total_days_taken: int = 0


class LeaveRequestIn(CamelModel):
    user_id: int
    type: str
    start_date: date  # ISO YYYY-MM-DD
    end_date: date    # ISO YYYY-MM-DD inclusive
    days: Optional[int] = None  # defaults to the inclusive length of the range
    reason: str = ""


class LeaveDecisionIn(CamelModel):
    status: LeaveStatus
    # unknown or missing manager is reported as 403 by the decision itself
    manager_id: Optional[int] = None


class ChatMessageIn(CamelModel):
    message: Optional[str] = None
    user_id: Optional[int] = None


class ChatReply(CamelModel):
    role: Literal["assistant"] = "assistant"
    content: str
    timestamp: datetime
