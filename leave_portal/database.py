import logging
from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from .schemas import LeaveBalance, LeaveRequest, User

logger = logging.getLogger(__name__)


class LeaveStore(ABC):
    """Directory of users plus the leave ledger (balances and requests)."""

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def list_users(self) -> List[User]: ...

    @abstractmethod
    def get_balance(self, user_id: int) -> Optional[LeaveBalance]: ...

    @abstractmethod
    def get_request(self, request_id: int) -> Optional[LeaveRequest]: ...

    @abstractmethod
    def list_requests(self) -> List[LeaveRequest]: ...

    @abstractmethod
    def next_request_id(self) -> int: ...

    @abstractmethod
    def add_request(self, request: LeaveRequest) -> LeaveRequest: ...

    @abstractmethod
    def update_request_status(self, request_id: int, status: str) -> LeaveRequest: ...

    @abstractmethod
    def update_balance(self, user_id: int, balance: LeaveBalance) -> LeaveBalance: ...


class InMemoryLeaveStore(LeaveStore):
    def __init__(self):
        self.users: Dict[int, User] = {}
        self.balances: Dict[int, LeaveBalance] = {}
        self.requests: List[LeaveRequest] = []
        self._last_request_id = 0

    def add_user(self, user: User, balance: Optional[LeaveBalance] = None):
        self.users[user.id] = user
        if balance is not None:
            self.balances[user.id] = balance

    def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def list_users(self) -> List[User]:
        return list(self.users.values())

    def get_balance(self, user_id: int) -> Optional[LeaveBalance]:
        return self.balances.get(user_id)

    def get_request(self, request_id: int) -> Optional[LeaveRequest]:
        for req in self.requests:
            if req.id == request_id:
                return req
        return None

    def list_requests(self) -> List[LeaveRequest]:
        return list(self.requests)

    def next_request_id(self) -> int:
        return self._last_request_id + 1

    def add_request(self, request: LeaveRequest) -> LeaveRequest:
        if self.get_request(request.id) is not None:
            raise ValueError(f"Duplicate leave request id {request.id}")
        self.requests.append(request)
        self._last_request_id = max(self._last_request_id, request.id)
        return request

    def update_request_status(self, request_id: int, status: str) -> LeaveRequest:
        request = self.get_request(request_id)
        if request is None:
            raise KeyError(request_id)
        request.status = status
        return request

    def update_balance(self, user_id: int, balance: LeaveBalance) -> LeaveBalance:
        self.balances[user_id] = balance
        return balance


def _utc(stamp: str) -> datetime:
    return datetime.fromisoformat(stamp).replace(tzinfo=timezone.utc)


def seed_sample_data(store: InMemoryLeaveStore):
    # users + balances
    for user, balance in [
        (User(id=1, name="John Doe", email="john.doe@uob.com", role="employee", manager_id=3),
         LeaveBalance(annual=14, medical=12, compassionate=3)),
        (User(id=2, name="Sarah Chen", email="sarah.chen@uob.com", role="employee", manager_id=3),
         LeaveBalance(annual=10, medical=14, compassionate=3)),
        (User(id=3, name="Michael Tan", email="michael.tan@uob.com", role="manager"),
         LeaveBalance(annual=18, medical=10, compassionate=3)),
        (User(id=4, name="Alice Wong", email="alice.wong@uob.com", role="employee", manager_id=3),
         LeaveBalance(annual=12, medical=15, compassionate=3)),
    ]:
        store.add_user(user, balance)

    # sample history
    for req_id, user_id, leave_type, dates, start, end, days, status, reason, created in [
        (1, 1, "Annual Leave", "Dec 20-22, 2025", "2025-12-20", "2025-12-22", 3, "Pending",
         "Family vacation", "2025-12-10T10:00:00"),
        (2, 1, "Medical Leave", "Dec 10, 2025", "2025-12-10", "2025-12-10", 1, "Approved",
         "Medical checkup", "2025-12-05T09:00:00"),
        (3, 1, "Annual Leave", "Nov 15-17, 2025", "2025-11-15", "2025-11-17", 3, "Approved",
         "Personal matters", "2025-11-01T14:00:00"),
        (4, 2, "Annual Leave", "Dec 23-27, 2025", "2025-12-23", "2025-12-27", 5, "Pending",
         "Year-end holiday", "2025-12-12T11:00:00"),
        (5, 4, "Medical Leave", "Dec 18, 2025", "2025-12-18", "2025-12-18", 1, "Pending",
         "Doctor appointment", "2025-12-14T08:30:00"),
    ]:
        store.add_request(LeaveRequest(
            id=req_id, user_id=user_id, type=leave_type, dates=dates,
            start_date=date.fromisoformat(start), end_date=date.fromisoformat(end),
            days=days, status=status, reason=reason, created_at=_utc(created),
        ))
    logger.info("Seeded %d users and %d leave requests", len(store.users), len(store.requests))
    return store


def days_between(start: date, end: date) -> int:
    if end < start:
        raise ValueError("end_date cannot be before start_date")
    return (end - start).days + 1
