"""Leave request lifecycle: submission, manager decisions and read-only views."""
import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from .database import LeaveStore, days_between
from .errors import InsufficientBalance, NotFound, Unauthorized, ValidationFailure
from .schemas import LEAVE_CATEGORIES, LeaveRequest, LeaveStatistics, TeamRequest

logger = logging.getLogger(__name__)

# English abbreviations regardless of the process locale
MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def leave_categories(leave_type: str) -> List[str]:
    """Balance categories named (case-insensitively) inside a free-text leave type."""
    lowered = leave_type.lower()
    return [category for category in LEAVE_CATEGORIES if category in lowered]


def format_date_range(start: date, end: date) -> str:
    """'Dec 10, 2025' for a single day, 'Dec 20-22, 2025' for a range.

    Ranges always print the start month and the end year.
    """
    if start == end:
        return f"{MONTH_ABBR[start.month - 1]} {start.day}, {start.year}"
    return f"{MONTH_ABBR[start.month - 1]} {start.day}-{end.day}, {end.year}"


def submit(store: LeaveStore, user_id: int, leave_type: str, start_date: date, end_date: date,
           days: Optional[int] = None, reason: str = "") -> LeaveRequest:
    balance = store.get_balance(user_id)
    if balance is None:
        raise NotFound("Balance not found")

    try:
        span = days_between(start_date, end_date)
    except ValueError as e:
        raise ValidationFailure(str(e))
    if days is None:
        days = span
    if days <= 0:
        raise ValidationFailure("Leave duration must be at least 1 day")

    for category in leave_categories(leave_type):
        if getattr(balance, category) < days:
            logger.info("Rejected %s-day %r request for user %s: insufficient %s balance",
                        days, leave_type, user_id, category)
            raise InsufficientBalance(category)

    request = store.add_request(LeaveRequest(
        id=store.next_request_id(),
        user_id=user_id,
        type=leave_type,
        dates=format_date_range(start_date, end_date),
        start_date=start_date,
        end_date=end_date,
        days=days,
        status="Pending",
        reason=reason,
        created_at=datetime.now(timezone.utc),
    ))
    logger.info("User %s submitted leave request %s (%s, %s, %s days)",
                user_id, request.id, leave_type, request.dates, days)
    return request


def decide(store: LeaveStore, request_id: int, status: str, manager_id: Optional[int]) -> LeaveRequest:
    request = store.get_request(request_id)
    if request is None:
        raise NotFound("Request not found")

    manager = store.get_user(manager_id) if manager_id is not None else None
    if manager is None or manager.role != "manager":
        raise Unauthorized("Unauthorized")

    if request.status != "Pending":
        # No idempotency guard: an Approved decision is applied again in full.
        logger.warning("Leave request %s re-decided by manager %s (%s -> %s)",
                       request_id, manager_id, request.status, status)

    request = store.update_request_status(request_id, status)

    if status == "Approved":
        balance = store.get_balance(request.user_id)
        matched = leave_categories(request.type)
        if balance is not None and matched:
            category = matched[0]
            setattr(balance, category, getattr(balance, category) - request.days)
            store.update_balance(request.user_id, balance)
            logger.info("Deducted %s %s day(s) from user %s", request.days, category, request.user_id)

    logger.info("Manager %s set leave request %s to %s", manager_id, request_id, status)
    return request


def list_user_requests(store: LeaveStore, user_id: int) -> List[LeaveRequest]:
    return sorted((r for r in store.list_requests() if r.user_id == user_id),
                  key=lambda r: r.created_at, reverse=True)


def team_requests(store: LeaveStore, manager_id: int) -> List[TeamRequest]:
    team_ids = {u.id for u in store.list_users() if u.manager_id == manager_id}
    result = []
    for req in store.list_requests():
        if req.user_id not in team_ids or req.status != "Pending":
            continue
        employee = store.get_user(req.user_id)
        result.append(TeamRequest(
            id=req.id,
            employee=employee.name if employee else "Unknown",
            user_id=req.user_id,
            type=req.type,
            dates=req.dates,
            start_date=req.start_date,
            end_date=req.end_date,
            days=req.days,
            status=req.status,
            reason=req.reason,
        ))
    return result


def user_statistics(store: LeaveStore, user_id: int) -> LeaveStatistics:
    stats = LeaveStatistics()
    for req in store.list_requests():
        if req.user_id != user_id:
            continue
        stats.total_requests += 1
        if req.status == "Pending":
            stats.pending += 1
        elif req.status == "Approved":
            stats.approved += 1
            stats.total_days_taken += req.days
        elif req.status == "Rejected":
            stats.rejected += 1
    return stats
