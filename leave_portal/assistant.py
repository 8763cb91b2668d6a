"""Scripted leave assistant.

Replies are picked by plain substring checks on the lower-cased message,
in a fixed order; the first match wins.
"""
from .database import LeaveStore
from .errors import NotFound
from .schemas import LeaveBalance

APPLY_HELP = (
    "I can help you submit a leave request. Please provide:\n"
    "1. Type of leave (Annual, Medical, or Compassionate)\n"
    "2. Start date\n"
    "3. End date\n"
    "4. Reason for leave"
)

GENERAL_HELP = (
    "I'm here to help you with leave requests, checking balances, viewing your leave history, "
    "and answering questions about leave policies. What would you like to know?"
)


def _balance_for(store: LeaveStore, user_id: int) -> LeaveBalance:
    balance = store.get_balance(user_id)
    if balance is None:
        raise NotFound("Balance not found")
    return balance


def generate_reply(message: str, user_id: int, store: LeaveStore) -> str:
    text = message.lower()

    if "balance" in text:
        balance = _balance_for(store, user_id)
        return (
            "Your current leave balance is:\n"
            f"- Annual Leave: {balance.annual} days\n"
            f"- Medical Leave: {balance.medical} days\n"
            f"- Compassionate Leave: {balance.compassionate} days"
        )

    if "request" in text or "apply" in text:
        return APPLY_HELP

    if "annual" in text:
        balance = _balance_for(store, user_id)
        return f"You have {balance.annual} days of annual leave remaining. When would you like to take your leave?"

    if "medical" in text:
        balance = _balance_for(store, user_id)
        return (
            f"You have {balance.medical} days of medical leave remaining. "
            "Please note that medical certificates may be required for leaves longer than 1 day."
        )

    if "status" in text or "pending" in text:
        pending = sum(1 for r in store.list_requests() if r.user_id == user_id and r.status == "Pending")
        return f"You have {pending} pending leave request(s). Would you like me to show you the details?"

    return GENERAL_HELP
