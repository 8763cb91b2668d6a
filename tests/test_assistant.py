import pytest

from leave_portal.assistant import APPLY_HELP, GENERAL_HELP, generate_reply
from leave_portal.errors import NotFound


def test_balance_lists_all_categories(store):
    reply = generate_reply("what's my balance", 1, store)
    assert "Annual Leave: 14 days" in reply
    assert "Medical Leave: 12 days" in reply
    assert "Compassionate Leave: 3 days" in reply


@pytest.mark.parametrize("message", ["I want to APPLY for leave", "new request please"])
def test_apply_help(store, message):
    assert generate_reply(message, 1, store) == APPLY_HELP


def test_annual_and_medical(store):
    assert generate_reply("Annual leave?", 2, store).startswith("You have 10 days of annual leave remaining.")
    assert generate_reply("medical", 4, store).startswith("You have 15 days of medical leave remaining.")


def test_pending_count(store):
    assert generate_reply("status?", 1, store).startswith("You have 1 pending leave request(s).")
    assert generate_reply("anything pending", 3, store).startswith("You have 0 pending leave request(s).")


def test_first_match_wins(store):
    # "balance" is checked before "annual" and "request"
    reply = generate_reply("annual balance for my request", 1, store)
    assert reply.startswith("Your current leave balance is:")
    assert generate_reply("apply for medical leave", 1, store) == APPLY_HELP


def test_fallback(store):
    assert generate_reply("hello there", 1, store) == GENERAL_HELP


def test_reflects_live_balance(store):
    store.get_balance(1).annual = 7
    assert "Annual Leave: 7 days" in generate_reply("balance", 1, store)


def test_unknown_user_balance(store):
    with pytest.raises(NotFound):
        generate_reply("balance", 99, store)
    assert generate_reply("hello", 99, store) == GENERAL_HELP
