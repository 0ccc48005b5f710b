"""Redis key names and id conversions shared by the servers."""

from __future__ import annotations

REDIS_KEY_ROLE = "role:"
REDIS_KEY_ACCOUNT = "acc:"
REDIS_KEY_SAVE_WAIT = "server:role_save_wait"
REDIS_KEY_SERVER_STATE = "server:state"
REDIS_KEY_IDS = "server:ids"

_UINT64_MAX = 2**64 - 1


def _check_id(value: int, what: str) -> int:
    number = int(value)
    if not 0 <= number <= _UINT64_MAX:
        raise ValueError(f"{what} out of range: {value}")
    return number


def key_role(role_id: int) -> str:
    """Redis key of a role's data."""
    return REDIS_KEY_ROLE + str(role_id)


def key_account(acc: str) -> str:
    """Redis key of an account."""
    return REDIS_KEY_ACCOUNT + acc


def role_id_from_acc(acc_id: int) -> int:
    """The role id belonging to an account id; each account has one role of the same id."""
    return _check_id(acc_id, "account id")


def acc_id_from_role(role_id: int) -> int:
    """The account id belonging to a role id; each role's account has the same id."""
    return _check_id(role_id, "role id")