"""In-memory implementation of BankAccountRepository.

Accounts live in a dict keyed by ID, so nothing survives the process.
Stored records are copies; callers never share instances with the store.
"""
from typing import Optional

from bank_service.models import BankAccount


def _copy(bank_account: BankAccount) -> BankAccount:
    return BankAccount(
        id=bank_account.id,
        name=bank_account.name,
        balance=bank_account.balance,
    )


class InMemoryBankAccountRepository:
    """Dict-backed bank account repository with sequential IDs."""

    def __init__(self):
        self._accounts: dict[int, BankAccount] = {}
        self._next_id = 1

    def save(self, bank_account: BankAccount) -> BankAccount:
        stored = _copy(bank_account)
        if stored.id not in self._accounts:
            stored.id = self._next_id
            self._next_id += 1
        self._accounts[stored.id] = stored
        return _copy(stored)

    def find_all(self) -> list[BankAccount]:
        return [_copy(self._accounts[key]) for key in sorted(self._accounts)]

    def find_by_id(self, account_id: int) -> Optional[BankAccount]:
        stored = self._accounts.get(account_id)
        return _copy(stored) if stored else None

    def delete_by_id(self, account_id: int) -> None:
        self._accounts.pop(account_id, None)
