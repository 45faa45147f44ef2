"""Bank account repository protocol."""
from typing import Optional, Protocol

from bank_service.models import BankAccount


class BankAccountRepository(Protocol):
    """Interface for bank account data access."""

    def save(self, bank_account: BankAccount) -> BankAccount:
        """Insert a new account, or replace the one with the same ID.

        Unknown IDs are replaced by a newly assigned one.
        """
        ...

    def find_all(self) -> list[BankAccount]:
        """List all accounts."""
        ...

    def find_by_id(self, account_id: int) -> Optional[BankAccount]:
        """Retrieve account by ID."""
        ...

    def delete_by_id(self, account_id: int) -> None:
        """Delete an account. Missing IDs are ignored."""
        ...
