"""Persistence ports and adapters for bank accounts."""
from bank_service.repositories.base import BankAccountRepository
from bank_service.repositories.memory_repo import InMemoryBankAccountRepository
from bank_service.repositories.sqlalchemy_repo import SqlAlchemyBankAccountRepository

__all__ = [
    "BankAccountRepository",
    "InMemoryBankAccountRepository",
    "SqlAlchemyBankAccountRepository",
]
