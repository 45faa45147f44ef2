"""Service layer for the bank account service."""
from bank_service.services.mapper import BankAccountMapper, EntityMapper

__all__ = ["BankAccountMapper", "EntityMapper"]
