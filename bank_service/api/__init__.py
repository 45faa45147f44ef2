"""REST API for the bank account service."""
from bank_service.api.bank_account_resource import router

__all__ = ["router"]
