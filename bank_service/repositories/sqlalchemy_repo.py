"""SQLAlchemy implementation of BankAccountRepository."""
from typing import Optional

from sqlalchemy.orm import Session

from bank_service.logging import get_logger
from bank_service.models import BankAccount

logger = get_logger(__name__)


class SqlAlchemyBankAccountRepository:
    """SQLAlchemy-backed bank account repository."""

    def __init__(self, db: Session):
        self._db = db

    def save(self, bank_account: BankAccount) -> BankAccount:
        """Insert a new account, or replace the stored one with the same ID.

        An ID that is not stored is discarded and the account is inserted
        under a generated one.
        """
        if bank_account.id is not None and self._db.get(BankAccount, bank_account.id) is None:
            logger.debug("bank_account_id_unknown", account_id=bank_account.id)
            bank_account.id = None
        if bank_account.id is None:
            self._db.add(bank_account)
        else:
            bank_account = self._db.merge(bank_account)
        self._db.commit()
        self._db.refresh(bank_account)
        logger.debug("bank_account_saved", account_id=bank_account.id)
        return bank_account

    def find_all(self) -> list[BankAccount]:
        return self._db.query(BankAccount).order_by(BankAccount.id).all()

    def find_by_id(self, account_id: int) -> Optional[BankAccount]:
        return self._db.query(BankAccount).filter(BankAccount.id == account_id).first()

    def delete_by_id(self, account_id: int) -> None:
        deleted = self._db.query(BankAccount).filter(
            BankAccount.id == account_id
        ).delete()
        self._db.commit()
        logger.debug("bank_account_deleted", account_id=account_id, rows=deleted)
