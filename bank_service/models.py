"""SQLAlchemy ORM models for the bank account service."""
from sqlalchemy import Column, BigInteger, Integer, Numeric, Text

from bank_service.database import Base


class BankAccount(Base):
    """A bank account record."""
    __tablename__ = "bank_account"

    # SQLite only autoincrements INTEGER PRIMARY KEY columns
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    balance = Column(Numeric(21, 2), nullable=False)

    def __repr__(self) -> str:
        return f"BankAccount(id={self.id!r}, name={self.name!r}, balance={self.balance!r})"
