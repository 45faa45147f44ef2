"""Pydantic schemas for request/response validation."""
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Range of the BIGINT id column
ID_MIN = -(2**63)
ID_MAX = 2**63 - 1


class BankAccountDTO(BaseModel):
    """Wire representation of a bank account, used for requests and responses."""
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = Field(
        None, ge=ID_MIN, le=ID_MAX, description="Assigned by the store; absent for new accounts"
    )
    name: str = Field(..., min_length=1, description="Account name")
    balance: Decimal = Field(..., description="Current balance")


class FieldError(BaseModel):
    """A single invalid field in a request body."""
    objectName: str
    field: str
    message: str


class Problem(BaseModel):
    """Error body returned for client errors."""
    type: str
    title: str
    status: int
    message: str
    entityName: Optional[str] = None
    errorKey: Optional[str] = None
    params: Optional[str] = None
    fieldErrors: Optional[list[FieldError]] = None
