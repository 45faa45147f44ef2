"""Helpers for turning lookup results into responses."""
from typing import Optional, TypeVar

from fastapi import HTTPException, status

T = TypeVar("T")


def wrap_or_not_found(maybe_response: Optional[T]) -> T:
    """Return the value, or raise a 404 when there is none."""
    if maybe_response is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    return maybe_response
