"""Mapping between bank account entities and their DTOs."""
from typing import Optional, Protocol, TypeVar

from bank_service.models import BankAccount
from bank_service.schemas import BankAccountDTO

D = TypeVar("D")
E = TypeVar("E")


class EntityMapper(Protocol[D, E]):
    """Interface for converting between a DTO type and an entity type."""

    def to_entity(self, dto: D) -> E:
        ...

    def to_dto(self, entity: E) -> D:
        ...

    def to_entity_list(self, dtos: list[D]) -> list[E]:
        ...

    def to_dto_list(self, entities: list[E]) -> list[D]:
        ...


class BankAccountMapper:
    """Maps BankAccount entities to BankAccountDTOs and back."""

    def to_entity(self, dto: BankAccountDTO) -> BankAccount:
        return BankAccount(id=dto.id, name=dto.name, balance=dto.balance)

    def to_dto(self, entity: BankAccount) -> BankAccountDTO:
        return BankAccountDTO.model_validate(entity)

    def to_entity_list(self, dtos: list[BankAccountDTO]) -> list[BankAccount]:
        return [self.to_entity(dto) for dto in dtos]

    def to_dto_list(self, entities: list[BankAccount]) -> list[BankAccountDTO]:
        return [self.to_dto(entity) for entity in entities]

    def from_id(self, account_id: Optional[int]) -> Optional[BankAccount]:
        """Reference an account by ID alone, e.g. from another entity's DTO."""
        if account_id is None:
            return None
        return BankAccount(id=account_id)
