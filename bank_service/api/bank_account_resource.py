"""REST resource for managing bank accounts."""
from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.orm import Session

from bank_service import metrics
from bank_service.api import header_util
from bank_service.api.response_util import wrap_or_not_found
from bank_service.config import settings
from bank_service.database import get_db
from bank_service.errors import BadRequestAlertException
from bank_service.logging import get_logger
from bank_service.models import BankAccount
from bank_service.repositories import BankAccountRepository, SqlAlchemyBankAccountRepository
from bank_service.schemas import BankAccountDTO, ID_MAX, ID_MIN
from bank_service.services.mapper import BankAccountMapper, EntityMapper

logger = get_logger(__name__)

ENTITY_NAME = "bankAccount"

router = APIRouter(prefix=settings.api_prefix, tags=["bank-accounts"])

BankAccountEntityMapper = EntityMapper[BankAccountDTO, BankAccount]


def get_bank_account_repository(db: Session = Depends(get_db)) -> BankAccountRepository:
    """Provide the BankAccountRepository for the current request."""
    return SqlAlchemyBankAccountRepository(db)


def get_bank_account_mapper() -> BankAccountEntityMapper:
    """Provide the BankAccountMapper."""
    return BankAccountMapper()


def _create(
    bank_account_dto: BankAccountDTO,
    response: Response,
    repository: BankAccountRepository,
    mapper: BankAccountEntityMapper,
) -> BankAccountDTO:
    if bank_account_dto.id is not None:
        raise BadRequestAlertException(
            "A new bankAccount cannot already have an ID", ENTITY_NAME, "idexists"
        )
    bank_account = repository.save(mapper.to_entity(bank_account_dto))
    result = mapper.to_dto(bank_account)
    metrics.record_entity_change("created")

    # Also reached through update, whose default status is 200
    response.status_code = status.HTTP_201_CREATED
    response.headers["Location"] = f"{settings.api_prefix}/bank-accounts/{result.id}"
    response.headers.update(header_util.create_entity_creation_alert(ENTITY_NAME, str(result.id)))
    return result


@router.post("/bank-accounts", response_model=BankAccountDTO, status_code=status.HTTP_201_CREATED)
@metrics.timed("create")
def create_bank_account(
    bank_account_dto: BankAccountDTO,
    response: Response,
    repository: BankAccountRepository = Depends(get_bank_account_repository),
    mapper: BankAccountEntityMapper = Depends(get_bank_account_mapper),
):
    """
    POST /bank-accounts : Create a new bank account.

    Responds 201 with the new account and its Location, or 400 when
    the submitted account already has an ID.
    """
    logger.debug("rest_request_save_bank_account", bank_account=bank_account_dto.model_dump(mode="json"))
    return _create(bank_account_dto, response, repository, mapper)


@router.put("/bank-accounts", response_model=BankAccountDTO)
@metrics.timed("update")
def update_bank_account(
    bank_account_dto: BankAccountDTO,
    response: Response,
    repository: BankAccountRepository = Depends(get_bank_account_repository),
    mapper: BankAccountEntityMapper = Depends(get_bank_account_mapper),
):
    """
    PUT /bank-accounts : Update an existing bank account.

    An account without an ID is created instead. Responds 200 with the
    updated account, or 400 when the body is not valid.
    """
    logger.debug("rest_request_update_bank_account", bank_account=bank_account_dto.model_dump(mode="json"))
    if bank_account_dto.id is None:
        return _create(bank_account_dto, response, repository, mapper)
    bank_account = repository.save(mapper.to_entity(bank_account_dto))
    result = mapper.to_dto(bank_account)
    metrics.record_entity_change("updated")

    response.headers.update(header_util.create_entity_update_alert(ENTITY_NAME, str(bank_account_dto.id)))
    return result


@router.get("/bank-accounts", response_model=list[BankAccountDTO])
@metrics.timed("list")
def get_all_bank_accounts(
    repository: BankAccountRepository = Depends(get_bank_account_repository),
    mapper: BankAccountEntityMapper = Depends(get_bank_account_mapper),
):
    """GET /bank-accounts : List every bank account."""
    logger.debug("rest_request_get_all_bank_accounts")
    return mapper.to_dto_list(repository.find_all())


@router.get("/bank-accounts/{account_id}", response_model=BankAccountDTO)
@metrics.timed("get")
def get_bank_account(
    account_id: int = Path(..., ge=ID_MIN, le=ID_MAX),
    repository: BankAccountRepository = Depends(get_bank_account_repository),
    mapper: BankAccountEntityMapper = Depends(get_bank_account_mapper),
):
    """GET /bank-accounts/{id} : Fetch one bank account, or 404."""
    logger.debug("rest_request_get_bank_account", account_id=account_id)
    bank_account = repository.find_by_id(account_id)
    return wrap_or_not_found(mapper.to_dto(bank_account) if bank_account else None)


@router.delete("/bank-accounts/{account_id}")
@metrics.timed("delete")
def delete_bank_account(
    account_id: int = Path(..., ge=ID_MIN, le=ID_MAX),
    repository: BankAccountRepository = Depends(get_bank_account_repository),
):
    """DELETE /bank-accounts/{id} : Delete a bank account. Missing IDs are not an error."""
    logger.debug("rest_request_delete_bank_account", account_id=account_id)
    repository.delete_by_id(account_id)
    metrics.record_entity_change("deleted")
    return Response(
        status_code=status.HTTP_200_OK,
        headers=header_util.create_entity_deletion_alert(ENTITY_NAME, str(account_id)),
    )
