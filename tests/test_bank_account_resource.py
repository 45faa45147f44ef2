"""API tests for the /api/bank-accounts resource."""
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY
from sqlalchemy.exc import OperationalError

from bank_service.api.bank_account_resource import (
    get_bank_account_mapper,
    get_bank_account_repository,
)
from bank_service.config import settings
from bank_service.main import app
from bank_service.repositories import InMemoryBankAccountRepository
from bank_service.services.mapper import BankAccountMapper

API = "/api/bank-accounts"


def alert_header(client_response, kind: str) -> str:
    return client_response.headers[f"X-{settings.application_name}-{kind}"]


class TestCreateBankAccount:
    """POST /api/bank-accounts"""

    @pytest.fixture(autouse=True)
    def setup(self, client):
        self.client = client

    def test_create_returns_201_with_location_and_alert(self):
        response = self.client.post(API, json={"name": "Checking", "balance": "100.50"})

        assert response.status_code == 201
        body = response.json()
        assert body["id"] is not None
        assert body["name"] == "Checking"
        assert Decimal(body["balance"]) == Decimal("100.50")
        assert response.headers["Location"] == f"/api/bank-accounts/{body['id']}"
        assert alert_header(response, "alert") == f"{settings.application_name}.bankAccount.created"
        assert alert_header(response, "params") == str(body["id"])

    def test_create_then_get_returns_equal_record(self):
        created = self.client.post(API, json={"name": "Savings", "balance": 2500})
        account_id = created.json()["id"]

        fetched = self.client.get(f"{API}/{account_id}")

        assert fetched.status_code == 200
        assert fetched.json() == created.json()

    def test_create_with_id_is_rejected(self):
        response = self.client.post(API, json={"id": 7, "name": "Checking", "balance": 1})

        assert response.status_code == 400
        body = response.json()
        assert body["errorKey"] == "idexists"
        assert body["entityName"] == "bankAccount"
        assert body["message"] == "error.idexists"
        assert body["title"] == "A new bankAccount cannot already have an ID"
        assert alert_header(response, "error") == "error.idexists"
        assert alert_header(response, "params") == "bankAccount"

    def test_rejected_create_stores_nothing(self):
        self.client.post(API, json={"id": 7, "name": "Checking", "balance": 1})

        assert self.client.get(API).json() == []
        assert self.client.get(f"{API}/7").status_code == 404

    def test_create_missing_name_is_a_validation_error(self):
        response = self.client.post(API, json={"balance": 10})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "error.validation"
        assert any(error["field"] == "name" for error in body["fieldErrors"])

    def test_create_with_empty_name_is_a_validation_error(self):
        response = self.client.post(API, json={"name": "", "balance": 10})

        assert response.status_code == 400
        assert response.json()["message"] == "error.validation"

    def test_create_assigns_distinct_ids(self):
        first = self.client.post(API, json={"name": "A", "balance": 1}).json()
        second = self.client.post(API, json={"name": "B", "balance": 2}).json()

        assert first["id"] != second["id"]


class TestUpdateBankAccount:
    """PUT /api/bank-accounts"""

    @pytest.fixture(autouse=True)
    def setup(self, client):
        self.client = client

    def test_update_replaces_record(self):
        created = self.client.post(API, json={"name": "Checking", "balance": 10}).json()

        response = self.client.put(
            API, json={"id": created["id"], "name": "Main checking", "balance": "42.00"}
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Main checking"
        assert alert_header(response, "alert") == f"{settings.application_name}.bankAccount.updated"
        assert alert_header(response, "params") == str(created["id"])

        fetched = self.client.get(f"{API}/{created['id']}").json()
        assert fetched["name"] == "Main checking"
        assert Decimal(fetched["balance"]) == Decimal("42")

    def test_update_without_id_creates(self):
        response = self.client.put(API, json={"name": "Brokerage", "balance": 5})

        assert response.status_code == 201
        body = response.json()
        assert body["id"] is not None
        assert response.headers["Location"] == f"/api/bank-accounts/{body['id']}"
        assert alert_header(response, "alert") == f"{settings.application_name}.bankAccount.created"
        assert self.client.get(f"{API}/{body['id']}").json() == body

    def test_update_with_unknown_id_stores_under_new_id(self):
        existing = self.client.post(API, json={"name": "Checking", "balance": 1}).json()

        response = self.client.put(API, json={"id": 500, "name": "Brokerage", "balance": 1})

        assert response.status_code == 200
        body = response.json()
        assert body["id"] not in (500, existing["id"])
        assert alert_header(response, "alert") == f"{settings.application_name}.bankAccount.updated"
        assert alert_header(response, "params") == "500"
        assert self.client.get(f"{API}/500").status_code == 404
        assert self.client.get(f"{API}/{body['id']}").json() == body

        following = self.client.post(API, json={"name": "Savings", "balance": 1})
        assert following.status_code == 201
        assert following.json()["id"] == body["id"] + 1

    def test_update_without_id_is_timed_once(self):
        def count(operation):
            return REGISTRY.get_sample_value(
                "bank_account_resource_latency_seconds_count", {"operation": operation}
            ) or 0.0

        creates_before = count("create")
        updates_before = count("update")

        self.client.put(API, json={"name": "Brokerage", "balance": 5})

        assert count("update") == updates_before + 1
        assert count("create") == creates_before

    def test_update_with_invalid_body_is_rejected(self):
        response = self.client.put(API, json={"id": 1, "name": "Checking", "balance": "lots"})

        assert response.status_code == 400
        assert any(error["field"] == "balance" for error in response.json()["fieldErrors"])


class TestListAndGetBankAccounts:
    """GET /api/bank-accounts and /api/bank-accounts/{id}"""

    @pytest.fixture(autouse=True)
    def setup(self, client):
        self.client = client

    def test_list_empty(self):
        response = self.client.get(API)

        assert response.status_code == 200
        assert response.json() == []

    def test_list_contains_created_records(self):
        created = [
            self.client.post(API, json={"name": f"Account {i}", "balance": i}).json()
            for i in range(3)
        ]

        listed = self.client.get(API).json()

        assert len(listed) >= 3
        for account in created:
            assert account in listed

    def test_get_unknown_id_is_404(self):
        assert self.client.get(f"{API}/999").status_code == 404

    def test_get_non_numeric_id_is_400(self):
        response = self.client.get(f"{API}/abc")

        assert response.status_code == 400
        assert response.json()["message"] == "error.validation"


class TestDeleteBankAccount:
    """DELETE /api/bank-accounts/{id}"""

    @pytest.fixture(autouse=True)
    def setup(self, client):
        self.client = client

    def test_delete_lifecycle(self):
        created = self.client.post(API, json={"name": "Checking", "balance": 0}).json()
        account_id = created["id"]
        assert self.client.get(f"{API}/{account_id}").status_code == 200

        response = self.client.delete(f"{API}/{account_id}")

        assert response.status_code == 200
        assert response.content == b""
        assert alert_header(response, "alert") == f"{settings.application_name}.bankAccount.deleted"
        assert alert_header(response, "params") == str(account_id)
        assert self.client.get(f"{API}/{account_id}").status_code == 404

    def test_delete_unknown_id_succeeds(self):
        response = self.client.delete(f"{API}/12345")

        assert response.status_code == 200

    def test_delete_twice_succeeds(self):
        account_id = self.client.post(API, json={"name": "X", "balance": 1}).json()["id"]

        assert self.client.delete(f"{API}/{account_id}").status_code == 200
        assert self.client.delete(f"{API}/{account_id}").status_code == 200


class TestOutOfRangeIds:
    """IDs beyond the 64-bit id column are rejected before reaching the database."""

    TOO_LARGE = 99999999999999999999999

    @pytest.fixture(autouse=True)
    def setup(self, client):
        self.client = client

    def test_get_is_400(self):
        response = self.client.get(f"{API}/{self.TOO_LARGE}")

        assert response.status_code == 400
        assert response.json()["message"] == "error.validation"

    def test_delete_is_400(self):
        response = self.client.delete(f"{API}/{self.TOO_LARGE}")

        assert response.status_code == 400
        assert response.json()["message"] == "error.validation"

    def test_put_is_400(self):
        response = self.client.put(API, json={"id": self.TOO_LARGE, "name": "X", "balance": 1})

        assert response.status_code == 400
        assert any(error["field"] == "id" for error in response.json()["fieldErrors"])

    def test_largest_id_is_accepted(self):
        assert self.client.get(f"{API}/{2**63 - 1}").status_code == 404
        assert self.client.delete(f"{API}/{2**63 - 1}").status_code == 200


class TestMapperSubstitution:
    """The resource only talks to the mapper through its interface."""

    def setup_method(self):
        self.mapper = MagicMock(wraps=BankAccountMapper())
        app.dependency_overrides[get_bank_account_repository] = InMemoryBankAccountRepository
        app.dependency_overrides[get_bank_account_mapper] = lambda: self.mapper
        self.client = TestClient(app)

    def teardown_method(self):
        app.dependency_overrides.clear()

    def test_create_goes_through_mapper(self):
        response = self.client.post(API, json={"name": "Checking", "balance": 1})

        assert response.status_code == 201
        self.mapper.to_entity.assert_called_once()
        self.mapper.to_dto.assert_called_once()

    def test_list_goes_through_mapper(self):
        response = self.client.get(API)

        assert response.json() == []
        self.mapper.to_dto_list.assert_called_once_with([])


class TestInMemoryComposition:
    """The resource runs unchanged on the in-memory repository."""

    def setup_method(self):
        self.repository = InMemoryBankAccountRepository()
        app.dependency_overrides[get_bank_account_repository] = lambda: self.repository
        self.client = TestClient(app)

    def teardown_method(self):
        app.dependency_overrides.clear()

    def test_example_flow(self, monkeypatch):
        monkeypatch.setattr(settings, "application_name", "app")

        created = self.client.post(API, json={"name": "Checking", "balance": 1})
        assert created.status_code == 201
        assert created.json()["id"] == 1
        assert created.headers["X-app-alert"] == "app.bankAccount.created"

        fetched = self.client.get(f"{API}/1")
        assert fetched.status_code == 200
        assert fetched.json() == created.json()

        assert self.client.delete(f"{API}/1").status_code == 200
        assert self.client.get(f"{API}/1").status_code == 404


class TestPersistenceFailures:
    """Repository errors are not translated into client errors."""

    def setup_method(self):
        self.repository = MagicMock()
        self.repository.find_all.side_effect = OperationalError("SELECT", {}, Exception("db down"))
        app.dependency_overrides[get_bank_account_repository] = lambda: self.repository
        self.client = TestClient(app, raise_server_exceptions=False)

    def teardown_method(self):
        app.dependency_overrides.clear()

    def test_list_failure_is_500(self):
        response = self.client.get(API)

        assert response.status_code == 500
