"""Tests for the JSON-file repositories, against a temporary directory."""

import json
from decimal import Decimal

import pytest

from opm.domain.exceptions import FetchError, SaveError, ValidationError
from opm.domain.model.records import SaveRequest
from opm.infrastructure.persistence.json_order_repository import JsonOrderRepository
from opm.infrastructure.persistence.json_product_repository import JsonProductRepository
from tests.fakes import make_product, make_record

ORDERS = [
    {
        "id": "801-1",
        "order_number": "00000100",
        "account_id": "001-ACME",
        "account_name": "Acme",
        "items": [
            {"id": "802-1", "product_id": "01t-DESK", "quantity": 2,
             "unit_price": "10.00", "handling_price": "1.00"},
            {"id": "802-2", "product_id": "01t-CHAIR", "quantity": 1,
             "unit_price": "5.00", "handling_price": None},
        ],
    }
]


class Collector:
    """Captures what a repository call delivered."""

    def __init__(self):
        self.result = None
        self.error = None
        self.succeeded = False

    def ok(self, *result):
        self.succeeded = True
        self.result = result[0] if result else None

    def fail(self, exc):
        self.error = exc


@pytest.fixture
def orders_file(tmp_path):
    path = tmp_path / "orders.json"
    path.write_text(json.dumps(ORDERS), encoding="utf-8")
    return path


class TestJsonOrderRepository:

    def test_creates_missing_file(self, tmp_path):
        path = tmp_path / "nested" / "orders.json"
        JsonOrderRepository(path)
        assert json.loads(path.read_text()) == []

    def test_fetch_header(self, orders_file):
        got = Collector()
        JsonOrderRepository(orders_file).fetch_header("801-1", got.ok, got.fail)
        assert got.result.order_number == "00000100"
        assert got.result.account_name == "Acme"

    def test_fetch_line_items(self, orders_file):
        got = Collector()
        JsonOrderRepository(orders_file).fetch_line_items("801-1", got.ok, got.fail)
        assert [r.id for r in got.result] == ["802-1", "802-2"]
        assert got.result[0].unit_price == Decimal("10.00")
        assert got.result[1].handling_price == Decimal("0")

    def test_unknown_order(self, orders_file):
        got = Collector()
        JsonOrderRepository(orders_file).fetch_line_items("801-404", got.ok, got.fail)
        assert isinstance(got.error, FetchError)
        assert not got.succeeded

    def test_corrupt_file_reported_as_fetch_error(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text("{not json", encoding="utf-8")
        got = Collector()
        JsonOrderRepository(path).fetch_header("801-1", got.ok, got.fail)
        assert isinstance(got.error, FetchError)

    def test_save_upserts_and_deletes(self, orders_file):
        repo = JsonOrderRepository(orders_file)
        request = SaveRequest(
            items_to_upsert=(
                make_record("802-1", quantity=7),
                make_record(None, product_id="01t-LAMP", quantity=1, unit_price="3"),
            ),
            items_to_delete=("802-2",),
        )
        got = Collector()
        repo.save_line_items("801-1", request, got.ok, got.fail)
        assert got.succeeded

        loaded = Collector()
        repo.fetch_line_items("801-1", loaded.ok, loaded.fail)
        rows = loaded.result
        assert len(rows) == 2
        assert rows[0].id == "802-1" and rows[0].quantity == 7
        assert rows[1].id.startswith("li-")
        assert rows[1].product_id == "01t-LAMP"

    def test_deleting_unknown_row_fails_whole_batch(self, orders_file):
        repo = JsonOrderRepository(orders_file)
        request = SaveRequest(
            items_to_upsert=(make_record("802-1", quantity=9),),
            items_to_delete=("802-999",),
        )
        got = Collector()
        repo.save_line_items("801-1", request, got.ok, got.fail)
        assert isinstance(got.error, SaveError)
        assert "802-999" in str(got.error)
        assert json.loads(orders_file.read_text())[0]["items"][0]["quantity"] == 2

    def test_row_both_upserted_and_deleted_rejected(self, orders_file):
        repo = JsonOrderRepository(orders_file)
        request = SaveRequest(
            items_to_upsert=(make_record("802-2", quantity=4),),
            items_to_delete=("802-2",),
        )
        got = Collector()
        repo.save_line_items("801-1", request, got.ok, got.fail)
        assert isinstance(got.error, SaveError)
        assert "both saved and deleted" in str(got.error)
        assert len(json.loads(orders_file.read_text())[0]["items"]) == 2

    def test_non_finite_stored_price_is_fetch_error(self, orders_file):
        raw = json.loads(orders_file.read_text())
        raw[0]["items"][0]["unit_price"] = "NaN"
        orders_file.write_text(json.dumps(raw))
        got = Collector()
        JsonOrderRepository(orders_file).fetch_line_items("801-1", got.ok, got.fail)
        assert isinstance(got.error, FetchError)
        assert not got.succeeded

    def test_saving_unknown_order_is_save_error(self, orders_file):
        got = Collector()
        JsonOrderRepository(orders_file).save_line_items(
            "801-404", SaveRequest((), ()), got.ok, got.fail
        )
        assert isinstance(got.error, SaveError)


class TestJsonProductRepository:

    def test_create_then_fetch(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.create_product(make_product())
        got = Collector()
        repo.fetch_product("01t-DESK", got.ok, got.fail)
        assert got.result == make_product()

    def test_duplicate_rejected(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.create_product(make_product())
        with pytest.raises(ValidationError, match="already exists"):
            repo.create_product(make_product())

    def test_name_required(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        with pytest.raises(ValidationError, match="name is required"):
            repo.create_product(make_product(name=" "))

    def test_unknown_product(self, tmp_path):
        got = Collector()
        JsonProductRepository(tmp_path / "products.json").fetch_product(
            "01t-NOPE", got.ok, got.fail
        )
        assert isinstance(got.error, FetchError)

    def test_non_finite_stored_dimension_is_fetch_error(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text(json.dumps([{"id": "01t-DESK", "name": "Desk", "depth": "Infinity"}]))
        got = Collector()
        JsonProductRepository(path).fetch_product("01t-DESK", got.ok, got.fail)
        assert isinstance(got.error, FetchError)

    def test_cache_and_forced_refresh(self, tmp_path):
        path = tmp_path / "products.json"
        repo = JsonProductRepository(path)
        repo.create_product(make_product())
        first = Collector()
        repo.fetch_product("01t-DESK", first.ok, first.fail)

        raw = json.loads(path.read_text())
        raw[0]["name"] = "Renamed Desk"
        path.write_text(json.dumps(raw))

        cached = Collector()
        repo.fetch_product("01t-DESK", cached.ok, cached.fail)
        refreshed = Collector()
        repo.fetch_product("01t-DESK", refreshed.ok, refreshed.fail, force_refresh=True)

        assert cached.result.name == "Standing Desk"
        assert refreshed.result.name == "Renamed Desk"
