"""Unit tests for the order header and the details snapshot."""

from opm.domain.model.line_item import LineItem
from opm.domain.model.order import OrderDetails, OrderHeader


class TestOrderHeader:

    def test_title(self):
        header = OrderHeader("801-1", order_number="00000100")
        assert header.title == "Order #00000100's Products"

    def test_title_without_number(self):
        assert OrderHeader("801-1").title == "Order #'s Products"

    def test_subtitle_links_account(self):
        header = OrderHeader("801-1", account_id="001-ACME", account_name="Acme")
        assert header.subtitle == '<a href="/001-ACME">Acme</a>'


class TestOrderDetails:

    def test_of_freezes_sequences(self):
        details = OrderDetails.of([LineItem("a")], ["x"])
        assert isinstance(details.items, tuple)
        assert details.deleted_ids == ("x",)
        assert details.has_items

    def test_empty(self):
        details = OrderDetails()
        assert not details.has_items
        assert details.deleted_ids == ()
