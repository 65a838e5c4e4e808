"""
Unit tests for the RFQ builder and per-user session store
"""

from concurrent.futures import ThreadPoolExecutor
from types import SimpleNamespace

import pytest

from solar_inventory.application.rfq import RFQBuilder, RFQSessionStore, RFQValidationError


def _item(item_id=1, name="Inverter 10kW", unit_price=50.0, unit="pcs"):
    return SimpleNamespace(id=item_id, name=name, unit_price=unit_price, unit=unit)


class TestRFQBuilder:
    def test_add_new_line(self):
        builder = RFQBuilder()
        line = builder.add(_item(), 2)

        assert builder.count == 1
        assert line.item_id == 1
        assert line.name == "Inverter 10kW"
        assert line.quantity == 2
        assert line.id.startswith("rfq-1-")

    def test_add_same_item_merges(self):
        builder = RFQBuilder()
        builder.add(_item(), 2)
        builder.add(_item(), 3)

        assert builder.count == 1
        assert builder.lines[0].quantity == 5

    def test_missing_unit_defaults_to_pcs(self):
        builder = RFQBuilder()
        line = builder.add(SimpleNamespace(id=7, name="Cable", unit_price=1.0), 1)
        assert line.unit == "pcs"

    @pytest.mark.parametrize("quantity,expected", [(0, 1), (-4, 1), (1, 1), (12, 12)])
    def test_set_quantity_clamps_to_one(self, quantity, expected):
        builder = RFQBuilder()
        line = builder.add(_item(), 3)
        builder.set_quantity(line.id, quantity)
        assert builder.lines[0].quantity == expected

    def test_set_quantity_unknown_line(self):
        builder = RFQBuilder()
        builder.add(_item(), 3)
        assert builder.set_quantity("rfq-missing", 9) is None
        assert builder.lines[0].quantity == 3

    def test_remove_and_clear(self):
        builder = RFQBuilder()
        first = builder.add(_item(1), 1)
        builder.add(_item(2, "Battery"), 1)

        builder.remove(first.id)
        assert [line.item_id for line in builder.lines] == [2]

        builder.remove("rfq-missing")
        assert builder.count == 1

        builder.clear()
        assert builder.count == 0

    def test_total(self):
        builder = RFQBuilder()
        builder.add(_item(1, unit_price=50.0), 2)
        builder.add(_item(2, "Mount", unit_price=12.5), 4)

        assert builder.lines[0].line_total == 100.0
        assert builder.total == 150.0

    def test_concurrent_adds_merge_into_one_line(self):
        builder = RFQBuilder()
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda _: builder.add(_item(), 1), range(50)))

        assert builder.count == 1
        assert builder.lines[0].quantity == 50

    def test_snapshot_is_detached(self):
        builder = RFQBuilder()
        line = builder.add(_item(), 2)
        copy = builder.snapshot()
        builder.set_quantity(line.id, 9)

        assert copy[0].quantity == 2
        assert builder.remove(line.id).quantity == 9
        assert builder.remove(line.id) is None


class TestRFQExportValidation:
    @pytest.mark.parametrize("name,address,email,message", [
        ("", "", "", "Supplier name is required"),
        ("   ", "Street 1", "s@x.rs", "Supplier name is required"),
        ("Sun d.o.o.", "", "s@x.rs", "Supplier address is required"),
        ("Sun d.o.o.", "Street 1", " ", "Supplier email is required"),
    ])
    def test_supplier_fields_checked_in_order(self, name, address, email, message):
        builder = RFQBuilder()
        builder.add(_item(), 1)
        with pytest.raises(RFQValidationError) as exc:
            builder.validate_for_export(name, address, email)
        assert str(exc.value) == message

    def test_requires_at_least_one_line(self):
        with pytest.raises(RFQValidationError) as exc:
            RFQBuilder().validate_for_export("Sun d.o.o.", "Street 1", "s@x.rs")
        assert str(exc.value) == "Select at least one item"

    def test_valid(self):
        builder = RFQBuilder()
        builder.add(_item(), 1)
        builder.validate_for_export("Sun d.o.o.", "Street 1", "s@x.rs")


class TestRFQSessionStore:
    def test_one_builder_per_user(self):
        store = RFQSessionStore(maxsize=4, ttl=60)
        store.get(1).add(_item(), 1)

        assert store.get(1).count == 1
        assert store.get(2).count == 0

    def test_discard_resets(self):
        store = RFQSessionStore(maxsize=4, ttl=60)
        store.get(1).add(_item(), 1)
        store.discard(1)
        store.discard(99)

        assert store.get(1).count == 0

    def test_bounded(self):
        store = RFQSessionStore(maxsize=2, ttl=60)
        for user_id in (1, 2, 3):
            store.get(user_id).add(_item(), 1)
        # oldest session evicted
        assert store.get(1).count == 0
