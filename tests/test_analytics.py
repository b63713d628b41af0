import pytest

import analytics
import db
from models import StockItem, Supplier


class TestFromDatabase:

    def test_total_inventory_value(self, database):
        # 1200*15 + 250*30 + 350*10 + 5*200 + 300*20
        assert analytics.total_inventory_value() == pytest.approx(36000.0)

    def test_total_is_zero_without_items(self, empty_database):
        assert analytics.total_inventory_value() == 0

    def test_low_stock_excludes_quantity_equal_to_threshold(self, database):
        assert analytics.low_stock_items(10) == []
        assert [i.id for i in analytics.low_stock_items(11)] == ["I003"]

    def test_low_stock_after_reducing_quantity(self, database):
        laptop = db.get_stock_item_by_id("I001")
        laptop.quantity = 5
        db.save_stock_item(laptop)
        assert [i.id for i in analytics.low_stock_items(10)] == ["I001"]

    def test_low_stock_keeps_row_order(self, database):
        for item_id, qty in (("I005", 1), ("I002", 3)):
            item = db.get_stock_item_by_id(item_id)
            item.quantity = qty
            db.save_stock_item(item)
        assert [i.id for i in analytics.low_stock_items(5)] == ["I002", "I005"]

    def test_value_by_supplier(self, database):
        assert analytics.value_by_supplier() == pytest.approx({
            "Tech Supplies Inc.": 21500.0,
            "Furniture Warehouse": 13500.0,
            "Office Essentials": 1000.0,
        })

    def test_inventory_levels(self, database):
        assert analytics.inventory_levels() == {
            "Laptop": 15, "Desk Chair": 30, "Printer": 10, "Paper Reams": 200, "Desk": 20,
        }

    def test_summary(self, database):
        assert analytics.summary(11) == {"item_count": 5, "total_value": pytest.approx(36000.0), "low_stock_count": 1}


class TestFromItemList:

    def test_suppliers_with_same_name_are_merged(self):
        items = [
            StockItem(name="A", price=10.0, quantity=1, supplier=Supplier(id="X1", name="Acme")),
            StockItem(name="B", price=5.0, quantity=2, supplier=Supplier(id="X2", name="Acme")),
        ]
        assert analytics.value_by_supplier(items) == {"Acme": 20.0}

    def test_missing_supplier_grouped_as_unknown(self):
        items = [
            StockItem(name="A", price=3.0, quantity=2),
            StockItem(name="B", price=1.0, quantity=1, supplier=Supplier(id="gone")),
        ]
        assert analytics.value_by_supplier(items) == {analytics.UNKNOWN_SUPPLIER: 7.0}

    def test_inventory_levels_last_write_wins(self):
        items = [StockItem(name="Pen", quantity=4), StockItem(name="Pen", quantity=9)]
        assert analytics.inventory_levels(items) == {"Pen": 9}

    def test_empty_list_does_not_hit_database(self):
        assert analytics.total_inventory_value([]) == 0
        assert analytics.low_stock_items(10, []) == []
        assert analytics.value_by_supplier([]) == {}


class TestPlaceholderSeries:

    def test_category_values(self):
        assert analytics.inventory_value_by_category() == {
            "Electronics": 50000.0,
            "Furniture": 30000.0,
            "Office Supplies": 15000.0,
            "Miscellaneous": 5000.0,
        }

    def test_monthly_sales_in_calendar_order(self):
        sales = analytics.monthly_sales()
        assert list(sales) == ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
        assert sales["Jan"] == 5200.0
        assert sales["Dec"] == 10500.0

    def test_returned_mappings_are_copies(self):
        analytics.monthly_sales()["Jan"] = 0
        assert analytics.monthly_sales()["Jan"] == 5200.0
