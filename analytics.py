# Summary numbers and chart series computed from the stock item list.
# Functions take an optional `items` list so one screen refresh can share
# a single fetch.

from collections import defaultdict

import db

DEFAULT_LOW_STOCK_THRESHOLD = 10
UNKNOWN_SUPPLIER = "Unknown"

# Placeholder series, not derived from stored data
CATEGORY_VALUES = {
    "Electronics": 50000.0,
    "Furniture": 30000.0,
    "Office Supplies": 15000.0,
    "Miscellaneous": 5000.0,
}

MONTHLY_SALES = {
    "Jan": 5200.0,
    "Feb": 6100.0,
    "Mar": 5800.0,
    "Apr": 6700.0,
    "May": 7500.0,
    "Jun": 8100.0,
    "Jul": 7900.0,
    "Aug": 8200.0,
    "Sep": 8800.0,
    "Oct": 9200.0,
    "Nov": 9800.0,
    "Dec": 10500.0,
}


def _items(items):
    return db.get_all_stock_items() if items is None else items


def total_inventory_value(items=None):
    return sum(item.total_value for item in _items(items))


def low_stock_items(threshold=DEFAULT_LOW_STOCK_THRESHOLD, items=None):
    return [item for item in _items(items) if item.quantity < threshold]


def value_by_supplier(items=None):
    """
    Total stock value per supplier name. Two suppliers sharing a name
    end up in the same bucket.
    """
    totals = defaultdict(float)
    for item in _items(items):
        name = item.supplier_name or UNKNOWN_SUPPLIER
        totals[name] += item.total_value
    return dict(totals)


def inventory_levels(items=None):
    return {item.name: item.quantity for item in _items(items)}


def inventory_value_by_category():
    return dict(CATEGORY_VALUES)


def monthly_sales():
    return dict(MONTHLY_SALES)


def summary(threshold=DEFAULT_LOW_STOCK_THRESHOLD, items=None):
    items = _items(items)
    return {
        "item_count": len(items),
        "total_value": total_inventory_value(items),
        "low_stock_count": len(low_stock_items(threshold, items)),
    }
