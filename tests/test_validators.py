import pytest

from models import Supplier
from validators import (MAX_QUANTITY, ValidationError, parse_price, parse_quantity, require,
                        validate_password_change, validate_registration, validate_stock_form,
                        validate_supplier_form)


def test_require_strips_and_rejects_blank():
    assert require("  Laptop ", "Name") == "Laptop"
    with pytest.raises(ValidationError, match="Name is required"):
        require("   ", "Name")
    with pytest.raises(ValidationError):
        require(None, "Name")


@pytest.mark.parametrize("text", ["", "abc", "1,5", "nan", "inf"])
def test_bad_prices(text):
    with pytest.raises(ValidationError):
        parse_price(text)


def test_prices():
    assert parse_price(" 12.50 ") == 12.5
    assert parse_price("0") == 0.0
    with pytest.raises(ValidationError, match="negative"):
        parse_price("-1")


def test_quantities():
    assert parse_quantity("7") == 7
    for text in ("", "2.5", "x"):
        with pytest.raises(ValidationError):
            parse_quantity(text)
    with pytest.raises(ValidationError, match="negative"):
        parse_quantity("-3")


def test_stock_form():
    supplier = Supplier(id="S1", name="Acme")
    data = validate_stock_form(" Pen ", " Blue ", "1.25", "100", supplier)
    assert data == {"name": "Pen", "description": "Blue", "price": 1.25, "quantity": 100, "supplier": supplier}


def test_stock_form_requires_supplier():
    with pytest.raises(ValidationError, match="supplier"):
        validate_stock_form("Pen", "", "1", "1", None)


def test_supplier_form():
    data = validate_supplier_form(" Acme ", None, "1 Road", "", " 555 ")
    assert data["name"] == "Acme"
    assert data["contact_info"] == ""
    assert data["phone"] == "555"
    with pytest.raises(ValidationError):
        validate_supplier_form("", "", "", "", "")


def test_registration():
    assert validate_registration(" bob ", "pw", "pw") == "bob"
    with pytest.raises(ValidationError, match="required"):
        validate_registration("bob", "", "")
    with pytest.raises(ValidationError, match="do not match"):
        validate_registration("bob", "pw", "px")


def test_password_change():
    validate_password_change("old", "new", "new")
    with pytest.raises(ValidationError, match="All fields"):
        validate_password_change("old", "", "")
    with pytest.raises(ValidationError, match="do not match"):
        validate_password_change("old", "new", "other")


def test_quantity_must_fit_an_sqlite_integer():
    assert parse_quantity(str(MAX_QUANTITY)) == MAX_QUANTITY
    with pytest.raises(ValidationError, match="too large"):
        parse_quantity("99999999999999999999")
    with pytest.raises(ValidationError):
        validate_stock_form("Bolt", "", "1", "99999999999999999999", Supplier(id="S001"))
