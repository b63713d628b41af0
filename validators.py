# Form checks run by the GUI before anything reaches db.py.

import math

# largest value an SQLite INTEGER column can hold
MAX_QUANTITY = 2 ** 63 - 1


class ValidationError(ValueError):
    pass


def require(value, label):
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{label} is required.")
    return value


def parse_price(text):
    try:
        price = float((text or "").strip())
    except ValueError:
        raise ValidationError("Please enter a valid price.")
    if not math.isfinite(price):
        raise ValidationError("Please enter a valid price.")
    if price < 0:
        raise ValidationError("Price cannot be negative.")
    return price


def parse_quantity(text):
    try:
        quantity = int((text or "").strip())
    except ValueError:
        raise ValidationError("Please enter a valid quantity.")
    if quantity < 0:
        raise ValidationError("Quantity cannot be negative.")
    if quantity > MAX_QUANTITY:
        raise ValidationError("Quantity is too large.")
    return quantity


def validate_stock_form(name, description, price, quantity, supplier):
    """Return cleaned values for a stock item form, or raise ValidationError."""
    name = require(name, "Name")
    price = parse_price(price)
    quantity = parse_quantity(quantity)
    if supplier is None:
        raise ValidationError("Please select a supplier.")
    return {
        "name": name,
        "description": (description or "").strip(),
        "price": price,
        "quantity": quantity,
        "supplier": supplier,
    }


def validate_supplier_form(name, contact_info, address, email, phone):
    return {
        "name": require(name, "Supplier name"),
        "contact_info": (contact_info or "").strip(),
        "address": (address or "").strip(),
        "email": (email or "").strip(),
        "phone": (phone or "").strip(),
    }


def validate_registration(username, password, confirm_password):
    username = (username or "").strip()
    if not username or not password:
        raise ValidationError("Username and password are required.")
    if password != confirm_password:
        raise ValidationError("Passwords do not match.")
    return username


def validate_password_change(current, new, confirm):
    if not current or not new or not confirm:
        raise ValidationError("All fields are required.")
    if new != confirm:
        raise ValidationError("New passwords do not match.")
