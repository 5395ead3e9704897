"""Request body checks shared by the create and partial-update handlers."""
import math

from catalog_service.errors import ValidationError
from catalog_service.query import MAX_INT64


def require_object(data):
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def check_text(field, value):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a non-empty string")
    return value


def check_price(value):
    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError("price must be a number")
    try:
        price = float(value)
    except OverflowError:
        raise ValidationError("price is too large") from None
    if not math.isfinite(price) or price <= 0:
        raise ValidationError("price must be a finite number greater than 0")
    return price


def check_id(field, value):
    if isinstance(value, bool) or not isinstance(value, int) or not 0 < value <= MAX_INT64:
        raise ValidationError(f"{field} must be a positive integer")
    return value


PRODUCT_FIELDS = {
    'name': lambda value: check_text('name', value),
    'price': check_price,
}

REVIEW_FIELDS = {
    'content': lambda value: check_text('content', value),
    'product_id': lambda value: check_id('product_id', value),
}


def _required(data, fields):
    data = require_object(data)
    missing = [name for name in fields if data.get(name) is None]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
    return {name: check(data[name]) for name, check in fields.items()}


def _changes(data, fields):
    data = require_object(data)
    changes = {name: check(data[name]) for name, check in fields.items()
               if data.get(name) is not None}
    if not changes:
        raise ValidationError("No valid fields to update")
    return changes


def product_create(data):
    return _required(data, PRODUCT_FIELDS)


def product_changes(data):
    return _changes(data, PRODUCT_FIELDS)


def review_create(data):
    return _required(data, REVIEW_FIELDS)


def review_changes(data):
    return _changes(data, REVIEW_FIELDS)
