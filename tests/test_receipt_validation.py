import pytest
from pydantic import ValidationError

from backend.app.core.errors import first_error_message
from backend.app.schemas.receipt import ReceiptCreate


def valid_payload(**overrides):
    payload = {
        "customer_name": "Ravi Kumar",
        "mobile_number": "9876543210",
        "address": "Main Road, Banka",
        "branch": "Near Shivaji Chowk Banka",
        "receipt_date": "2024-03-05",
        "items": [{"name": "Consultation", "quantity": 1, "price": 300}],
        "tax_rate": 18,
    }
    payload.update(overrides)
    return payload


def first_message(payload) -> str:
    with pytest.raises(ValidationError) as exc_info:
        ReceiptCreate(**payload)
    return first_error_message(exc_info.value.errors())


@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"customer_name": "   "}, "Name required"),
        ({"customer_name": "x" * 101}, "Name must be at most 100 characters"),
        ({"mobile_number": "98765"}, "Enter valid 10-digit mobile"),
        ({"mobile_number": "98765abcde"}, "Enter valid 10-digit mobile"),
        ({"address": ""}, "Address required"),
        ({"address": "a" * 201}, "Address must be at most 200 characters"),
        ({"branch": ""}, "Branch required"),
        ({"receipt_date": ""}, "Date required"),
        ({"items": []}, "Add at least one item"),
        ({"items": [{"name": " ", "quantity": 1, "price": 1}]}, "Item name required"),
        ({"items": [{"name": "n" * 101, "quantity": 1, "price": 1}]}, "Item name must be at most 100 characters"),
        ({"items": [{"name": "Pill", "quantity": 0, "price": 1}]}, "Quantity must be positive"),
        ({"items": [{"name": "Pill", "quantity": 10001, "price": 1}]}, "Quantity must be at most 10000"),
        ({"items": [{"name": "Pill", "quantity": 1, "price": -5}]}, "Price must be positive"),
        ({"items": [{"name": "Pill", "quantity": 1, "price": 1000001}]}, "Price must be at most 1000000"),
        ({"tax_rate": 101}, "Tax rate must be between 0 and 100"),
        ({"tax_rate": -1}, "Tax rate must be between 0 and 100"),
    ],
)
def test_rule_messages(overrides, message):
    assert first_message(valid_payload(**overrides)) == message


def test_missing_fields_report_the_same_messages():
    payload = valid_payload()
    del payload["customer_name"]
    assert first_message(payload) == "Name required"

    payload = valid_payload()
    del payload["receipt_date"]
    assert first_message(payload) == "Date required"

    payload = valid_payload()
    del payload["items"]
    assert first_message(payload) == "Add at least one item"


def test_first_violated_rule_wins():
    payload = valid_payload(customer_name="", mobile_number="1", items=[])
    assert first_message(payload) == "Name required"

    payload = valid_payload(mobile_number="1", address="")
    assert first_message(payload) == "Enter valid 10-digit mobile"


def test_trims_text_fields():
    receipt = ReceiptCreate(**valid_payload(customer_name="  Ravi  ", mobile_number=" 9876543210 "))
    assert receipt.customer_name == "Ravi"
    assert receipt.mobile_number == "9876543210"


def test_boundary_values_are_accepted():
    receipt = ReceiptCreate(
        **valid_payload(
            customer_name="x" * 100,
            items=[{"name": "Bulk", "quantity": 10000, "price": 1000000}],
            tax_rate=0,
        )
    )
    assert receipt.items[0].quantity == 10000
    assert ReceiptCreate(**valid_payload(tax_rate=100)).tax_rate == 100


def test_clinical_fields_are_limited():
    with pytest.raises(ValidationError):
        ReceiptCreate(**valid_payload(bp="1" * 21))
