"""Shared BDD fixtures and step definitions for the marketplace scenarios.

Products are referred to by short labels ("P1", "S1") in the feature files;
``ctx["products"]`` maps each label to the stored product id.
"""

import pytest
from marketplace.cart.items import find_cart
from marketplace.catalogue.moderation import ModerateProduct
from marketplace.catalogue.product import Product
from marketplace.payment.payment import Payment
from protean import current_domain
from pytest_bdd import given, parsers, then, when


@pytest.fixture()
def ctx():
    """Scenario state: product labels, the payment under test and the last outcome."""
    return {"products": {}, "payment_id": None, "outcome": None, "error": None}


def _moderate(product_id, decision):
    return current_domain.process(
        ModerateProduct(caller_id="admin-001", caller_role="admin", product_id=product_id, decision=decision),
        asynchronous=False,
    )


def product_id_for(ctx, label):
    return ctx["products"][label]


def payment_under_test(ctx):
    return current_domain.repository_for(Payment).get(ctx["payment_id"])


# ---------------------------------------------------------------------------
# Given / When steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('an approved "{category}" product "{label}" priced at {price:g}'))
def approved_labelled_product(ctx, approved_product, category, label, price):
    ctx["products"][label] = approved_product(name=f"{category} {label}", category=category, price=price)


@given(parsers.cfparse('the seller submitted a "{category}" product "{label}" priced at {price:g}'))
@when(parsers.cfparse('the seller submits a "{category}" product "{label}" priced at {price:g}'))
def seller_submits(ctx, submit_product, category, label, price):
    ctx["products"][label] = submit_product(name=f"{category} {label}", category=category, price=price)


@given(parsers.cfparse('the admin rejected product "{label}"'))
def admin_rejected(ctx, label):
    _moderate(product_id_for(ctx, label), "rejected")


@when(parsers.cfparse('the admin approves product "{label}"'))
def admin_approves_product(ctx, label):
    ctx["outcome"] = _moderate(product_id_for(ctx, label), "approved")


@given(parsers.cfparse('the buyer has {quantity:d} of "{label}" in the cart'))
def buyer_has_in_cart(ctx, add_to_cart, quantity, label):
    add_to_cart(product_id_for(ctx, label), times=quantity)


@given(parsers.cfparse('the buyer checked out "{label}"'))
@when(parsers.cfparse('the buyer checks out "{label}"'))
def buyer_checks_out(ctx, checkout, label):
    result = checkout([product_id_for(ctx, label)])
    ctx.setdefault("first_reference", result["reference_id"])
    ctx["payment_id"] = result["payment_id"]
    ctx["reference_id"] = result["reference_id"]


@given("the admin approved the payment")
@when("the admin approves the payment")
def admin_approves_payment(ctx, review_payment):
    ctx["outcome"] = review_payment(ctx["payment_id"], decision="approved")


@when("the admin declines the payment")
def admin_declines_payment(ctx, review_payment):
    ctx["outcome"] = review_payment(ctx["payment_id"], decision="declined")


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the outcome is "{outcome}"'))
def outcome_is(ctx, outcome):
    assert ctx["outcome"] == outcome


@then(parsers.cfparse('the product "{label}" is "{status}"'))
def product_status_is(ctx, label, status):
    assert current_domain.repository_for(Product).get(product_id_for(ctx, label)).status == status


@then(parsers.cfparse('the payment status is "{status}"'))
def payment_status_is(ctx, status):
    assert payment_under_test(ctx).status == status


@then(parsers.cfparse('the cart line for "{label}" has quantity {quantity:d}'))
def cart_line_quantity(ctx, label, quantity):
    line = find_cart("buyer-001").line_for(product_id_for(ctx, label))
    assert line is not None
    assert line.quantity == quantity


@then(parsers.cfparse('the cart has no line for "{label}"'))
def cart_has_no_line(ctx, label):
    cart = find_cart("buyer-001")
    assert cart is None or cart.line_for(product_id_for(ctx, label)) is None


@then(parsers.cfparse('the {recipient} has a "{kind}" notification mentioning "{text}"'))
def has_notification(notifications_for, recipient, kind, text):
    user_id = {"buyer": "buyer-001", "seller": "seller-001"}[recipient]
    latest = notifications_for(user_id)[0]
    assert latest.notification_type == kind
    assert text in latest.message
