"""BDD tests for the cart and checkout flow."""

from marketplace.cart.items import DecrementCartLine, IncrementCartLine, find_cart
from marketplace.payment.payment import Payment
from marketplace.shared.money import lines_total
from protean import current_domain
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/cart_checkout.feature")


def _payment(ctx):
    return current_domain.repository_for(Payment).get(ctx["payment_id"])


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the buyer adds "{label}" to the cart'))
def buyer_adds(ctx, add_to_cart, label):
    add_to_cart(ctx["products"][label])


@when(parsers.cfparse('the buyer increments "{label}"'))
def buyer_increments(ctx, label):
    current_domain.process(
        IncrementCartLine(caller_id="buyer-001", product_id=ctx["products"][label]),
        asynchronous=False,
    )


@when(parsers.cfparse('the buyer decrements "{label}"'))
def buyer_decrements(ctx, label):
    current_domain.process(
        DecrementCartLine(caller_id="buyer-001", product_id=ctx["products"][label]),
        asynchronous=False,
    )


@when(parsers.cfparse('the buyer checks out both "{first}" and "{second}"'))
def buyer_checks_out_two(ctx, checkout, first, second):
    result = checkout([ctx["products"][first], ctx["products"][second]])
    ctx["payment_id"] = result["payment_id"]


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart total is {total:g}"))
def cart_total(total):
    lines = find_cart("buyer-001").lines
    assert lines_total({"price": line.unit_price, "quantity": line.quantity} for line in lines) == total


@then(parsers.cfparse('the payment is solo for "{label}" priced at {price:g}'))
def solo_payment(ctx, label, price):
    payment = _payment(ctx)
    assert payment.is_bulk is False
    assert payment.product_id == ctx["products"][label]
    assert payment.price == price
    assert payment.total_price == price


@then(parsers.cfparse("the payment is bulk with {count:d} lines totalling {total:g}"))
def bulk_payment(ctx, count, total):
    payment = _payment(ctx)
    assert payment.is_bulk is True
    assert len(payment.products) == count
    assert payment.total_price == total


@then(parsers.cfparse("the payment reference is {length:d} characters long"))
def reference_length(ctx, length):
    assert len(_payment(ctx).reference_id) == length


@then("the payment keeps its first reference")
def reference_unchanged(ctx):
    assert _payment(ctx).reference_id == ctx["first_reference"]


@then(parsers.cfparse("the buyer has {count:d} payment"))
def buyer_payment_count(count):
    payments = current_domain.repository_for(Payment)._dao.query.filter(user_id="buyer-001").all().items
    assert len(payments) == count
