"""BDD tests for payment review and liquidation."""

from marketplace.liquidation.settlement import liquidations_for
from marketplace.payment.payment import Payment
from protean import current_domain
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/payment_settlement.feature")


def _payment(ctx):
    return current_domain.repository_for(Payment).get(ctx["payment_id"])


@when("the admin liquidates the payment")
def admin_liquidates(ctx, liquidate):
    ctx["outcome"] = liquidate(ctx["payment_id"])


@then(parsers.cfparse("the payment amount is {amount:g}"))
def payment_amount(ctx, amount):
    assert _payment(ctx).amount == amount


@then(parsers.cfparse("the admin commission is {commission:g} and the seller earns {earnings:g}"))
def commission_split(ctx, commission, earnings):
    payment = _payment(ctx)
    assert payment.admin_commission == commission
    assert payment.seller_earnings == earnings
    assert round(payment.admin_commission + payment.seller_earnings, 2) == payment.amount


@then(parsers.cfparse("there is {count:d} liquidation record for the payment"))
def liquidation_record_count(ctx, count):
    assert len(liquidations_for(ctx["payment_id"])) == count


@then("the payment is not liquidated")
def not_liquidated(ctx):
    payment = _payment(ctx)
    assert payment.liquidated is False
    assert liquidations_for(ctx["payment_id"]) == []
