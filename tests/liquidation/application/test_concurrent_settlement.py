"""Two admins settling the same payment from stale copies."""

import pytest
from marketplace.liquidation.liquidation import LiquidationRecord
from marketplace.liquidation.settlement import liquidations_for
from marketplace.payment.payment import Payment
from protean import current_domain
from protean.exceptions import ExpectedVersionError


@pytest.fixture()
def approved_payment(approved_product, add_to_cart, checkout, review_payment):
    product_id = approved_product(price=1000.0)
    add_to_cart(product_id, times=2)
    payment_id = checkout([product_id])["payment_id"]
    review_payment(payment_id)
    return payment_id


def test_stale_copy_cannot_liquidate_twice(approved_payment):
    payment_repo = current_domain.repository_for(Payment)
    record_repo = current_domain.repository_for(LiquidationRecord)
    first = payment_repo.get(approved_payment)
    second = payment_repo.get(approved_payment)

    first.liquidate()
    payment_repo.add(first)
    record_repo.add(LiquidationRecord.record(first))

    second.liquidate()
    with pytest.raises(ExpectedVersionError):
        payment_repo.add(second)

    records = liquidations_for(approved_payment)
    assert len(records) == 1
    assert records[0].seller_earnings == 1800.0
    assert payment_repo.get(approved_payment).seller_earnings == 1800.0
