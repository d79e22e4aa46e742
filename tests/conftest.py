import json
import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain is imported and initialized."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session")
def marketplace_bed():
    from marketplace.domain import marketplace

    from marketplace.utils.db import drop_db, setup_db

    bed = DomainFixture(marketplace)
    bed.setup()
    setup_db(marketplace)
    yield bed
    drop_db(marketplace)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(marketplace_bed):
    """Run every test inside the domain context and start each one from empty stores."""
    from marketplace.viewer import reset_viewer
    from protean import current_domain

    with marketplace_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()

    reset_viewer()


# ---------------------------------------------------------------------------
# Actors
# ---------------------------------------------------------------------------
BUYER_ID = "buyer-001"
SELLER_ID = "seller-001"
ADMIN_ID = "admin-001"


@pytest.fixture()
def buyer_id():
    return BUYER_ID


@pytest.fixture()
def seller_id():
    return SELLER_ID


@pytest.fixture()
def admin_id():
    return ADMIN_ID


# ---------------------------------------------------------------------------
# Command factories
# ---------------------------------------------------------------------------
@pytest.fixture()
def submit_product():
    from marketplace.catalogue.submission import SubmitProduct
    from protean import current_domain

    def _submit(**overrides):
        defaults = {
            "caller_id": SELLER_ID,
            "caller_role": "seller",
            "name": "Oslo Three-Seater",
            "price": 1000.0,
            "description": "Linen three-seater with oak legs",
            "category": "Sofa",
            "material": "Linen",
            "color": "Beige",
            "size": "210x90 cm",
            "prefab_key": "sofa_oslo_01",
            "uploader_name": "Casa Maria",
            "contact_no": "09171234567",
        }
        defaults.update(overrides)
        return current_domain.process(SubmitProduct(**defaults), asynchronous=False)

    return _submit


@pytest.fixture()
def moderate():
    from marketplace.catalogue.moderation import ModerateProduct
    from protean import current_domain

    def _moderate(product_id, decision="approved", caller_role="admin"):
        return current_domain.process(
            ModerateProduct(
                caller_id=ADMIN_ID,
                caller_role=caller_role,
                product_id=product_id,
                decision=decision,
            ),
            asynchronous=False,
        )

    return _moderate


@pytest.fixture()
def approved_product(submit_product, moderate):
    """Submit and approve a product, returning its id."""

    def _approved(**overrides):
        product_id = submit_product(**overrides)
        moderate(product_id, "approved")
        return product_id

    return _approved


@pytest.fixture()
def add_to_cart():
    from marketplace.cart.items import AddToCart
    from protean import current_domain

    def _add(product_id, times=1, user_id=BUYER_ID):
        quantity = None
        for _ in range(times):
            quantity = current_domain.process(
                AddToCart(caller_id=user_id, product_id=product_id),
                asynchronous=False,
            )
        return quantity

    return _add


@pytest.fixture()
def checkout():
    from marketplace.payment.checkout import Checkout
    from protean import current_domain

    def _checkout(product_ids, user_id=BUYER_ID):
        return current_domain.process(
            Checkout(caller_id=user_id, product_ids=json.dumps(product_ids)),
            asynchronous=False,
        )

    return _checkout


@pytest.fixture()
def review_payment():
    from marketplace.payment.review import ReviewPayment
    from protean import current_domain

    def _review(payment_id, decision="approved", caller_role="admin"):
        return current_domain.process(
            ReviewPayment(
                caller_id=ADMIN_ID,
                caller_role=caller_role,
                payment_id=payment_id,
                decision=decision,
            ),
            asynchronous=False,
        )

    return _review


@pytest.fixture()
def liquidate():
    from marketplace.liquidation.settlement import LiquidatePayment
    from protean import current_domain

    def _liquidate(payment_id, caller_role="admin"):
        return current_domain.process(
            LiquidatePayment(caller_id=ADMIN_ID, caller_role=caller_role, payment_id=payment_id),
            asynchronous=False,
        )

    return _liquidate


@pytest.fixture()
def shipping_address():
    return {
        "full_name": "Juan Dela Cruz",
        "street": "12 Mabini St",
        "barangay": "San Antonio",
        "province": "Laguna",
        "zip_code": "4027",
    }


@pytest.fixture()
def place_order(shipping_address):
    from marketplace.order.placement import PlaceOrder
    from protean import current_domain

    def _place(product_ids, user_id=BUYER_ID, seller_id=SELLER_ID, address=None):
        return current_domain.process(
            PlaceOrder(
                caller_id=user_id,
                seller_id=seller_id,
                product_ids=json.dumps(product_ids),
                shipping_address=json.dumps(address if address is not None else shipping_address),
            ),
            asynchronous=False,
        )

    return _place


@pytest.fixture()
def notifications_for():
    from marketplace.notification.reading import inbox

    return inbox
