import pytest

from orders.models import Order
from payment.models import Payment
from .conftest import place_order

pytestmark = pytest.mark.django_db


def test_cash_on_delivery_cannot_be_confirmed_by_hand(as_user, admin_user, customer, product):
    order = place_order(as_user(customer), (product, 1), paymentMethod="COD")
    response = as_user(admin_user).post(f"/payments/{order.payment.id}/confirm/")
    assert response.status_code == 400
    assert response.json() == {"message": "Cash on delivery payments cannot be confirmed or failed manually"}


def test_confirm_mobile_money_payment(as_user, admin_user, customer, product):
    order = place_order(as_user(customer), (product, 1))
    response = as_user(admin_user).post(
        f"/payments/{order.payment.id}/confirm/", {"transactionId": "MP240101.1234.A00001"}, format="json"
    )
    assert response.status_code == 200
    payment = Payment.objects.get(pk=order.payment.id)
    assert payment.status == Payment.SUCCESS
    assert payment.transactionId == "MP240101.1234.A00001"
    assert payment.paidAt is not None

    order.refresh_from_db()
    assert order.status == Order.PENDING

    again = as_user(admin_user).post(f"/payments/{order.payment.id}/confirm/")
    assert again.status_code == 400
    assert again.json() == {"message": "Payment is already SUCCESS"}


def test_failed_payment_cancels_order(as_user, admin_user, customer, product):
    order = place_order(as_user(customer), (product, 3))
    response = as_user(admin_user).post(f"/payments/{order.payment.id}/fail/")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == Payment.FAILED
    assert response.json()["data"]["orderStatus"] == Order.CANCELLED

    order.refresh_from_db()
    assert order.cancelReason == "Payment failed"
    assert order.cancelledBy == "admin"
    product.refresh_from_db()
    assert product.stock == 10


def test_payment_list_filters(as_user, admin_user, customer, product):
    place_order(as_user(customer), (product, 1), paymentMethod="COD")
    place_order(as_user(customer), (product, 1), paymentMethod="ORANGE_MONEY")
    body = as_user(admin_user).get("/payments/", {"paymentMethod": "ORANGE_MONEY"}).json()
    assert body["meta"]["total"] == 1
    assert body["data"][0]["paymentMethod"] == "ORANGE_MONEY"


def test_payments_are_admin_only(as_user, customer):
    assert as_user(customer).get("/payments/").status_code == 403
