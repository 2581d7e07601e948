import pytest
from django.core import mail

from deliveries.models import DeliveryJob
from orders.models import Order
from payment.models import Payment
from wallet.ledger import get_balances, get_or_create_wallet
from .conftest import make_product, make_vendor, order_payload, place_order

pytestmark = pytest.mark.django_db


def balances(vendor):
    return get_balances(get_or_create_wallet(vendor))


def test_create_order_snapshots_prices_and_reserves_stock(as_user, customer, product):
    response = as_user(customer).post("/orders/create/", order_payload((product, 2)), format="json")
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["status"] == "PENDING"
    assert data["subtotal"] == 10000
    assert data["deliveryFee"] == 1000
    assert data["deliveryFeeType"] == "flat"
    assert data["totalAmount"] == 11000
    assert data["deliveryPhone"] == "+237677112233"
    assert data["items"][0]["lineTotal"] == 10000

    product.refresh_from_db()
    assert product.stock == 8
    payment = Payment.objects.get(order_id=data["id"])
    assert payment.status == Payment.INITIATED
    assert payment.amount == 11000
    assert mail.outbox and mail.outbox[0].to == ["awa@example.cm"]


def test_duplicate_lines_are_merged(as_user, customer, product):
    order = place_order(as_user(customer), (product, 1), (product, 2))
    assert list(order.items.values_list("quantity", flat=True)) == [3]


def test_discounted_price_is_charged(as_user, customer, vendor):
    item = make_product(vendor, price=5000, discountPrice=3500)
    order = place_order(as_user(customer), (item, 1))
    assert order.subtotal == 3500
    assert order.items.get().unitPrice == 3500


def test_order_needs_items(as_user, customer):
    response = as_user(customer).post("/orders/create/", order_payload(), format="json")
    assert response.status_code == 400
    assert response.json() == {"message": "Order must have at least one item"}


def test_insufficient_stock_leaves_nothing_behind(as_user, customer, product):
    response = as_user(customer).post("/orders/create/", order_payload((product, 11)), format="json")
    assert response.status_code == 400
    assert response.json() == {"message": f"Insufficient stock for product: {product.name}"}
    product.refresh_from_db()
    assert product.stock == 10
    assert not Order.objects.exists()


def test_items_from_several_vendors_are_rejected(as_user, customer, product):
    other = make_product(make_vendor("Second Shop"), name="Garri")
    response = as_user(customer).post("/orders/create/", order_payload((product, 1), (other, 1)), format="json")
    assert response.status_code == 400
    assert response.json() == {"message": "All items in an order must come from the same vendor"}


def test_hidden_products_cannot_be_ordered(as_user, customer, vendor):
    pending = make_product(vendor, status="PENDING")
    response = as_user(customer).post("/orders/create/", order_payload((pending, 1)), format="json")
    assert response.status_code == 404


def test_vendor_cannot_place_orders(as_user, vendor, product):
    response = as_user(vendor.user).post("/orders/create/", order_payload((product, 1)), format="json")
    assert response.status_code == 403


def test_lifecycle_moves_earnings_from_pending_to_available(as_user, customer, vendor, product):
    order = place_order(as_user(customer), (product, 2))

    vendor_client = as_user(vendor.user)
    assert vendor_client.post(f"/vendor/orders/{order.id}/confirm/").status_code == 200
    assert balances(vendor)["pendingBalance"] == 10000
    assert balances(vendor)["availableBalance"] == 0

    assert vendor_client.post(f"/vendor/orders/{order.id}/in-transit/").status_code == 200
    assert vendor_client.post(f"/vendor/orders/{order.id}/delivered/").status_code == 200

    customer_client = as_user(customer)
    response = customer_client.post(f"/orders/{order.id}/complete/")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "COMPLETED"
    assert balances(vendor) == {"pendingBalance": 0, "availableBalance": 10000, "currency": "XAF"}

    # Completing twice neither fails nor credits again
    assert customer_client.post(f"/orders/{order.id}/complete/").status_code == 200
    assert balances(vendor)["availableBalance"] == 10000


def test_free_order_can_be_confirmed_and_completed(as_user, customer, vendor):
    giveaway = make_product(vendor, price=500, discountPrice=0, freeDelivery=True)
    order = place_order(as_user(customer), (giveaway, 1))
    assert order.subtotal == 0

    vendor_client = as_user(vendor.user)
    response = vendor_client.post(f"/vendor/orders/{order.id}/confirm/")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "CONFIRMED"
    assert balances(vendor)["pendingBalance"] == 0

    vendor_client.post(f"/vendor/orders/{order.id}/in-transit/")
    vendor_client.post(f"/vendor/orders/{order.id}/delivered/")
    assert as_user(customer).post(f"/orders/{order.id}/complete/").status_code == 200
    assert balances(vendor) == {"pendingBalance": 0, "availableBalance": 0, "currency": "XAF"}


def test_customer_cancels_confirmed_order(as_user, customer, vendor, product):
    order = place_order(as_user(customer), (product, 4))
    as_user(vendor.user).post(f"/vendor/orders/{order.id}/confirm/")

    response = as_user(customer).post(f"/orders/{order.id}/cancel/", {"reason": "Changed my mind"}, format="json")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "CANCELLED"
    assert data["cancelledBy"] == "customer"
    assert data["cancelReason"] == "Changed my mind"

    product.refresh_from_db()
    assert product.stock == 10
    assert balances(vendor)["pendingBalance"] == 0


def test_cannot_cancel_after_dispatch(as_user, customer, vendor, product):
    order = place_order(as_user(customer), (product, 1))
    vendor_client = as_user(vendor.user)
    vendor_client.post(f"/vendor/orders/{order.id}/confirm/")
    vendor_client.post(f"/vendor/orders/{order.id}/in-transit/")

    response = as_user(customer).post(f"/orders/{order.id}/cancel/", {}, format="json")
    assert response.status_code == 403
    assert response.json() == {"message": "Order cannot be cancelled once it is IN_TRANSIT"}
    order.refresh_from_db()
    assert order.status == Order.IN_TRANSIT


def test_illegal_transition_is_rejected(as_user, customer, vendor, product):
    order = place_order(as_user(customer), (product, 1))
    response = as_user(vendor.user).post(f"/vendor/orders/{order.id}/delivered/")
    assert response.status_code == 400
    assert response.json() == {"message": "Cannot move order from PENDING to DELIVERED as vendor"}


def test_customer_cannot_complete_undelivered_order(as_user, customer, product):
    order = place_order(as_user(customer), (product, 1))
    assert as_user(customer).post(f"/orders/{order.id}/complete/").status_code == 400


def test_other_customers_cannot_see_order(as_user, customer, other_customer, product):
    order = place_order(as_user(customer), (product, 1))
    response = as_user(other_customer).get(f"/orders/{order.id}/")
    assert response.status_code == 403


def test_other_vendor_cannot_confirm(as_user, customer, product):
    order = place_order(as_user(customer), (product, 1))
    stranger = make_vendor("Other Shop")
    assert as_user(stranger.user).post(f"/vendor/orders/{order.id}/confirm/").status_code == 403


def test_platform_delivery_is_dispatched_by_agency_only(as_user, customer, vendor, jemo_product, agency):
    order = place_order(as_user(customer), (jemo_product, 1))
    assert order.deliveryFee == 1200
    assert order.deliveryFeeAgency_id == agency.id

    vendor_client = as_user(vendor.user)
    vendor_client.post(f"/vendor/orders/{order.id}/confirm/")
    assert DeliveryJob.objects.get(order=order).status == DeliveryJob.OPEN
    assert vendor_client.post(f"/vendor/orders/{order.id}/in-transit/").status_code == 400


def test_cancelling_cancels_open_delivery_job(as_user, customer, vendor, jemo_product, agency):
    order = place_order(as_user(customer), (jemo_product, 1))
    as_user(vendor.user).post(f"/vendor/orders/{order.id}/confirm/")
    as_user(vendor.user).post(f"/vendor/orders/{order.id}/cancel/", {"reason": "Out of stock"}, format="json")
    assert DeliveryJob.objects.get(order=order).status == DeliveryJob.CANCELLED


def test_customer_order_list(as_user, customer, other_customer, product):
    place_order(as_user(customer), (product, 1))
    place_order(as_user(other_customer), (product, 1))
    body = as_user(customer).get("/orders/").json()
    assert body["meta"]["total"] == 1


def test_receipt_is_a_pdf(as_user, customer, product):
    order = place_order(as_user(customer), (product, 1))
    response = as_user(customer).get(f"/orders/{order.id}/receipt/")
    assert response.status_code == 200
    assert response["Content-Type"] == "application/pdf"
    assert f"Order_{order.id}_Receipt.pdf" in response["Content-Disposition"]
    assert b"".join(response.streaming_content).startswith(b"%PDF")


def test_admin_can_force_status(as_user, customer, admin_user, product):
    order = place_order(as_user(customer), (product, 1))
    response = as_user(admin_user).post(f"/orders/admin/{order.id}/status/", {"status": "CONFIRMED"}, format="json")
    assert response.status_code == 200
    order.refresh_from_db()
    assert order.status == Order.CONFIRMED
