import itertools

import pytest
from rest_framework.test import APIClient

from api.models import CustomUser
from deliveries.models import DeliveryAgency
from orders.models import Order
from products.models import Category, Product
from users.models import RiderProfile
from vendors.models import KYC_APPROVED, VendorProfile

_phones = itertools.count(1)


def next_phone():
    return f"+2376{next(_phones):08d}"


def make_user(role=CustomUser.CUSTOMER, name="Test User", email=None, password="secret123"):
    return CustomUser.objects.create_user(
        phone=next_phone(), password=password, name=name, role=role, email=email,
    )


def make_vendor(business_name="Mama Shop", city="Douala", kyc_status=KYC_APPROVED):
    user = make_user(CustomUser.VENDOR, name=f"{business_name} Owner")
    return VendorProfile.objects.create(
        user=user,
        businessName=business_name,
        businessAddress="Rue de la Joie, Akwa",
        city=city,
        kycStatus=kyc_status,
    )


def make_product(vendor, **overrides):
    fields = {
        "name": "Ndole spice mix",
        "description": "Home made",
        "price": 5000,
        "stock": 10,
        "city": vendor.city or "Douala",
        "status": Product.APPROVED,
        "flatDeliveryFee": 1000,
    }
    fields.update(overrides)
    return Product.objects.create(vendor=vendor, **fields)


def make_agency(name="Speedy Colis", cities=("Douala",), fee_same=1200, fee_other=2500, active=True):
    user = make_user(CustomUser.AGENCY, name=name)
    return DeliveryAgency.objects.create(
        user=user,
        name=name,
        phone=user.phone,
        citiesCovered=list(cities),
        feeSameCity=fee_same,
        feeOtherCity=fee_other,
        isActive=active,
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def as_user(api_client):
    """Return a client authenticated as the given user."""
    def _as(user):
        api_client.force_authenticate(user=user)
        return api_client
    return _as


@pytest.fixture
def customer(db):
    return make_user(CustomUser.CUSTOMER, name="Awa Customer", email="awa@example.cm")


@pytest.fixture
def other_customer(db):
    return make_user(CustomUser.CUSTOMER, name="Paul Customer")


@pytest.fixture
def admin_user(db):
    return make_user(CustomUser.ADMIN, name="Admin")


@pytest.fixture
def vendor(db):
    return make_vendor()


@pytest.fixture
def rider(db):
    user = make_user(CustomUser.RIDER, name="Moto Rider")
    return RiderProfile.objects.create(user=user, city="Yaounde")


@pytest.fixture
def category(db):
    return Category.objects.create(name="Groceries")


@pytest.fixture
def product(vendor, category):
    return make_product(vendor, category=category)


@pytest.fixture
def jemo_product(vendor):
    return make_product(vendor, name="Plantain chips", deliveryType=Product.JEMO_RIDER, flatDeliveryFee=None)


@pytest.fixture
def agency(db):
    return make_agency()


def order_payload(*items, city="Douala", **overrides):
    payload = {
        "items": [{"productId": product.id, "quantity": quantity} for product, quantity in items],
        "deliveryAddress": "Carrefour Ndokoti",
        "deliveryCity": city,
        "deliveryPhone": "677 11 22 33",
        "paymentMethod": "MTN_MOBILE_MONEY",
    }
    payload.update(overrides)
    return payload


def place_order(client, *items, **kwargs):
    """Checkout through the API and return the created Order."""
    response = client.post("/orders/create/", order_payload(*items, **kwargs), format="json")
    assert response.status_code == 201, response.json()
    return Order.objects.get(pk=response.json()["data"]["id"])
