import pytest

from api.exceptions import ConflictError
from api.models import CustomUser
from api.serializers import RegisterSerializer
from users.models import RiderProfile
from vendors.models import VendorProfile

pytestmark = pytest.mark.django_db


def register(client, **overrides):
    payload = {"phone": "676858216", "password": "secret123", "name": "Ngono Marie"}
    payload.update(overrides)
    return client.post("/auth/register/", payload, format="json")


def test_register_customer_returns_tokens(api_client):
    response = register(api_client)
    assert response.status_code == 201
    body = response.json()
    assert body["accessToken"] and body["refreshToken"]
    assert body["user"]["phone"] == "+237676858216"
    assert body["user"]["role"] == "customer"


def test_duplicate_normalized_phone_conflicts(api_client):
    assert register(api_client, phone="+237 676 858 216").status_code == 201
    response = register(api_client, phone="0676858216", name="Someone Else")
    assert response.status_code == 409
    assert response.json() == {"message": "Phone number already registered"}
    assert CustomUser.objects.count() == 1


def test_phone_taken_after_validation_conflicts():
    serializer = RegisterSerializer(data={"phone": "676858216", "password": "secret123", "name": "Ngono Marie"})
    assert serializer.is_valid(), serializer.errors
    CustomUser.objects.create_user(phone="+237676858216", password="secret123", name="Quicker Marie")

    with pytest.raises(ConflictError, match="Phone number already registered"):
        serializer.save()
    assert CustomUser.objects.count() == 1


def test_register_admin_is_rejected(api_client):
    response = register(api_client, role="admin")
    assert response.status_code == 400
    assert response.json()["message"] == "Admin registration is not allowed"


def test_register_agency_is_rejected(api_client):
    response = register(api_client, role="agency")
    assert response.status_code == 400
    assert "administrators" in response.json()["message"]


def test_register_vendor_creates_profile(api_client):
    response = register(api_client, role="vendor", businessName="Chez Tanty", businessAddress="Bonapriso", city="Douala")
    assert response.status_code == 201
    profile = VendorProfile.objects.get(user__phone="+237676858216")
    assert profile.businessName == "Chez Tanty"
    assert profile.kycStatus == "NOT_SUBMITTED"


def test_register_vendor_requires_business_details(api_client):
    response = register(api_client, role="vendor")
    assert response.status_code == 400
    assert not CustomUser.objects.exists()


def test_invalid_phone_is_rejected(api_client):
    response = register(api_client, phone="12345")
    assert response.status_code == 400
    assert response.json()["message"] == "Phone number must be 9 digits (e.g., 676858216)"


def test_login_and_me_with_bearer_token(api_client):
    register(api_client)
    response = api_client.post("/auth/login/", {"phone": "0676858216", "password": "secret123"}, format="json")
    assert response.status_code == 200
    token = response.json()["accessToken"]

    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    me = api_client.get("/auth/me/")
    assert me.status_code == 200
    assert me.json()["phone"] == "+237676858216"


def test_login_with_wrong_password(api_client):
    register(api_client)
    response = api_client.post("/auth/login/", {"phone": "676858216", "password": "nope"}, format="json")
    assert response.status_code == 401
    assert response.json() == {"message": "Invalid credentials"}


def test_suspended_account_cannot_login(api_client):
    register(api_client)
    CustomUser.objects.filter(phone="+237676858216").update(is_active=False)
    response = api_client.post("/auth/login/", {"phone": "676858216", "password": "secret123"}, format="json")
    assert response.status_code == 401
    assert response.json() == {"message": "Account is suspended"}


def test_me_requires_authentication(api_client):
    assert api_client.get("/auth/me/").status_code == 401


def test_customer_upgrades_to_rider(as_user, customer):
    response = as_user(customer).post("/auth/upgrade-role/", {"role": "rider", "city": "Yaounde"}, format="json")
    assert response.status_code == 200
    customer.refresh_from_db()
    assert customer.role == "rider"
    assert RiderProfile.objects.filter(user=customer, city="Yaounde").exists()


def test_vendor_cannot_upgrade(as_user, vendor):
    response = as_user(vendor.user).post("/auth/upgrade-role/", {"role": "rider", "city": "Buea"}, format="json")
    assert response.status_code == 400
    assert response.json()["message"] == "Only customers can upgrade their role"
