import pytest

from api.models import CustomUser
from vendorapplications.models import VendorApplication
from vendors.models import KYC_APPROVED, VendorProfile
from .conftest import make_user

pytestmark = pytest.mark.django_db

BUSINESS_DETAILS = {
    "businessName": "Chez Tantine",
    "businessAddress": "Marche Central, Yaounde",
    "businessPhone": "699 12 34 56",
    "businessEmail": "tantine@example.cm",
}

INDIVIDUAL_DETAILS = {"fullNameOnId": "Ngo Bassa Esther", "location": "Bafoussam", "phone": "0677889900"}


def start(client, application_type="BUSINESS"):
    response = client.post("/vendor-applications/", {"type": application_type}, format="json")
    return response.json()["data"]["id"]


def attach(client, application_id, kind):
    return client.post(
        f"/vendor-applications/{application_id}/documents/",
        {"kind": kind, "documentUrl": f"https://files.example.cm/applications/{kind.lower()}.pdf"},
        format="json",
    )


@pytest.fixture
def submitted_business(as_user, customer):
    client = as_user(customer)
    application_id = start(client)
    client.put(f"/vendor-applications/{application_id}/business-details/", BUSINESS_DETAILS, format="json")
    attach(client, application_id, "TAXPAYER_DOC")
    assert client.post(f"/vendor-applications/{application_id}/submit/").status_code == 200
    return VendorApplication.objects.get(pk=application_id)


def test_business_application_goes_to_manual_verification(as_user, customer, submitted_business):
    assert submitted_business.status == VendorApplication.PENDING_MANUAL_VERIFICATION
    assert submitted_business.businessPhone == "+237699123456"

    data = as_user(customer).get("/vendor-applications/me/").json()["data"]
    assert data["id"] == submitted_business.id
    assert [doc["kind"] for doc in data["documents"]] == ["TAXPAYER_DOC"]


def test_starting_again_returns_the_draft(as_user, customer):
    client = as_user(customer)
    first = client.post("/vendor-applications/", {"type": "BUSINESS"}, format="json")
    assert first.status_code == 201

    again = client.post("/vendor-applications/", {"type": "BUSINESS"}, format="json")
    assert again.status_code == 200
    assert again.json()["data"]["id"] == first.json()["data"]["id"]

    switched = client.post("/vendor-applications/", {"type": "INDIVIDUAL"}, format="json")
    assert switched.json()["data"]["type"] == "INDIVIDUAL"
    assert VendorApplication.objects.count() == 1


def test_cannot_switch_type_while_under_review(as_user, customer, submitted_business):
    response = as_user(customer).post("/vendor-applications/", {"type": "INDIVIDUAL"}, format="json")
    assert response.status_code == 400
    assert response.json() == {"message": "You already have an application in progress"}


def test_details_must_match_application_type(as_user, customer):
    client = as_user(customer)
    application_id = start(client, "INDIVIDUAL")
    response = client.put(
        f"/vendor-applications/{application_id}/business-details/", BUSINESS_DETAILS, format="json"
    )
    assert response.status_code == 400
    assert response.json() == {"message": "This is not a business application"}


def test_individual_application_needs_all_identity_documents(as_user, customer):
    client = as_user(customer)
    application_id = start(client, "INDIVIDUAL")
    client.put(f"/vendor-applications/{application_id}/individual-details/", INDIVIDUAL_DETAILS, format="json")
    attach(client, application_id, "ID_FRONT")
    attach(client, application_id, "SELFIE")

    response = client.post(f"/vendor-applications/{application_id}/submit/")
    assert response.status_code == 400
    assert response.json() == {"message": "All KYC documents are required (ID front, ID back, selfie)"}

    attach(client, application_id, "ID_BACK")
    response = client.post(f"/vendor-applications/{application_id}/submit/")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == VendorApplication.PENDING_KYC_REVIEW


def test_submit_requires_details(as_user, customer):
    client = as_user(customer)
    application_id = start(client)
    attach(client, application_id, "TAXPAYER_DOC")
    response = client.post(f"/vendor-applications/{application_id}/submit/")
    assert response.status_code == 400
    assert response.json() == {"message": "Missing required business details"}


def test_reattaching_a_document_replaces_it(as_user, customer):
    client = as_user(customer)
    application_id = start(client)
    attach(client, application_id, "TAXPAYER_DOC")
    client.post(
        f"/vendor-applications/{application_id}/documents/",
        {"kind": "TAXPAYER_DOC", "documentUrl": "https://files.example.cm/applications/niu-2.pdf"},
        format="json",
    )
    documents = VendorApplication.objects.get(pk=application_id).documents.all()
    assert [doc.documentUrl for doc in documents] == ["https://files.example.cm/applications/niu-2.pdf"]


def test_application_is_locked_under_review(as_user, customer, submitted_business):
    response = as_user(customer).put(
        f"/vendor-applications/{submitted_business.id}/business-details/", BUSINESS_DETAILS, format="json"
    )
    assert response.status_code == 403
    assert response.json() == {"message": "Application cannot be edited in current status"}


def test_other_users_cannot_touch_an_application(as_user, other_customer, submitted_business):
    response = as_user(other_customer).post(f"/vendor-applications/{submitted_business.id}/submit/")
    assert response.status_code == 404


def test_vendors_cannot_apply(as_user, vendor):
    response = as_user(vendor.user).post("/vendor-applications/", {"type": "BUSINESS"}, format="json")
    assert response.status_code == 403


def test_admin_approval_creates_verified_vendor(as_user, admin_user, customer, submitted_business):
    admin = as_user(admin_user)
    listed = admin.get("/vendor-applications/admin/").json()
    assert [a["id"] for a in listed["data"]] == [submitted_business.id]

    response = admin.post(f"/vendor-applications/admin/{submitted_business.id}/approve/")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == VendorApplication.APPROVED

    customer.refresh_from_db()
    assert customer.role == CustomUser.VENDOR
    profile = VendorProfile.objects.get(user=customer)
    assert profile.businessName == "Chez Tantine"
    assert profile.kycStatus == KYC_APPROVED

    again = admin.post(f"/vendor-applications/admin/{submitted_business.id}/approve/")
    assert again.status_code == 400


def test_admin_rejection_needs_reason(as_user, admin_user, customer, submitted_business):
    admin = as_user(admin_user)
    response = admin.post(f"/vendor-applications/admin/{submitted_business.id}/reject/", {}, format="json")
    assert response.status_code == 400
    assert response.json() == {"message": "A rejection reason is required"}

    response = admin.post(
        f"/vendor-applications/admin/{submitted_business.id}/reject/",
        {"reason": "Taxpayer number does not match"},
        format="json",
    )
    assert response.status_code == 200
    submitted_business.refresh_from_db()
    assert submitted_business.status == VendorApplication.REJECTED
    assert submitted_business.rejectionReason == "Taxpayer number does not match"
    customer.refresh_from_db()
    assert customer.role == CustomUser.CUSTOMER


def test_rejected_application_can_be_fixed_and_resubmitted(as_user, admin_user, customer, submitted_business):
    as_user(admin_user).post(
        f"/vendor-applications/admin/{submitted_business.id}/reject/", {"reason": "Blurry scan"}, format="json"
    )
    client = as_user(customer)
    assert attach(client, submitted_business.id, "TAXPAYER_DOC").status_code == 201
    response = client.post(f"/vendor-applications/{submitted_business.id}/submit/")
    assert response.status_code == 200
    assert response.json()["data"]["rejectionReason"] is None


def test_applicant_who_became_a_rider_cannot_be_approved(as_user, admin_user, customer, submitted_business):
    CustomUser.objects.filter(pk=customer.pk).update(role=CustomUser.RIDER)
    response = as_user(admin_user).post(f"/vendor-applications/admin/{submitted_business.id}/approve/")
    assert response.status_code == 400
    assert response.json() == {"message": "Only customer accounts can become vendors"}


def test_me_without_application(as_user):
    assert as_user(make_user()).get("/vendor-applications/me/").json() == {"data": None}
