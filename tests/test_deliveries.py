import pytest
from django.db import connection
from django.test.utils import CaptureQueriesContext

from deliveries.models import DeliveryAgency, DeliveryJob
from orders.models import Order
from .conftest import make_agency, place_order

pytestmark = pytest.mark.django_db


@pytest.fixture
def open_job(as_user, customer, vendor, jemo_product, agency):
    order = place_order(as_user(customer), (jemo_product, 1))
    as_user(vendor.user).post(f"/vendor/orders/{order.id}/confirm/")
    return DeliveryJob.objects.get(order=order)


def test_quote_picks_cheapest_agency(api_client, agency):
    cheaper = make_agency("Budget Colis", cities=("douala", "Yaoundé"), fee_same=1000, fee_other=1800)
    response = api_client.get("/delivery/quote/", {"pickupCity": "Douala", "dropoffCity": "Yaounde"})
    assert response.status_code == 200
    body = response.json()
    assert body["available"] is True
    assert body["fee"] == 1800
    assert body["agencyId"] == cheaper.id
    assert body["rule"] == "OTHER_CITY"


def test_quote_ignores_inactive_agencies(api_client):
    make_agency("Sleeping Colis", cities=("Garoua",), active=False)
    body = api_client.get("/delivery/quote/", {"pickupCity": "Garoua", "dropoffCity": "Garoua"}).json()
    assert body["available"] is False
    assert body["fee"] == 0
    assert "Garoua" in body["message"]


def test_quote_requires_both_cities(api_client):
    response = api_client.get("/delivery/quote/", {"pickupCity": "Douala"})
    assert response.status_code == 400


def test_confirmed_platform_order_opens_a_job(open_job):
    assert open_job.status == DeliveryJob.OPEN
    assert open_job.agency is None
    assert open_job.pickupCity == "Douala"
    assert open_job.fee == 1200
    assert list(open_job.logs.values_list("event", flat=True)) == ["CREATED"]


def test_available_jobs_match_covered_cities(as_user, open_job, agency):
    data = as_user(agency.user).get("/delivery/jobs/available/").json()["data"]
    assert [job["id"] for job in data] == [open_job.id]

    elsewhere = make_agency("Bamenda Express", cities=("Bamenda",))
    assert as_user(elsewhere.user).get("/delivery/jobs/available/").json()["data"] == []


def test_accept_moves_order_in_transit(as_user, open_job, agency):
    response = as_user(agency.user).post(f"/delivery/jobs/{open_job.id}/accept/")
    assert response.status_code == 200
    open_job.refresh_from_db()
    assert open_job.status == DeliveryJob.ACCEPTED
    assert open_job.agency == agency
    assert Order.objects.get(pk=open_job.order_id).status == Order.IN_TRANSIT


def test_second_agency_cannot_take_accepted_job(as_user, open_job, agency):
    rival = make_agency("Rival Colis")
    as_user(agency.user).post(f"/delivery/jobs/{open_job.id}/accept/")

    response = as_user(rival.user).post(f"/delivery/jobs/{open_job.id}/accept/")
    assert response.status_code == 409
    assert response.json() == {"message": "This job has already been accepted by another agency."}
    open_job.refresh_from_db()
    assert open_job.agency == agency


def test_agency_must_cover_pickup_city(as_user, open_job):
    outsider = make_agency("Bamenda Express", cities=("Bamenda",))
    response = as_user(outsider.user).post(f"/delivery/jobs/{open_job.id}/accept/")
    assert response.status_code == 403


def test_only_assigned_agency_can_deliver(as_user, open_job, agency):
    rival = make_agency("Rival Colis")
    as_user(agency.user).post(f"/delivery/jobs/{open_job.id}/accept/")

    response = as_user(rival.user).post(f"/delivery/jobs/{open_job.id}/deliver/")
    assert response.status_code == 403
    assert response.json() == {"message": "You can only update jobs assigned to your agency."}


def test_deliver_marks_order_delivered(as_user, open_job, agency, customer):
    client = as_user(agency.user)
    client.post(f"/delivery/jobs/{open_job.id}/accept/")
    response = client.post(f"/delivery/jobs/{open_job.id}/deliver/")
    assert response.status_code == 200
    assert Order.objects.get(pk=open_job.order_id).status == Order.DELIVERED

    # The customer can then close the order
    response = as_user(customer).post(f"/orders/{open_job.order_id}/complete/")
    assert response.status_code == 200


def first_query(queries, fragment):
    return next(i for i, query in enumerate(queries) if fragment in query["sql"])


@pytest.mark.parametrize("step", ["accept", "deliver"])
def test_job_updates_lock_the_order_before_the_job(as_user, open_job, agency, step):
    client = as_user(agency.user)
    if step == "deliver":
        client.post(f"/delivery/jobs/{open_job.id}/accept/")

    with CaptureQueriesContext(connection) as ctx:
        assert client.post(f"/delivery/jobs/{open_job.id}/{step}/").status_code == 200
    queries = ctx.captured_queries
    assert first_query(queries, 'FROM "orders_order"') < first_query(queries, 'UPDATE "deliveries_deliveryjob"')


def test_cannot_deliver_before_accepting(as_user, open_job, agency):
    response = as_user(agency.user).post(f"/delivery/jobs/{open_job.id}/deliver/")
    assert response.status_code == 403


def test_inactive_agency_is_refused(as_user, open_job, agency):
    DeliveryAgency.objects.filter(pk=agency.pk).update(isActive=False)
    response = as_user(agency.user).post(f"/delivery/jobs/{open_job.id}/accept/")
    assert response.status_code == 403
    assert response.json() == {"message": "Your agency is not active. Contact admin for assistance."}


def test_cancelled_job_cannot_be_accepted(as_user, open_job, agency, customer):
    as_user(customer).post(f"/orders/{open_job.order_id}/cancel/", {}, format="json")
    response = as_user(agency.user).post(f"/delivery/jobs/{open_job.id}/accept/")
    assert response.status_code == 400


def test_my_jobs_lists_only_own_jobs(as_user, open_job, agency):
    client = as_user(agency.user)
    client.post(f"/delivery/jobs/{open_job.id}/accept/")
    body = client.get("/delivery/jobs/mine/").json()
    assert body["meta"]["total"] == 1
    assert body["data"][0]["agencyName"] == agency.name


def test_admin_creates_agency(as_user, admin_user):
    payload = {
        "name": "Littoral Colis", "phone": "699 00 11 22", "password": "secret123",
        "citiesCovered": ["Douala", " douala ", "Limbe"], "feeSameCity": 1000,
    }
    response = as_user(admin_user).post("/delivery/admin/agencies/create/", payload, format="json")
    assert response.status_code == 201
    agency = DeliveryAgency.objects.get(name="Littoral Colis")
    assert agency.user.role == "agency"
    assert agency.phone == "+237699001122"
    assert agency.citiesCovered == ["Douala", "Limbe"]
    assert agency.feeOtherCity == 2000


def test_admin_deactivates_agency(as_user, admin_user, agency):
    response = as_user(admin_user).post(f"/delivery/admin/agencies/{agency.id}/deactivate/")
    assert response.status_code == 200
    agency.refresh_from_db()
    assert agency.isActive is False


def test_admin_job_detail_includes_logs(as_user, admin_user, open_job, agency):
    as_user(agency.user).post(f"/delivery/jobs/{open_job.id}/accept/")
    data = as_user(admin_user).get(f"/delivery/admin/jobs/{open_job.id}/").json()["data"]
    assert [log["event"] for log in data["logs"]] == ["CREATED", "ACCEPTED"]
