import logging

from django.conf import settings

from products.delivery import RULE_OTHER_CITY, RULE_SAME_CITY, normalize_city
from .models import DeliveryAgency

logger = logging.getLogger(__name__)


def agency_covers(agency, city):
    target = normalize_city(city)
    return any(normalize_city(c) == target for c in agency.citiesCovered or [])


def calculate_quote(pickup_city, dropoff_city):
    """
    Price a platform delivery from ``pickup_city`` to ``dropoff_city``.

    Agencies are matched on the pickup city; the cheapest active agency for
    the applicable rule (same city or other city) wins.
    """
    same_city = normalize_city(pickup_city) == normalize_city(dropoff_city)
    rule = RULE_SAME_CITY if same_city else RULE_OTHER_CITY
    currency = settings.MARKETPLACE['CURRENCY']

    # Coverage is compared after normalization, so filter in Python
    eligible = [
        agency for agency in DeliveryAgency.objects.filter(isActive=True)
        if agency_covers(agency, pickup_city)
    ]
    if not eligible:
        message = f"Delivery is not available for pickups from {pickup_city} yet. No delivery agency covers this city."
        logger.debug("No agency covers pickup city %r", pickup_city)
        return {
            'available': False,
            'fee': 0,
            'currency': currency,
            'agencyId': None,
            'agencyName': None,
            'rule': rule,
            'message': message,
        }

    def fee_for(agency):
        return agency.feeSameCity if same_city else agency.feeOtherCity

    selected = min(eligible, key=lambda agency: (fee_for(agency), agency.id))
    return {
        'available': True,
        'fee': fee_for(selected),
        'currency': selected.currency,
        'agencyId': selected.id,
        'agencyName': selected.name,
        'rule': rule,
        'message': None,
    }
