import logging

from django.conf import settings

from .models import AdminSetting

logger = logging.getLogger(__name__)

DELIVERY_PRICING_KEY = 'jemo_delivery_pricing'
MIN_WITHDRAWAL_KEY = 'min_withdrawal'


def _get(key, default):
    try:
        return AdminSetting.objects.get(key=key).value
    except AdminSetting.DoesNotExist:
        return default


def _put(key, value, description):
    AdminSetting.objects.update_or_create(
        key=key,
        defaults={"value": value, "description": description},
    )
    return value


def get_delivery_pricing():
    """Platform delivery pricing: {sameTownFee, otherCityFee} in XAF."""
    defaults = settings.MARKETPLACE['DELIVERY_PRICING']
    stored = _get(DELIVERY_PRICING_KEY, {})
    if not isinstance(stored, dict):
        logger.warning("Malformed delivery pricing setting, using defaults")
        stored = {}
    return {
        'sameTownFee': int(stored.get('sameTownFee', defaults['sameTownFee'])),
        'otherCityFee': int(stored.get('otherCityFee', defaults['otherCityFee'])),
    }


def update_delivery_pricing(same_town_fee, other_city_fee):
    value = {'sameTownFee': same_town_fee, 'otherCityFee': other_city_fee}
    _put(DELIVERY_PRICING_KEY, value, 'Platform delivery pricing for same town and other city deliveries (XAF)')
    logger.info("Updated delivery pricing: sameTownFee=%s, otherCityFee=%s", same_town_fee, other_city_fee)
    return value


def get_min_withdrawal():
    return int(_get(MIN_WITHDRAWAL_KEY, settings.MARKETPLACE['MIN_WITHDRAWAL']))


def update_min_withdrawal(amount):
    _put(MIN_WITHDRAWAL_KEY, amount, 'Minimum vendor withdrawal amount (XAF)')
    logger.info("Updated minimum withdrawal: %s", amount)
    return amount
