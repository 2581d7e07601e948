"""
Delivery fee calculation.

Pure functions: no database access, so every (delivery configuration,
destination) pair can be checked directly. Platform pricing and the agency
quote are looked up by the caller and passed in.
"""
import unicodedata

FEE_FREE = 'free'
FEE_FLAT = 'flat'
FEE_SAME_CITY = 'same_city'
FEE_OTHER_CITY = 'other_city'
FEE_JEMO = 'jemo'

RULE_SAME_CITY = 'SAME_CITY'
RULE_OTHER_CITY = 'OTHER_CITY'

JEMO_RIDER = 'JEMO_RIDER'


def normalize_city(city):
    """Lowercase, trim, collapse inner whitespace and strip accents ("  Yaoundé " -> "yaounde")."""
    if not city:
        return ''
    decomposed = unicodedata.normalize('NFD', str(city))
    stripped = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    return ' '.join(stripped.lower().split())


def is_same_city(city_a, city_b):
    return normalize_city(city_a) == normalize_city(city_b)


def _result(fee, fee_type, **extra):
    result = {'available': True, 'fee': int(fee), 'feeType': fee_type}
    result.update(extra)
    return result


def calculate_delivery_fee(product, destination_city, platform_pricing=None, quote=None):
    """
    Work out what the customer pays for delivering ``product`` to
    ``destination_city``.

    ``product`` is anything exposing the product delivery fields (a Product
    instance in practice). ``platform_pricing`` is the admin-configured
    {sameTownFee, otherCityFee} used for platform delivery when no agency
    quote is supplied; ``quote`` is the result of the agency quote lookup.

    Returns {available, fee, feeType} plus ``reason`` when unavailable and the
    agency fields when an agency quote priced the delivery.
    """
    same_city = is_same_city(getattr(product, 'city', ''), destination_city)
    rule = RULE_SAME_CITY if same_city else RULE_OTHER_CITY

    if getattr(product, 'deliveryType', None) == JEMO_RIDER:
        if quote is not None:
            if not quote.get('available'):
                return {
                    'available': False,
                    'fee': 0,
                    'feeType': FEE_JEMO,
                    'reason': quote.get('message') or 'Platform delivery is not available for this route.',
                    'rule': quote.get('rule', rule),
                }
            return _result(
                quote['fee'], FEE_JEMO,
                agencyId=quote.get('agencyId'),
                agencyName=quote.get('agencyName'),
                rule=quote.get('rule', rule),
            )
        if platform_pricing is None:
            return {
                'available': False,
                'fee': 0,
                'feeType': FEE_JEMO,
                'reason': 'Platform delivery pricing is not configured.',
                'rule': rule,
            }
        fee = platform_pricing['sameTownFee'] if same_city else platform_pricing['otherCityFee']
        return _result(fee, FEE_JEMO, rule=rule)

    if getattr(product, 'freeDelivery', False):
        return _result(0, FEE_FREE)

    flat = getattr(product, 'flatDeliveryFee', None)
    if flat:
        return _result(flat, FEE_FLAT)

    if same_city:
        fee = getattr(product, 'sameCityDeliveryFee', None)
        if fee is not None:
            return _result(fee, FEE_SAME_CITY)
    else:
        fee = getattr(product, 'otherCityDeliveryFee', None)
        if fee is not None:
            return _result(fee, FEE_OTHER_CITY)

    # Nothing configured: delivery is free
    return _result(0, FEE_FREE)


def validate_delivery_config(data):
    """
    Check a product's delivery configuration before it is saved.

    Returns a list of error messages; empty when the configuration is usable.
    """
    errors = []
    if data.get('deliveryType', 'VENDOR_DELIVERY') == JEMO_RIDER:
        return errors

    if not data.get('freeDelivery'):
        flat = data.get('flatDeliveryFee')
        same = data.get('sameCityDeliveryFee')
        other = data.get('otherCityDeliveryFee')
        has_flat = flat is not None and flat > 0
        has_city_fees = same is not None and same >= 0 and other is not None and other >= 0
        if not has_flat and not has_city_fees:
            errors.append(
                "Set a flat delivery fee or both same-city and other-city fees, or enable free delivery"
            )

    if not (data.get('pickupAvailable') or data.get('localDelivery') or data.get('nationwideDelivery')):
        errors.append("Select at least one delivery option: pickup, local or nationwide")
    return errors
