from django.db.models import Case, IntegerField, Q, Value, When
from django.utils import timezone

from api.exceptions import NotFoundError
from vendors.models import KYC_APPROVED
from .models import Product

SORT_ORDERING = {
    'newest': ['-createdAt', '-id'],
    'price_asc': ['price', 'id'],
    'price_desc': ['-price', '-id'],
    'relevance': ['-createdAt', '-id'],
}


def visible_products():
    """Products customers may see: approved, from a vendor whose KYC is approved."""
    return Product.objects.filter(
        status=Product.APPROVED,
        vendor__kycStatus=KYC_APPROVED,
    ).select_related('vendor', 'category')


def get_visible_product(product_id):
    try:
        return visible_products().get(pk=product_id)
    except (Product.DoesNotExist, ValueError):
        raise NotFoundError("Product not found")


def filter_products(queryset, params):
    q = (params.get('q') or '').strip()
    if q:
        queryset = queryset.filter(Q(name__icontains=q) | Q(description__icontains=q))

    category = params.get('category')
    if category:
        queryset = queryset.filter(Q(category__slug=category) | Q(category__parent__slug=category))

    min_price = _int_or_none(params.get('minPrice'))
    if min_price is not None:
        queryset = queryset.filter(price__gte=min_price)
    max_price = _int_or_none(params.get('maxPrice'))
    if max_price is not None:
        queryset = queryset.filter(price__lte=max_price)

    city = params.get('city')
    if city:
        queryset = queryset.filter(city__iexact=city.strip())

    deal_type = params.get('dealType')
    if deal_type == Product.FLASH_SALE:
        queryset = queryset.filter(dealType=Product.FLASH_SALE, flashSaleEndsAt__gt=timezone.now())
    elif deal_type == Product.TODAYS_DEAL:
        queryset = queryset.filter(dealType=Product.TODAYS_DEAL)

    sort = params.get('sort') or 'newest'
    if sort == 'relevance' and q:
        # Name matches rank above description-only matches
        queryset = queryset.annotate(
            nameMatch=Case(When(name__icontains=q, then=Value(0)), default=Value(1), output_field=IntegerField())
        )
        return queryset.order_by('nameMatch', *SORT_ORDERING['relevance'])
    return queryset.order_by(*SORT_ORDERING.get(sort, SORT_ORDERING['newest']))


def _int_or_none(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
