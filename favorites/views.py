from rest_framework import status
from rest_framework.response import Response
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from api.exceptions import ValidationError
from api.pagination import paginate
from products.services import get_visible_product
from .models import Favorite
from .serializers import FavoriteSerializer


def _product_from(request):
    product_id = request.data.get('productId')
    if not product_id:
        raise ValidationError("Product ID is required")
    return get_visible_product(product_id)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def getFavorites(request):
    """List the authenticated user's favorites."""
    favorites = Favorite.objects.filter(user=request.user).select_related('product')
    return paginate(request, favorites, FavoriteSerializer)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def addFavorite(request):
    """Add a product to favorites. Adding it twice is not an error."""
    product = _product_from(request)
    favorite, created = Favorite.objects.get_or_create(user=request.user, product=product)
    return Response({
        "message": "Added to favorites" if created else "Product already in favorites",
        "data": FavoriteSerializer(favorite).data,
    }, status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def removeFavorite(request, productID):
    deleted, _ = Favorite.objects.filter(user=request.user, product_id=productID).delete()
    return Response({
        "message": "Removed from favorites" if deleted else "Product was not in favorites"
    }, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def toggleFavorite(request):
    product = _product_from(request)
    deleted, _ = Favorite.objects.filter(user=request.user, product=product).delete()
    if deleted:
        return Response({"message": "Removed from favorites", "isFavorited": False})
    Favorite.objects.create(user=request.user, product=product)
    return Response({"message": "Added to favorites", "isFavorited": True})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def isFavorited(request, productID):
    favorited = Favorite.objects.filter(user=request.user, product_id=productID).exists()
    return Response({"productId": productID, "isFavorited": favorited})
