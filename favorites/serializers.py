from rest_framework import serializers
from .models import Favorite

class FavoriteSerializer(serializers.ModelSerializer):
    productName = serializers.ReadOnlyField(source='product.name')
    price = serializers.ReadOnlyField(source='product.price')
    effectivePrice = serializers.ReadOnlyField(source='product.effectivePrice')
    images = serializers.ReadOnlyField(source='product.images')
    city = serializers.ReadOnlyField(source='product.city')

    class Meta:
        model = Favorite
        fields = ['id', 'product', 'productName', 'price', 'effectivePrice', 'images', 'city', 'createdAt']
        read_only_fields = fields
