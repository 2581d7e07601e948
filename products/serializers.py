from rest_framework import serializers

from .delivery import validate_delivery_config
from .models import Product, Category


class RecursiveField(serializers.Serializer):
    def to_representation(self, value):
        serializer = self.parent.parent.__class__(value, context=self.context)
        return serializer.data


class CategorySerializer(serializers.ModelSerializer):
    subcategories = RecursiveField(many=True, read_only=True)

    class Meta:
        model = Category
        fields = ['id', 'name', 'parent', 'slug', 'subcategories']
        read_only_fields = ['slug']

    def validate_parent(self, value):
        if value and value == self.instance:
            raise serializers.ValidationError("A category cannot be its own parent.")
        return value


class CategoryNameSerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ['id', 'name', 'slug']


class ProductSerializer(serializers.ModelSerializer):
    # Read-only nested category representation
    category = CategoryNameSerializer(read_only=True)

    # Write-only field for setting category
    categoryId = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.all(), source='category', write_only=True, required=False, allow_null=True
    )
    vendorName = serializers.CharField(source='vendor.businessName', read_only=True)
    effectivePrice = serializers.IntegerField(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'vendor', 'vendorName', 'category', 'categoryId', 'name', 'description',
            'price', 'discountPrice', 'effectivePrice', 'stock', 'city', 'images',
            'status', 'rejectionReason', 'dealType', 'flashSaleEndsAt',
            'deliveryType', 'freeDelivery', 'flatDeliveryFee', 'sameCityDeliveryFee',
            'otherCityDeliveryFee', 'pickupAvailable', 'localDelivery', 'nationwideDelivery',
            'createdAt', 'updatedAt',
        ]
        read_only_fields = ['vendor', 'status', 'rejectionReason', 'createdAt', 'updatedAt']

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Product name cannot be empty")
        return value.strip()

    def validate_images(self, value):
        if not isinstance(value, list) or not all(isinstance(url, str) for url in value):
            raise serializers.ValidationError("Images must be a list of URLs")
        return value

    def validate(self, data):
        # Merge with the stored product so partial updates are checked as a whole
        merged = {}
        if self.instance is not None:
            for field in ('price', 'discountPrice', 'deliveryType', 'freeDelivery', 'flatDeliveryFee',
                          'sameCityDeliveryFee', 'otherCityDeliveryFee', 'pickupAvailable',
                          'localDelivery', 'nationwideDelivery', 'dealType', 'flashSaleEndsAt'):
                merged[field] = getattr(self.instance, field)
        else:
            merged['localDelivery'] = True
        merged.update(data)

        discount = merged.get('discountPrice')
        if discount is not None and discount >= merged.get('price', 0):
            raise serializers.ValidationError({"discountPrice": "Discount price must be lower than price"})
        if merged.get('dealType') == Product.FLASH_SALE and not merged.get('flashSaleEndsAt'):
            raise serializers.ValidationError({"flashSaleEndsAt": "Flash sales need an end date"})

        errors = validate_delivery_config(merged)
        if errors:
            raise serializers.ValidationError({"delivery": errors})
        return data


class RejectProductSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=1000, error_messages={
        "required": "Rejection reason is required",
        "blank": "Rejection reason is required",
    })
