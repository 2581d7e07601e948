import logging

from django.db.models import ProtectedError
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from api.exceptions import ConflictError, ForbiddenError, NotFoundError
from api.pagination import paginate
from api.permissions import IsAdmin, IsVendor
from vendors.models import KYC_APPROVED, VendorProfile
from .models import Category, Product
from .serializers import CategorySerializer, ProductSerializer, RejectProductSerializer
from .services import filter_products, get_visible_product, visible_products

logger = logging.getLogger(__name__)


# Create Category
@api_view(['POST'])
@permission_classes([IsAdmin])
def createCategory(request):
    serializer = CategorySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    category = serializer.save()
    return Response({
        "message": "Category created successfully",
        "data": CategorySerializer(category).data
    }, status=status.HTTP_201_CREATED)


# Get Categories
@api_view(['GET'])
@permission_classes([AllowAny])
def getCategories(request):
    top_categories = Category.objects.filter(parent__isnull=True).prefetch_related('subcategories')
    serializer = CategorySerializer(top_categories, many=True)
    return Response({
        "message": "Categories fetched successfully",
        "data": serializer.data
    }, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([AllowAny])
def getCategoryBySlug(request, slug):
    try:
        category = Category.objects.get(slug=slug)
    except Category.DoesNotExist:
        raise NotFoundError("Category not found")
    return Response({
        "message": "Category fetched successfully",
        "data": CategorySerializer(category).data
    }, status=status.HTTP_200_OK)


#Edit Category
@api_view(['PUT', 'PATCH'])
@permission_classes([IsAdmin])
def updateCategory(request, pk):
    try:
        category = Category.objects.get(pk=pk)
    except Category.DoesNotExist:
        raise NotFoundError("Category not found")

    serializer = CategorySerializer(category, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    category = serializer.save()
    return Response({
        "message": "Category updated successfully",
        "data": CategorySerializer(category).data
    }, status=status.HTTP_200_OK)


# Delete Category
# Only categories without subcategories can be deleted
@api_view(['DELETE'])
@permission_classes([IsAdmin])
def deleteCategory(request, pk):
    try:
        category = Category.objects.get(pk=pk)
    except Category.DoesNotExist:
        raise NotFoundError("Category not found")

    if category.subcategories.exists():
        return Response({
            "message": "Cannot delete category with subcategories. Please delete or reassign subcategories first."
        }, status=status.HTTP_400_BAD_REQUEST)

    category_name = category.name
    category.delete()
    return Response({
        "message": f"Category '{category_name}' deleted successfully"
    }, status=status.HTTP_200_OK)


########################## Product ###############################

# Get All Products
@api_view(['GET'])
@permission_classes([AllowAny])
def getAllProducts(request):
    products = filter_products(visible_products(), request.query_params)
    return paginate(request, products, ProductSerializer)


# Get Product by ID
@api_view(['GET'])
@permission_classes([AllowAny])
def getProductbyID(request, pk):
    product = get_visible_product(pk)
    return Response({
        "message": "Product fetched successfully",
        "data": ProductSerializer(product).data
    }, status=status.HTTP_200_OK)


def _approved_vendor(user):
    try:
        vendor = VendorProfile.objects.get(user=user)
    except VendorProfile.DoesNotExist:
        raise NotFoundError("Vendor profile not found")
    if vendor.kycStatus != KYC_APPROVED:
        raise ForbiddenError("Complete KYC verification before listing products")
    return vendor


def _own_product(user, pk):
    try:
        return Product.objects.select_related('vendor').get(pk=pk, vendor__user=user)
    except Product.DoesNotExist:
        raise NotFoundError("Product not found")


@api_view(['POST'])
@permission_classes([IsVendor])
def createProduct(request):
    vendor = _approved_vendor(request.user)
    serializer = ProductSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    product = serializer.save(vendor=vendor, status=Product.PENDING)
    logger.info("Vendor %s created product %s", vendor.id, product.id)
    return Response({
        "message": "Product created successfully and is awaiting review",
        "data": ProductSerializer(product).data
    }, status=status.HTTP_201_CREATED)


## Update Product
@api_view(['PUT', 'PATCH'])
@permission_classes([IsVendor])
def updateProduct(request, pk):
    product = _own_product(request.user, pk)
    serializer = ProductSerializer(product, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    # Edits go back through review
    product = serializer.save(status=Product.PENDING, rejectionReason=None)
    return Response({
        "message": "Product updated successfully and is awaiting review",
        "data": ProductSerializer(product).data
    }, status=status.HTTP_200_OK)


@api_view(['DELETE'])
@permission_classes([IsVendor])
def deleteProduct(request, pk):
    product = _own_product(request.user, pk)
    try:
        product.delete()
    except ProtectedError:
        raise ConflictError("Product has orders and cannot be deleted")
    return Response({"message": "Product deleted successfully"}, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([IsVendor])
def getProductsByVendor(request):
    products = Product.objects.filter(vendor__user=request.user).select_related('vendor', 'category')
    status_filter = request.query_params.get('status')
    if status_filter:
        products = products.filter(status=status_filter)
    return paginate(request, products.order_by('-createdAt'), ProductSerializer)


# ---------------------------------------------------
# Admin review
# ---------------------------------------------------
@api_view(['GET'])
@permission_classes([IsAdmin])
def getPendingProducts(request):
    products = (
        Product.objects.filter(status=Product.PENDING)
        .select_related('vendor', 'category')
        .order_by('createdAt')
    )
    return paginate(request, products, ProductSerializer)


def _get_product(pk):
    try:
        return Product.objects.select_related('vendor').get(pk=pk)
    except Product.DoesNotExist:
        raise NotFoundError("Product not found")


@api_view(['POST'])
@permission_classes([IsAdmin])
def approveProduct(request, pk):
    product = _get_product(pk)
    product.status = Product.APPROVED
    product.rejectionReason = None
    product.save(update_fields=['status', 'rejectionReason', 'updatedAt'])
    logger.info("Product %s approved by admin %s", product.id, request.user.id)
    return Response({"message": "Product approved", "data": ProductSerializer(product).data})


@api_view(['POST'])
@permission_classes([IsAdmin])
def rejectProduct(request, pk):
    serializer = RejectProductSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    product = _get_product(pk)
    product.status = Product.REJECTED
    product.rejectionReason = serializer.validated_data['reason'].strip()
    product.save(update_fields=['status', 'rejectionReason', 'updatedAt'])
    logger.info("Product %s rejected by admin %s", product.id, request.user.id)
    return Response({"message": "Product rejected", "data": ProductSerializer(product).data})
