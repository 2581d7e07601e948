from django.urls import path
from .views import *

urlpatterns = [
    # Category URLs
    path('categories/', getCategories, name='getCategories'),
    path('categories/create/', createCategory, name='createCategory'),
    path('categories/<slug:slug>/', getCategoryBySlug, name='getCategoryBySlug'),
    path('categories/<int:pk>/update/', updateCategory, name='update_category'),
    path('categories/<int:pk>/delete/', deleteCategory, name='delete_category'),

    # Product URLs
    path('', getAllProducts, name='getProducts'),
    path('<int:pk>/', getProductbyID, name='getProductbyID'),
    path('create/', createProduct, name='createProduct'),
    path('<int:pk>/update/', updateProduct, name='update-product'),
    path('<int:pk>/delete/', deleteProduct, name='delete_product'),
    path('mine/', getProductsByVendor, name='getProductsByVendor'),

    # Admin review
    path('admin/pending/', getPendingProducts, name='getPendingProducts'),
    path('admin/<int:pk>/approve/', approveProduct, name='approveProduct'),
    path('admin/<int:pk>/reject/', rejectProduct, name='rejectProduct'),
]
