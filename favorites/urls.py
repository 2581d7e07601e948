from django.urls import path
from .views import getFavorites, addFavorite, removeFavorite, toggleFavorite, isFavorited

urlpatterns = [
    path('', getFavorites, name='getFavorites'),
    path('add/', addFavorite, name='addFavorite'),
    path('toggle/', toggleFavorite, name='toggleFavorite'),
    path('remove/<int:productID>/', removeFavorite, name='removeFavorite'),
    path('check/<int:productID>/', isFavorited, name='isFavorited'),
]
