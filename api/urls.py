from django.urls import path
from .views import *

urlpatterns = [
    path('register/', register_user, name='registerUser'),
    path('login/', login_user, name='loginUser'),
    path('me/', get_user_data, name='get_user_data'),
    path('upgrade-role/', upgrade_role, name='upgrade_role'),
    path('token/refresh/', TokenRefresh.as_view(), name='token_refresh'),
]
