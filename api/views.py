from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.views import TokenRefreshView

from .serializers import (
    CustomUserSerializer,
    LoginSerializer,
    RegisterSerializer,
    UpgradeRoleSerializer,
    issue_tokens,
)


@api_view(["POST"])
@permission_classes([AllowAny])
def register_user(request):
    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = serializer.save()
    return Response({
        **issue_tokens(user),
        "user": CustomUserSerializer(user).data,
    }, status=status.HTTP_201_CREATED)


@api_view(["POST"])
@permission_classes([AllowAny])
def login_user(request):
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    return Response(serializer.save(), status=status.HTTP_200_OK)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def get_user_data(request):
    return Response(CustomUserSerializer(request.user).data)


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def upgrade_role(request):
    """Self-service upgrade of a customer account to vendor or rider."""
    serializer = UpgradeRoleSerializer(data=request.data, context={"user": request.user})
    serializer.is_valid(raise_exception=True)
    user = serializer.save()
    return Response({
        **issue_tokens(user),
        "user": CustomUserSerializer(user).data,
    })


class TokenRefresh(TokenRefreshView):
    """
    POST /auth/token/refresh/
    Exchanges a refresh token for a new access token (and a rotated
    refresh token).
    """
    permission_classes = [AllowAny]
