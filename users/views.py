import logging

from django.db.models import Q
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import ForbiddenError, NotFoundError
from api.models import CustomUser
from api.pagination import paginate
from api.permissions import IsAdmin
from .serializers import UserListSerializer, UserStatusSerializer

logger = logging.getLogger(__name__)


class UserManagementView(APIView):
    permission_classes = [IsAdmin]

    def get_object(self, pk):
        try:
            return CustomUser.objects.select_related('vendor', 'rider').get(pk=pk)
        except CustomUser.DoesNotExist:
            raise NotFoundError("User not found")

    def get(self, request, pk=None):
        if pk:
            return Response({"data": UserListSerializer(self.get_object(pk)).data})

        users = CustomUser.objects.select_related('vendor', 'rider').order_by('-createdAt')
        role = request.query_params.get('role')
        if role:
            users = users.filter(role=role)
        user_status = request.query_params.get('status')
        if user_status == 'ACTIVE':
            users = users.filter(is_active=True)
        elif user_status == 'SUSPENDED':
            users = users.filter(is_active=False)
        q = (request.query_params.get('q') or '').strip()
        if q:
            users = users.filter(Q(name__icontains=q) | Q(phone__icontains=q) | Q(email__icontains=q))
        return paginate(request, users, UserListSerializer)


def _set_active(request, pk, active):
    try:
        user = CustomUser.objects.get(pk=pk)
    except CustomUser.DoesNotExist:
        raise NotFoundError("User not found")
    if not active and user.pk == request.user.pk:
        raise ForbiddenError("You cannot suspend your own account")

    serializer = UserStatusSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user.is_active = active
    user.save(update_fields=['is_active'])
    logger.info("User %s %s by admin %s (%s)", user.id, "activated" if active else "suspended",
                request.user.id, serializer.validated_data.get('reason') or "no reason given")
    return user


@api_view(["POST"])
@permission_classes([IsAdmin])
def suspendUser(request, pk):
    user = _set_active(request, pk, False)
    return Response({"message": "User suspended", "data": UserListSerializer(user).data}, status=status.HTTP_200_OK)


@api_view(["POST"])
@permission_classes([IsAdmin])
def activateUser(request, pk):
    user = _set_active(request, pk, True)
    return Response({"message": "User activated", "data": UserListSerializer(user).data}, status=status.HTTP_200_OK)
