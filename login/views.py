# login/views.py
import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.generics import CreateAPIView
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView

from .permissions import IsSystemAdmin
from .serializers import (
    CustomTokenSerializer, RegisterSerializer, UserAdminSerializer,
    UserSerializer, UserStatusSerializer)

logger = logging.getLogger(__name__)

User = get_user_model()


class CustomLoginView(TokenObtainPairView):
    permission_classes = [AllowAny]
    serializer_class = CustomTokenSerializer


class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        refresh = request.data.get("refresh")
        if not refresh:
            return Response({"detail": "Refresh token is required."},
                            status=status.HTTP_400_BAD_REQUEST)
        try:
            RefreshToken(refresh).blacklist()
        except TokenError as e:
            return Response({"detail": str(e)},
                            status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_205_RESET_CONTENT)


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        data = UserSerializer(request.user).data
        employee = getattr(request.user, "employee", None)
        if employee is not None:
            # local import: emp depends on login, not the reverse
            from emp.serializers import EmployeeSerializer
            data["employee"] = EmployeeSerializer(employee).data
        else:
            data["employee"] = None
        return Response({"user": data})


class RegisterView(CreateAPIView):
    permission_classes = [IsAuthenticated, IsSystemAdmin]
    serializer_class = RegisterSerializer

    def perform_create(self, serializer):
        user = serializer.save()
        logger.info("User %s registered with role %s by %s",
                    user.email, user.role, self.request.user.id)


class UserListAPIView(APIView):
    permission_classes = [IsAuthenticated, IsSystemAdmin]

    def get(self, request):
        users = User.objects.select_related(
            'employee', 'employee__department').order_by('-date_joined')
        return Response({"users": UserAdminSerializer(users, many=True).data})


class UserDetailAPIView(generics.RetrieveUpdateAPIView):
    permission_classes = [IsAuthenticated, IsSystemAdmin]
    serializer_class = UserAdminSerializer
    queryset = User.objects.select_related('employee', 'employee__department')

    def retrieve(self, request, *args, **kwargs):
        return Response({"user": self.get_serializer(self.get_object()).data})

    def update(self, request, *args, **kwargs):
        response = super().update(request, *args, **kwargs)
        logger.info("User %s updated by %s", kwargs.get('pk'), request.user.id)
        return Response({"message": "User updated successfully",
                         "user": response.data})


class UserStatusAPIView(APIView):
    """
    Activates or deactivates an account. The linked employee record, if
    any, takes the same status.
    """
    permission_classes = [IsAuthenticated, IsSystemAdmin]

    @transaction.atomic
    def put(self, request, pk):
        ser = UserStatusSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        new_status = ser.validated_data['status']

        user = get_object_or_404(User, pk=pk)
        user.is_active = new_status == 'active'
        user.save(update_fields=['is_active'])

        employee = getattr(user, 'employee', None)
        if employee is not None:
            employee.status = new_status
            employee.save(update_fields=['status', 'updated_at'])

        logger.info("User %s set %s by %s", user.pk, new_status, request.user.id)
        return Response({"message": "User status updated successfully",
                         "user": UserAdminSerializer(user).data})
