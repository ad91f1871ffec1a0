"""
apps.accounts.views
~~~~~~~~~~~~~~~~~~~
Thin DRF API views for user administration.
All business logic is delegated to
:mod:`apps.accounts.services.user_service`.

Endpoints
---------
GET    /users/                          – List users (admin)
POST   /users/                          – Create user (admin)
PUT    /users/{id}/status/              – Lock / unlock (admin)
POST   /users/{id}/roles/               – Grant role (admin)
DELETE /users/{id}/roles/{role_name}/   – Revoke role (admin)
POST   /users/change-password/          – Change own password, or any as admin
"""
from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.services import user_service
from common.responses import result_response
from common.serializers import ServiceResultSerializer
from .serializers import (
    ChangePasswordSerializer,
    UserCreateSerializer,
    UserRoleSerializer,
    UserStatusSerializer,
)

_DENIED = OpenApiResponse(description="Requester is not an active system administrator.")


class UserListCreateView(APIView):
    """GET/POST /users/"""

    @extend_schema(
        summary="List Users",
        responses={200: ServiceResultSerializer, 403: _DENIED},
        tags=["Users"],
    )
    def get(self, request: Request) -> Response:
        return result_response(user_service.list_users(requester_id=request.user.pk))

    @extend_schema(
        summary="Create User",
        request=UserCreateSerializer,
        responses={
            201: ServiceResultSerializer,
            403: _DENIED,
            422: OpenApiResponse(description="Invalid e-mail, mismatched or rejected password."),
        },
        tags=["Users"],
    )
    def post(self, request: Request) -> Response:
        serializer = UserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = user_service.create_user(created_by=request.user.pk, **serializer.validated_data)
        return result_response(result, success_status=status.HTTP_201_CREATED)


class UserStatusView(APIView):
    """PUT /users/{id}/status/"""

    @extend_schema(
        summary="Lock / Unlock User",
        request=UserStatusSerializer,
        responses={200: ServiceResultSerializer, 403: _DENIED, 404: ServiceResultSerializer},
        tags=["Users"],
    )
    def put(self, request: Request, user_id: int) -> Response:
        serializer = UserStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = user_service.set_user_status(
            requester_id=request.user.pk,
            user_id=user_id,
            is_locked=serializer.validated_data["is_locked"],
        )
        return result_response(result)


class UserRolesView(APIView):
    """POST /users/{id}/roles/"""

    @extend_schema(
        summary="Grant Role",
        request=UserRoleSerializer,
        responses={
            200: ServiceResultSerializer,
            403: _DENIED,
            404: OpenApiResponse(description="User or role not found."),
            409: OpenApiResponse(description="The user already has the role."),
        },
        tags=["Users"],
    )
    def post(self, request: Request, user_id: int) -> Response:
        serializer = UserRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = user_service.add_to_role(
            requester_id=request.user.pk,
            user_id=user_id,
            role_name=serializer.validated_data["role_name"],
        )
        return result_response(result)


class UserRoleDetailView(APIView):
    """DELETE /users/{id}/roles/{role_name}/"""

    @extend_schema(
        summary="Revoke Role",
        responses={200: ServiceResultSerializer, 403: _DENIED, 404: ServiceResultSerializer},
        tags=["Users"],
    )
    def delete(self, request: Request, user_id: int, role_name: str) -> Response:
        result = user_service.remove_from_role(
            requester_id=request.user.pk,
            user_id=user_id,
            role_name=role_name,
        )
        return result_response(result)


class ChangePasswordView(APIView):
    """POST /users/change-password/"""

    @extend_schema(
        summary="Change Password",
        description=(
            "Users change their own password with the current one.  "
            "Administrators may omit ``current_password`` to reset any account."
        ),
        request=ChangePasswordSerializer,
        responses={
            200: ServiceResultSerializer,
            403: OpenApiResponse(description="Not your account and not an administrator."),
            404: ServiceResultSerializer,
            422: ServiceResultSerializer,
        },
        tags=["Users"],
    )
    def post(self, request: Request) -> Response:
        serializer = ChangePasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        vd = serializer.validated_data
        result = user_service.change_password(
            requester_id=request.user.pk,
            email=vd["email"],
            current_password=vd.get("current_password"),
            password=vd["password"],
            confirm_password=vd["confirm_password"],
        )
        return result_response(result)
