"""
apps.accounts.urls
~~~~~~~~~~~~~~~~~~
URL routing for user administration.
Mounted at /api/v1/ by the root URLconf.
"""
from django.urls import path

from .views import (
    ChangePasswordView,
    UserListCreateView,
    UserRoleDetailView,
    UserRolesView,
    UserStatusView,
)

urlpatterns = [
    # GET/POST /api/v1/users/
    path("users/", UserListCreateView.as_view(), name="user-list"),
    # POST /api/v1/users/change-password/
    path("users/change-password/", ChangePasswordView.as_view(), name="user-change-password"),
    # PUT /api/v1/users/<user_id>/status/
    path("users/<int:user_id>/status/", UserStatusView.as_view(), name="user-status"),
    # POST /api/v1/users/<user_id>/roles/
    path("users/<int:user_id>/roles/", UserRolesView.as_view(), name="user-roles"),
    # DELETE /api/v1/users/<user_id>/roles/<role_name>/
    path(
        "users/<int:user_id>/roles/<str:role_name>/",
        UserRoleDetailView.as_view(),
        name="user-role-detail",
    ),
]
