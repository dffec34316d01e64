import logging

from django.conf import settings
from rest_framework_simplejwt.tokens import RefreshToken

from core_backend.exceptions import UserNotFound
from .models import User

logger = logging.getLogger(__name__)


class UserDirectory:
    """
    Read access to users for the ordering services.
    """

    @staticmethod
    def find_users_by_role(role: str):
        return User.objects.filter(role=role, is_active=True)

    @staticmethod
    def find_admins():
        return UserDirectory.find_users_by_role(User.Role.ADMIN)

    @staticmethod
    def find_user_by_id(user_id) -> User:
        try:
            return User.objects.get(pk=user_id)
        except (User.DoesNotExist, ValueError, TypeError):
            raise UserNotFound()


class UserService:
    @staticmethod
    def register_user(email: str, password: str, name: str, phone: str = None) -> User:
        user = User.objects.create_user(
            email=email, password=password, name=name, phone=phone
        )
        logger.info(f"Registered user {user.email}")
        return user

    @staticmethod
    def generate_tokens_for_user(user: User) -> dict:
        refresh = RefreshToken.for_user(user)
        return {
            "refresh": str(refresh),
            "access": str(refresh.access_token),
        }

    @staticmethod
    def set_auth_cookie(response, access_token):
        is_secure = getattr(settings, "SESSION_COOKIE_SECURE", not settings.DEBUG)

        response.set_cookie(
            key=settings.SIMPLE_JWT["AUTH_COOKIE"],
            value=access_token,
            max_age=settings.SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"].total_seconds(),
            httponly=True,
            secure=is_secure,
            samesite="Lax",
        )
        return response

    @staticmethod
    def clear_auth_cookie(response):
        response.delete_cookie(settings.SIMPLE_JWT["AUTH_COOKIE"])
        return response
