from rest_framework_simplejwt.authentication import JWTAuthentication
from django.conf import settings


class CookieJWTAuthentication(JWTAuthentication):
    """
    Reads the access token from the auth cookie, falling back to the
    standard Authorization header for API clients.
    """

    def authenticate(self, request):
        access_token = request.COOKIES.get(settings.SIMPLE_JWT["AUTH_COOKIE"])
        if not access_token:
            return super().authenticate(request)

        validated_token = self.get_validated_token(access_token)
        return self.get_user(validated_token), validated_token
