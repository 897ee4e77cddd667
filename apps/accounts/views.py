from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema
from .serializers import (
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserSerializer,
    ProfileUpdateSerializer,
    PasswordChangeSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    update_profile as update_profile_service,
    change_password as change_password_service,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    BackofficeAccessError,
    PasswordConfirmationError,
)


class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


def _auth_response(user, status_code=status.HTTP_200_OK):
    refresh = RefreshToken.for_user(user)
    return Response({
        'user': UserSerializer(user).data,
        'tokens': {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
        },
    }, status=status_code)


def _login(request, backoffice):
    serializer = UserLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = authenticate_user(backoffice=backoffice, **serializer.validated_data)
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)
    except (InactiveAccountError, BackofficeAccessError) as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return _auth_response(user)


@extend_schema(
    request=UserRegistrationSerializer,
    responses={201: AuthResponseSerializer, 400: ErrorResponseSerializer},
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Create a customer account and return JWT tokens."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = register_user(**serializer.validated_data)
    except UserRegistrationError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return _auth_response(user, status.HTTP_201_CREATED)


@extend_schema(
    request=UserLoginSerializer,
    responses={200: AuthResponseSerializer, 401: ErrorResponseSerializer, 403: ErrorResponseSerializer},
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    return _login(request, backoffice=False)


@extend_schema(
    request=UserLoginSerializer,
    responses={200: AuthResponseSerializer, 401: ErrorResponseSerializer, 403: ErrorResponseSerializer},
    description="Login for back-office accounts (catalog and expenses).",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def admin_login(request):
    return _login(request, backoffice=True)


@extend_schema(responses={200: UserSerializer}, tags=['auth'])
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    return Response(UserSerializer(request.user).data)


@extend_schema(request=ProfileUpdateSerializer, responses={200: UserSerializer}, tags=['auth'])
@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def update_profile(request):
    """Update display name, phone or default delivery address."""
    serializer = ProfileUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = update_profile_service(user=request.user, **serializer.validated_data)
    return Response(UserSerializer(user).data)


@extend_schema(
    request=PasswordChangeSerializer,
    responses={204: None, 400: ErrorResponseSerializer},
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def change_password(request):
    serializer = PasswordChangeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        change_password_service(user=request.user, **serializer.validated_data)
    except PasswordConfirmationError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(status=status.HTTP_204_NO_CONTENT)
