from rest_framework import viewsets, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .models import PaymentCard
from .serializers import (
    PaymentCardSerializer,
    PaymentCardCreateSerializer,
    PaymentCardUpdateSerializer,
)
from .services import (
    create_card,
    list_cards,
    get_card_by_id,
    update_card,
    delete_card,
    PaymentCardNotFoundError,
    InvalidCardError,
)


class PaymentCardViewSet(viewsets.ModelViewSet):
    """
    The current user's saved cards.

    Other users' cards are reported as not found.
    """

    queryset = PaymentCard.objects.all()
    serializer_class = PaymentCardSerializer
    permission_classes = [IsAuthenticated]
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        return list_cards(user=self.request.user)

    def retrieve(self, request, *args, **kwargs):
        try:
            card = get_card_by_id(card_id=kwargs['pk'], user=request.user)
        except PaymentCardNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(PaymentCardSerializer(card).data)

    @extend_schema(request=PaymentCardCreateSerializer, responses={201: PaymentCardSerializer})
    def create(self, request, *args, **kwargs):
        serializer = PaymentCardCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            card = create_card(user=request.user, **serializer.validated_data)
        except InvalidCardError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(PaymentCardSerializer(card).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=PaymentCardUpdateSerializer, responses={200: PaymentCardSerializer})
    def partial_update(self, request, *args, **kwargs):
        serializer = PaymentCardUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            card = update_card(card_id=kwargs['pk'], user=request.user, **serializer.validated_data)
        except PaymentCardNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidCardError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(PaymentCardSerializer(card).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_card(card_id=kwargs['pk'], user=request.user)
        except PaymentCardNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
