from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from addresses.policies import Decision
from addresses.selectors import get_visible_address, list_visible_addresses
from addresses.serializers import AddressSerializer
from addresses.services import (
    MISSING_PAYLOAD_ERRORS,
    AddressOutcome,
    create_address,
    destroy_address,
    update_address,
)

FORBIDDEN_DETAIL = "You do not have permission to perform this action."
NOT_FOUND_DETAIL = "Not found."


def _address_payload(request):
    """Return the `address` object of a write body, or None when it is missing or empty."""

    data = request.data
    payload = data.get("address") if hasattr(data, "get") else None
    return payload if isinstance(payload, dict) and payload else None


def _decision_response(outcome: AddressOutcome):
    if outcome.decision is Decision.NOT_FOUND:
        return Response({"detail": NOT_FOUND_DETAIL}, status=status.HTTP_404_NOT_FOUND)
    if outcome.decision is Decision.FORBIDDEN:
        return Response({"detail": FORBIDDEN_DETAIL}, status=status.HTTP_403_FORBIDDEN)
    if outcome.errors:
        return Response(outcome.errors, status=status.HTTP_400_BAD_REQUEST)
    return None


class AddressListCreateAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        addresses = list_visible_addresses(caller=request.user)
        return Response(AddressSerializer(addresses, many=True).data)

    def post(self, request):
        payload = _address_payload(request)
        if payload is None:
            raise ValidationError(MISSING_PAYLOAD_ERRORS)
        outcome = create_address(caller=request.user, payload=payload)
        response = _decision_response(outcome)
        if response is not None:
            return response
        return Response({"address_id": outcome.address_id})


class AddressDetailAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, pk):
        address = get_visible_address(caller=request.user, address_id=pk)
        if address is None:
            return Response({"detail": NOT_FOUND_DETAIL}, status=status.HTTP_404_NOT_FOUND)
        return Response(AddressSerializer(address).data)

    def put(self, request, pk):
        outcome = update_address(
            caller=request.user,
            address_id=pk,
            payload=_address_payload(request),
        )
        response = _decision_response(outcome)
        if response is not None:
            return response
        return Response({"address_id": outcome.address_id})

    def patch(self, request, pk):
        return self.put(request, pk)

    def delete(self, request, pk):
        outcome = destroy_address(caller=request.user, address_id=pk)
        response = _decision_response(outcome)
        if response is not None:
            return response
        return Response({"address_id": outcome.address_id, "deleted": "OK"})
