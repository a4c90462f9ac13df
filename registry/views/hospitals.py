"""
Hospital registry views.

Registration, listing and lookup are open endpoints.  ``login`` issues
the bearer token patient record endpoints require, and ``verify`` reports
which hospital a token belongs to.
"""
from __future__ import annotations

from django.db import DatabaseError
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from registry.authentication import authenticate_token
from registry.conf import get_config
from registry.exceptions import InternalError, ValidationError, flatten_errors
from registry.serializers.hospital import (
    HospitalCreateSerializer,
    HospitalLoginSerializer,
    HospitalSerializer,
    TokenVerifySerializer,
)
from registry.services import hospitals as hospital_service
from registry.services.tokens import HospitalTokenService

MISSING_CODES = {'required', 'blank', 'null'}


def _has_missing_fields(errors) -> bool:
    return any(getattr(e, 'code', None) in MISSING_CODES for errs in errors.values() for e in errs)


@api_view(['POST'])
@permission_classes([AllowAny])
@authentication_classes([])
def create_hospital(request):
    s = HospitalCreateSerializer(data=request.data)
    if not s.is_valid():
        message = 'All fields are required.' if _has_missing_fields(s.errors) else 'Validation Error'
        raise ValidationError(message, errors=flatten_errors(s.errors))
    try:
        hospital = hospital_service.create_hospital(**s.validated_data)
    except DatabaseError as exc:
        raise InternalError('Error creating hospital', exc)
    return Response(
        {'message': 'Hospital created successfully', 'hospital': HospitalSerializer(hospital).data},
        status=status.HTTP_201_CREATED,
    )


@api_view(['POST'])
@permission_classes([AllowAny])
@authentication_classes([])
def login_hospital(request):
    """Exchange a registration ID and contact email for a bearer token."""
    s = HospitalLoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    hospital = hospital_service.authenticate_hospital(**s.validated_data)
    token = HospitalTokenService(get_config()).issue(hospital)
    return Response({
        'message': 'Login successful',
        'token': token,
        'hospital': HospitalSerializer(hospital).data,
    })


@api_view(['POST'])
@permission_classes([AllowAny])
def verify_hospital(request):
    """Report the hospital a token resolves to.

    The token may come from the ``token`` body field or, failing that,
    the ``Authorization`` header (already resolved by authentication).
    """
    s = TokenVerifySerializer(data=request.data)
    s.is_valid(raise_exception=True)
    raw = s.validated_data.get('token')
    if raw:
        hospital = authenticate_token(raw)
    elif request.user is not None:
        hospital = request.user
    else:
        raise ValidationError('Validation Error', errors=['Token is required.'])
    return Response({'message': 'Token is valid', 'hospital': HospitalSerializer(hospital).data})


@api_view(['GET', 'DELETE'])
@permission_classes([AllowAny])
@authentication_classes([])
def hospitals(request):
    """``GET`` lists every hospital; ``DELETE`` clears the registry."""
    if request.method == 'GET':
        try:
            data = HospitalSerializer(hospital_service.list_hospitals(), many=True).data
        except DatabaseError as exc:
            raise InternalError('Error fetching hospitals', exc)
        return Response({'message': 'Hospitals retrieved successfully', 'hospitals': data})

    try:
        hospital_service.clear_hospitals()
    except DatabaseError as exc:
        raise InternalError('Error clearing hospitals', exc)
    return Response({'message': 'All hospitals have been cleared successfully.'})


@api_view(['GET'])
@permission_classes([AllowAny])
@authentication_classes([])
def hospital_detail(request, reg_id: str):
    try:
        hospital = hospital_service.get_hospital(reg_id)
    except DatabaseError as exc:
        raise InternalError('Error fetching hospital', exc)
    return Response({'message': 'Hospital retrieved successfully', 'hospital': HospitalSerializer(hospital).data})
