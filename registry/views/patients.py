"""
Patient record views.

Creating and updating a record requires a hospital bearer token; the
authenticated hospital (``request.user``) is recorded in the record's
visit history.  Reads, search and deletion are open.
"""
from __future__ import annotations

from django.db import DatabaseError
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from registry.conf import get_config
from registry.exceptions import InternalError
from registry.serializers.patient import (
    PatientRecordSerializer,
    PatientRecordWriteSerializer,
    PatientSearchSerializer,
)
from registry.services import patients as patient_service


def _record_data(request, record) -> dict:
    return PatientRecordSerializer(record, context={'request': request}).data


def _records_data(request, records) -> list:
    return PatientRecordSerializer(records, many=True, context={'request': request}).data


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_record(request):
    """Register a patient, attributing the first visit to the caller.

    Accepts JSON or multipart; a ``profilePicture`` file part is optional.
    """
    s = PatientRecordWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        record = patient_service.create_record(
            request.user,
            data=s.validated_data,
            picture=request.FILES.get('profilePicture'),
            config=get_config(),
        )
    except DatabaseError as exc:
        raise InternalError('Error creating user', exc)
    return Response(
        {'message': 'User created successfully', 'user': _record_data(request, record)},
        status=status.HTTP_201_CREATED,
    )


@api_view(['GET', 'DELETE'])
@permission_classes([AllowAny])
@authentication_classes([])
def records(request):
    """``GET`` lists every record; ``DELETE`` clears them all."""
    if request.method == 'GET':
        try:
            data = _records_data(request, patient_service.list_records())
        except DatabaseError as exc:
            raise InternalError('Error retrieving users', exc)
        return Response({'message': 'Users retrieved successfully', 'users': data})

    try:
        patient_service.clear_records()
    except DatabaseError as exc:
        raise InternalError('Error clearing users', exc)
    return Response({'message': 'All users have been cleared successfully.'})


@api_view(['GET'])
@permission_classes([AllowAny])
@authentication_classes([])
def search_records(request):
    q = PatientSearchSerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    try:
        data = _records_data(request, patient_service.search_records(q.validated_data))
    except DatabaseError as exc:
        raise InternalError('Error searching users', exc)
    return Response({'message': 'Search results', 'users': data})


@api_view(['GET', 'DELETE'])
@permission_classes([AllowAny])
@authentication_classes([])
def record_detail(request, record_id: int):
    """``GET`` fetches one record; ``DELETE`` removes it if present.

    Deleting an unknown id is not an error; the response always carries
    the records that remain.
    """
    if request.method == 'GET':
        try:
            record = patient_service.get_record(record_id)
        except DatabaseError as exc:
            raise InternalError('Error retrieving user', exc)
        return Response({'message': 'User retrieved successfully', 'user': _record_data(request, record)})

    try:
        remaining = patient_service.delete_record(record_id)
        data = _records_data(request, remaining)
    except DatabaseError as exc:
        raise InternalError('Error deleting user', exc)
    return Response({'message': 'User deleted successfully', 'users': data})


@api_view(['PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def update_record(request, record_id: int):
    s = PatientRecordWriteSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    try:
        record = patient_service.update_record(
            request.user,
            record_id,
            data=s.validated_data,
            picture=request.FILES.get('profilePicture'),
            config=get_config(),
        )
    except DatabaseError as exc:
        raise InternalError('Error updating user', exc)
    return Response({'message': 'User updated successfully', 'user': _record_data(request, record)})
