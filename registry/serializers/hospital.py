import bleach
from rest_framework import serializers

from registry.models import Hospital


def _required(message):
    return {'required': message, 'blank': message, 'null': message}


class HospitalCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, error_messages=_required('Hospital name is required.'))
    regId = serializers.CharField(source='reg_id', max_length=64,
                                  error_messages=_required('Registration ID is required.'))
    hospitalType = serializers.CharField(source='hospital_type', max_length=100,
                                         error_messages=_required('Hospital type is required.'))
    contactEmail = serializers.EmailField(source='contact_email',
                                          error_messages=_required('Contact email is required.'))
    address = serializers.CharField(max_length=500, error_messages=_required('Address is required.'))

    def validate_name(self, v):
        return bleach.clean(v.strip(), strip=True)

    def validate_address(self, v):
        return bleach.clean(v.strip(), strip=True)


class HospitalLoginSerializer(serializers.Serializer):
    regId = serializers.CharField(source='reg_id', error_messages=_required('Registration ID is required.'))
    contactEmail = serializers.CharField(source='contact_email',
                                         error_messages=_required('Contact email is required.'))


class TokenVerifySerializer(serializers.Serializer):
    token = serializers.CharField(required=False, allow_blank=True)


class HospitalSerializer(serializers.ModelSerializer):
    regId = serializers.CharField(source='reg_id')
    hospitalType = serializers.CharField(source='hospital_type')
    contactEmail = serializers.EmailField(source='contact_email')
    createdAt = serializers.DateTimeField(source='created_at')
    updatedAt = serializers.DateTimeField(source='updated_at')

    class Meta:
        model = Hospital
        fields = ['id', 'name', 'regId', 'hospitalType', 'contactEmail', 'address', 'createdAt', 'updatedAt']
        read_only_fields = fields
