import bleach
from rest_framework import serializers

from registry.models import HospitalVisit, IllnessEntry, PatientRecord

REQUIRED_MESSAGES = {
    'fullName': 'Full Name is required.',
    'address': 'Address is required.',
    'gender': 'Gender is required.',
    'genotype': 'Genotype is required.',
    'bloodGroup': 'Blood Group is required.',
    'phoneNumber': 'Phone Number is required.',
    'dateOfBirth': 'Date of Birth is required.',
}


def _required(field):
    message = REQUIRED_MESSAGES[field]
    return {'required': message, 'blank': message, 'null': message}


def _clean(v):
    return bleach.clean(v.strip(), strip=True) if isinstance(v, str) else v


class BlankIsMissingMixin:
    """Report an empty string as a missing value rather than a bad one."""

    def to_internal_value(self, data):
        if isinstance(data, str) and not data.strip():
            self.fail('required')
        return super().to_internal_value(data)


class RequiredDateField(BlankIsMissingMixin, serializers.DateField):
    pass


class RequiredChoiceField(BlankIsMissingMixin, serializers.ChoiceField):
    pass


class IllnessEntrySerializer(serializers.Serializer):
    illness = serializers.CharField(max_length=255)
    dateDiagnosed = serializers.DateField(source='date_diagnosed', required=False, allow_null=True)

    def validate_illness(self, v):
        return _clean(v)


class PatientRecordWriteSerializer(serializers.Serializer):
    """Input contract for create (all mandatory) and update (``partial=True``).

    ``previousHospitals`` is not a field: the visit list is computed
    by the service and anything a client sends for it is dropped here.
    """
    fullName = serializers.CharField(source='full_name', max_length=255, error_messages=_required('fullName'))
    address = serializers.CharField(max_length=500, error_messages=_required('address'))
    gender = RequiredChoiceField(
        choices=PatientRecord.GENDER_CHOICES,
        error_messages={**_required('gender'), 'invalid_choice': 'Gender must be one of Male, Female, Other.'},
    )
    genotype = serializers.CharField(max_length=10, error_messages=_required('genotype'))
    bloodGroup = serializers.CharField(source='blood_group', max_length=10, error_messages=_required('bloodGroup'))
    phoneNumber = serializers.CharField(source='phone_number', max_length=32,
                                        error_messages=_required('phoneNumber'))
    dateOfBirth = RequiredDateField(
        source='date_of_birth',
        error_messages={**_required('dateOfBirth'), 'invalid': 'Date of Birth must be a valid date (YYYY-MM-DD).'},
    )
    disability = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    additionalNotes = serializers.CharField(source='additional_notes', required=False, allow_null=True,
                                            allow_blank=True)
    previousIllnesses = IllnessEntrySerializer(source='previous_illnesses', many=True, required=False)

    def validate_fullName(self, v):
        return _clean(v)

    def validate_address(self, v):
        return _clean(v)

    def validate_disability(self, v):
        return _clean(v) or None

    def validate_additionalNotes(self, v):
        return _clean(v) or None


class PatientSearchSerializer(serializers.Serializer):
    fullName = serializers.CharField(source='full_name', required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    gender = serializers.CharField(required=False, allow_blank=True)
    genotype = serializers.CharField(required=False, allow_blank=True)
    bloodGroup = serializers.CharField(source='blood_group', required=False, allow_blank=True)
    illness = serializers.CharField(required=False, allow_blank=True)
    hospitalName = serializers.CharField(source='hospital_name', required=False, allow_blank=True)
    phoneNumber = serializers.CharField(source='phone_number', required=False, allow_blank=True)
    dateOfBirth = serializers.CharField(source='date_of_birth', required=False, allow_blank=True)
    disability = serializers.CharField(required=False, allow_blank=True)


class HospitalVisitSerializer(serializers.ModelSerializer):
    hospitalName = serializers.CharField(source='hospital_name')
    dateVisited = serializers.DateTimeField(source='date_visited')

    class Meta:
        model = HospitalVisit
        fields = ['hospitalName', 'dateVisited']


class IllnessEntryReadSerializer(serializers.ModelSerializer):
    dateDiagnosed = serializers.DateField(source='date_diagnosed')

    class Meta:
        model = IllnessEntry
        fields = ['illness', 'dateDiagnosed']


class PatientRecordSerializer(serializers.ModelSerializer):
    fullName = serializers.CharField(source='full_name')
    bloodGroup = serializers.CharField(source='blood_group')
    phoneNumber = serializers.CharField(source='phone_number')
    dateOfBirth = serializers.DateField(source='date_of_birth')
    additionalNotes = serializers.CharField(source='additional_notes', allow_null=True)
    profilePicture = serializers.FileField(source='profile_picture', allow_null=True, use_url=True)
    profilePictureType = serializers.CharField(source='profile_picture_type')
    previousHospitals = HospitalVisitSerializer(source='previous_hospitals', many=True)
    previousIllnesses = IllnessEntryReadSerializer(source='previous_illnesses', many=True)
    createdAt = serializers.DateTimeField(source='created_at')
    updatedAt = serializers.DateTimeField(source='updated_at')

    class Meta:
        model = PatientRecord
        fields = [
            'id', 'fullName', 'address', 'gender', 'genotype', 'bloodGroup', 'disability',
            'phoneNumber', 'dateOfBirth', 'additionalNotes', 'profilePicture', 'profilePictureType',
            'previousHospitals', 'previousIllnesses', 'createdAt', 'updatedAt',
        ]
        read_only_fields = fields
