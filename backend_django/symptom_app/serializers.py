from rest_framework import serializers
from django.contrib.auth import authenticate
from django.contrib.auth.password_validation import validate_password
from .models import User


class UserRegistrationSerializer(serializers.ModelSerializer):
    """Serializer for account registration (email + password)"""
    password = serializers.CharField(write_only=True, validators=[validate_password])
    password_confirm = serializers.CharField(write_only=True)

    class Meta:
        model = User
        fields = ('email', 'first_name', 'last_name', 'password', 'password_confirm')
        extra_kwargs = {
            # Uniqueness is checked case-insensitively in validate()
            'email': {'validators': []},
        }

    def validate(self, attrs):
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError("Passwords don't match")
        attrs['first_name'] = (attrs.get('first_name') or '').strip()
        attrs['last_name'] = (attrs.get('last_name') or '').strip()
        attrs['email'] = (attrs.get('email') or '').strip().lower()
        if User.objects.filter(email__iexact=attrs['email']).exists():
            raise serializers.ValidationError({'email': 'This email is already registered'})
        return attrs

    def create(self, validated_data):
        validated_data.pop('password_confirm', None)
        # The email doubles as the (unique) username
        validated_data['username'] = validated_data['email']
        return User.objects.create_user(**validated_data)


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login"""
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        email = (attrs.get('email') or '').strip().lower()
        password = attrs.get('password')

        if email and password:
            user = authenticate(username=email, password=password)  # Using email as username
            if not user:
                raise serializers.ValidationError('Invalid email or password')
            if not user.is_active:
                raise serializers.ValidationError('User account is disabled')
            attrs['user'] = user
        else:
            raise serializers.ValidationError('Email and password are required')

        return attrs


class UserProfileSerializer(serializers.ModelSerializer):
    """Serializer for user profile information"""
    report_count = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ('id', 'email', 'first_name', 'last_name', 'report_count', 'created_at')
        read_only_fields = ('id', 'email', 'created_at')

    def get_report_count(self, obj):
        return obj.symptom_reports.count()

    def update(self, instance, validated_data):
        for key in ('first_name', 'last_name'):
            if validated_data.get(key) is not None:
                validated_data[key] = validated_data[key].strip()
        return super().update(instance, validated_data)


class AnalyzeRequestSerializer(serializers.Serializer):
    """Body of ``POST /api/analyze``. Emptiness is judged after trimming, by the use case."""
    symptoms = serializers.ListField(child=serializers.CharField(allow_blank=True, trim_whitespace=False))


class DiagnoseRequestSerializer(serializers.Serializer):
    symptomDescription = serializers.CharField(allow_blank=True, trim_whitespace=False)
    scanFindingsDescription = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    reportFileDataUri = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ImproveDescriptionRequestSerializer(serializers.Serializer):
    symptomDescription = serializers.CharField(allow_blank=True, trim_whitespace=False)


class SaveReportRequestSerializer(serializers.Serializer):
    """Body of ``POST /api/reports/``; the analysis result is checked by the save action."""
    symptomDescription = serializers.CharField(allow_blank=True, trim_whitespace=False)
    scanFindingsDescription = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    reportFileDataUri = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    analysisResult = serializers.JSONField()
