from django.contrib.auth.models import Group
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from .models import User, Setting, AuditLog, Notification
from .roles import GROUP_FOR_ROLE, ROLE_GROUPS


ROLE_CHOICES = sorted(GROUP_FOR_ROLE.keys())


def assign_role(user, role):
    """Replace the user's role groups with the group for role"""
    user.groups.remove(*Group.objects.filter(name__in=ROLE_GROUPS.keys()))
    if role:
        group, _ = Group.objects.get_or_create(name=GROUP_FOR_ROLE[role])
        user.groups.add(group)


class UserSerializer(serializers.ModelSerializer):
    role = serializers.ChoiceField(choices=ROLE_CHOICES, required=False, allow_null=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'full_name', 'first_name', 'last_name', 'phone', 'role',
                  'is_active', 'is_staff', 'is_superuser', 'created_at', 'updated_at']
        read_only_fields = ['is_staff', 'is_superuser', 'created_at', 'updated_at']

    def update(self, instance, validated_data):
        role_given = 'role' in validated_data
        role = validated_data.pop('role', None)
        instance = super().update(instance, validated_data)
        if role_given:
            assign_role(instance, role)
        return instance


class UserCreateSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, validators=[validate_password])
    password_confirm = serializers.CharField(write_only=True)
    role = serializers.ChoiceField(choices=ROLE_CHOICES)

    class Meta:
        model = User
        fields = ['username', 'email', 'password', 'password_confirm', 'full_name',
                  'first_name', 'last_name', 'phone', 'role']
        extra_kwargs = {'email': {'required': True, 'allow_blank': False}}

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError('A user with this email already exists in the system')
        return value

    def validate(self, attrs):
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({"password": "Passwords don't match"})
        return attrs

    def create(self, validated_data):
        validated_data.pop('password_confirm')
        password = validated_data.pop('password')
        role = validated_data.pop('role')
        user = User.objects.create(**validated_data, is_active=True)
        user.set_password(password)
        user.save()
        assign_role(user, role)
        return user


class SettingSerializer(serializers.ModelSerializer):
    class Meta:
        model = Setting
        fields = ['id', 'key', 'value', 'description', 'updated_at']


class AuditLogSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='user.username', read_only=True, default=None)

    class Meta:
        model = AuditLog
        fields = ['id', 'user', 'username', 'action', 'model_name', 'object_id', 'object_name',
                  'object_reference', 'changes', 'ip_address', 'created_at']


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = ['id', 'type', 'title', 'message', 'metadata', 'is_read', 'created_at']
        read_only_fields = ['type', 'title', 'message', 'metadata', 'created_at']


class OwnedRecordSerializer(serializers.ModelSerializer):
    """Adds the owner's username and the review stamp to record payloads"""
    created_by_username = serializers.CharField(source='created_by.username', read_only=True, default=None)
    reviewed_by_username = serializers.CharField(source='reviewed_by.username', read_only=True, default=None)


APPROVAL_READ_ONLY = ['status', 'created_by', 'reviewed_by', 'reviewed_at', 'created_at', 'updated_at']
