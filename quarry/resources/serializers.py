from django.conf import settings
from rest_framework import serializers

from quarry.core.serializers import OwnedRecordSerializer, APPROVAL_READ_ONLY
from .models import FuelRecord, InventoryItem, SafetyIncident, SafetyIncidentImage

IMAGE_CONTENT_TYPES = {'image/jpeg', 'image/png', 'image/gif', 'image/webp'}


class FuelRecordSerializer(OwnedRecordSerializer):
    class Meta:
        model = FuelRecord
        fields = ['id', 'record_number', 'date', 'vehicle_number', 'vehicle_type', 'fuel_type',
                  'quantity_liters', 'cost_per_liter', 'total_cost', 'odometer_reading', 'supplier',
                  'receipt_number', 'notes', 'status', 'created_by', 'created_by_username',
                  'reviewed_by', 'reviewed_by_username', 'reviewed_at', 'created_at', 'updated_at']
        read_only_fields = APPROVAL_READ_ONLY + ['record_number', 'total_cost']

    def validate_quantity_liters(self, value):
        if value <= 0:
            raise serializers.ValidationError('Quantity must be greater than zero.')
        return value

    def validate_cost_per_liter(self, value):
        if value <= 0:
            raise serializers.ValidationError('Cost per liter must be greater than zero.')
        return value

    def validate_odometer_reading(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError('Odometer reading cannot be negative.')
        return value


class InventoryItemSerializer(serializers.ModelSerializer):
    is_low_stock = serializers.BooleanField(read_only=True)
    created_by_username = serializers.CharField(source='created_by.username', read_only=True, default=None)

    class Meta:
        model = InventoryItem
        fields = ['id', 'item_name', 'item_code', 'category', 'quantity', 'unit', 'minimum_quantity',
                  'is_low_stock', 'location', 'supplier', 'given_to', 'last_restock_date', 'notes',
                  'created_by', 'created_by_username', 'created_at', 'updated_at']
        read_only_fields = ['created_by', 'created_at', 'updated_at']
        extra_kwargs = {'item_code': {'required': False, 'allow_blank': True}}

    def validate_quantity(self, value):
        if value < 0:
            raise serializers.ValidationError('Quantity cannot be negative.')
        return value

    def validate_minimum_quantity(self, value):
        if value < 0:
            raise serializers.ValidationError('Minimum quantity cannot be negative.')
        return value


class SafetyIncidentImageSerializer(serializers.ModelSerializer):
    image_url = serializers.SerializerMethodField()

    class Meta:
        model = SafetyIncidentImage
        fields = ['id', 'image', 'image_url', 'caption', 'uploaded_by', 'uploaded_at']
        read_only_fields = ['uploaded_by', 'uploaded_at']
        extra_kwargs = {'image': {'write_only': True}}

    def get_image_url(self, obj):
        request = self.context.get('request')
        url = obj.image.url
        return request.build_absolute_uri(url) if request else url

    def validate_image(self, value):
        if value.size > settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024:
            raise serializers.ValidationError(f'File exceeds the {settings.MAX_UPLOAD_SIZE_MB}MB limit.')
        if getattr(value, 'content_type', '') not in IMAGE_CONTENT_TYPES:
            raise serializers.ValidationError('Only JPEG, PNG, GIF or WebP images can be attached.')
        return value


class SafetyIncidentSerializer(serializers.ModelSerializer):
    images = SafetyIncidentImageSerializer(many=True, read_only=True)
    created_by_username = serializers.CharField(source='created_by.username', read_only=True, default=None)

    class Meta:
        model = SafetyIncident
        fields = ['id', 'date', 'time', 'location', 'incident_type', 'severity', 'description',
                  'people_involved', 'witnesses', 'immediate_action', 'corrective_action', 'status',
                  'images', 'created_by', 'created_by_username', 'created_at', 'updated_at']
        # Status only changes through the status endpoint
        read_only_fields = ['status', 'created_by', 'created_at', 'updated_at']


class SafetyStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=SafetyIncident.STATUS_CHOICES)
    corrective_action = serializers.CharField(required=False, allow_blank=True)
