from rest_framework import serializers

from quarry.core.serializers import OwnedRecordSerializer, APPROVAL_READ_ONLY
from .models import ProductionStock, PurchaseRequest


class ProductionStockSerializer(serializers.ModelSerializer):
    created_by_username = serializers.CharField(source='created_by.username', read_only=True, default=None)

    class Meta:
        model = ProductionStock
        fields = ['id', 'material_type', 'quantity', 'unit', 'stock_date', 'location', 'quality_grade',
                  'notes', 'created_by', 'created_by_username', 'created_at', 'updated_at']
        read_only_fields = ['created_by', 'created_at', 'updated_at']

    def validate_quantity(self, value):
        if value < 0:
            raise serializers.ValidationError('Quantity cannot be negative.')
        return value


class PurchaseRequestSerializer(OwnedRecordSerializer):
    class Meta:
        model = PurchaseRequest
        fields = ['id', 'request_number', 'material_name', 'quantity', 'unit', 'purpose', 'priority',
                  'required_by', 'estimated_cost', 'supplier_suggestion', 'notes',
                  'status', 'created_by', 'created_by_username', 'reviewed_by', 'reviewed_by_username',
                  'reviewed_at', 'created_at', 'updated_at']
        read_only_fields = APPROVAL_READ_ONLY
        extra_kwargs = {'request_number': {'required': False, 'allow_blank': True}}

    def validate_quantity(self, value):
        if value <= 0:
            raise serializers.ValidationError('Quantity must be greater than zero.')
        return value

    def validate_estimated_cost(self, value):
        if value < 0:
            raise serializers.ValidationError('Estimated cost cannot be negative.')
        return value
