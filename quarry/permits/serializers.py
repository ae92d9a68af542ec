from rest_framework import serializers
from .models import Permit


class PermitSerializer(serializers.ModelSerializer):
    days_until_expiry = serializers.IntegerField(read_only=True)

    class Meta:
        model = Permit
        fields = ['id', 'company_name', 'permit_type', 'approval_date', 'expiry_date', 'days_until_expiry',
                  'status', 'description', 'document_url', 'quantity_in_mt',
                  'created_by', 'created_at', 'updated_at']
        read_only_fields = ['created_by', 'created_at', 'updated_at']

    def validate_quantity_in_mt(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError('Quantity cannot be negative.')
        return value

    def validate(self, attrs):
        approval = attrs.get('approval_date', getattr(self.instance, 'approval_date', None))
        expiry = attrs.get('expiry_date', getattr(self.instance, 'expiry_date', None))
        if approval and expiry and expiry < approval:
            raise serializers.ValidationError({'expiry_date': 'Expiry date cannot be before the approval date.'})
        return attrs
