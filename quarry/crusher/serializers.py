from decimal import Decimal, InvalidOperation

from rest_framework import serializers

from quarry.core.models import Setting
from .models import CrusherProduction, EBReport

MAX_SHIFT_HOURS = Decimal('24')


class CrusherProductionSerializer(serializers.ModelSerializer):
    efficiency = serializers.DecimalField(max_digits=7, decimal_places=2, read_only=True)
    created_by_username = serializers.CharField(source='created_by.username', read_only=True, default=None)

    class Meta:
        model = CrusherProduction
        fields = ['id', 'date', 'shift', 'crusher_type', 'machine_working_hours', 'machine_downtime',
                  'maintenance_hours', 'material_source', 'material_input', 'total_output', 'efficiency',
                  'status', 'maintenance_notes', 'notes', 'created_by', 'created_by_username',
                  'created_at', 'updated_at']
        read_only_fields = ['created_by', 'created_at', 'updated_at']

    def validate(self, attrs):
        hours = {}
        for field in ('machine_working_hours', 'machine_downtime', 'maintenance_hours',
                      'material_input', 'total_output'):
            value = attrs.get(field, getattr(self.instance, field, None))
            if value is not None and value < 0:
                raise serializers.ValidationError({field: 'Must not be negative.'})
            hours[field] = value or Decimal('0')

        shift_total = hours['machine_working_hours'] + hours['machine_downtime'] + hours['maintenance_hours']
        if shift_total > MAX_SHIFT_HOURS:
            raise serializers.ValidationError(
                {'machine_working_hours': f'Working, downtime and maintenance hours add up to {shift_total}, '
                                          f'more than {MAX_SHIFT_HOURS}.'}
            )
        return attrs


class MeterReadingSerializer(serializers.Serializer):
    kw = serializers.DecimalField(max_digits=14, decimal_places=3, required=False, allow_null=True, min_value=0)
    kva = serializers.DecimalField(max_digits=14, decimal_places=3, required=False, allow_null=True, min_value=0)
    kvah = serializers.DecimalField(max_digits=14, decimal_places=3, required=False, allow_null=True, min_value=0)
    kwh = serializers.DecimalField(max_digits=14, decimal_places=3, min_value=0)
    pf_c = serializers.DecimalField(max_digits=5, decimal_places=3, required=False, allow_null=True, min_value=0)
    pf = serializers.DecimalField(max_digits=5, decimal_places=3, required=False, allow_null=True,
                                  min_value=0, max_value=1)

    def to_internal_value(self, data):
        validated = super().to_internal_value(data)
        # Stored as JSON, so keep plain numbers
        return {key: (float(value) if value is not None else None) for key, value in validated.items()}


class EBReportSerializer(serializers.ModelSerializer):
    starting_reading = MeterReadingSerializer()
    ending_reading = MeterReadingSerializer()
    cost_per_unit = serializers.DecimalField(max_digits=8, decimal_places=2, required=False, min_value=0)
    created_by_username = serializers.CharField(source='created_by.username', read_only=True, default=None)

    class Meta:
        model = EBReport
        fields = ['id', 'report_date', 'starting_reading', 'ending_reading', 'units_consumed',
                  'cost_per_unit', 'total_cost', 'notes', 'created_by', 'created_by_username',
                  'created_at', 'updated_at']
        read_only_fields = ['units_consumed', 'total_cost', 'created_by', 'created_at', 'updated_at']

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['starting_reading'] = instance.starting_reading
        data['ending_reading'] = instance.ending_reading
        return data

    def validate(self, attrs):
        starting = attrs.get('starting_reading', getattr(self.instance, 'starting_reading', None)) or {}
        ending = attrs.get('ending_reading', getattr(self.instance, 'ending_reading', None)) or {}
        if Decimal(str(ending.get('kwh') or 0)) < Decimal(str(starting.get('kwh') or 0)):
            raise serializers.ValidationError(
                {'ending_reading': 'Ending kWh cannot be less than starting kWh.'}
            )
        if 'cost_per_unit' not in attrs and self.instance is None:
            attrs['cost_per_unit'] = default_cost_per_unit()
        return attrs

    def create(self, validated_data):
        return EBReport.objects.create(**validated_data)

    def update(self, instance, validated_data):
        for key, value in validated_data.items():
            setattr(instance, key, value)
        instance.save()
        return instance


def default_cost_per_unit():
    """Tariff from the eb_cost_per_unit setting; 0 when unset or malformed"""
    value = Setting.get_value('eb_cost_per_unit', '0')
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError):
        return Decimal('0')
