from decimal import Decimal

from rest_framework import serializers

from .calculations import net_weight, price_items, invoice_totals
from .models import Invoice, InvoicePayment, DispatchEntry, AccountTransaction, PAYMENT_MODE_CHOICES


class InvoiceItemSerializer(serializers.Serializer):
    material = serializers.CharField(max_length=100)
    quantity = serializers.DecimalField(max_digits=12, decimal_places=3)
    rate = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    def validate_quantity(self, value):
        if value <= 0:
            raise serializers.ValidationError('Quantity must be greater than zero.')
        return value

    def to_internal_value(self, data):
        validated = super().to_internal_value(data)
        return {
            'material': validated['material'],
            'quantity': float(validated['quantity']),
            'rate': float(validated['rate']),
        }


class InvoicePaymentSerializer(serializers.ModelSerializer):
    recorded_by_username = serializers.CharField(source='recorded_by.username', read_only=True, default=None)

    class Meta:
        model = InvoicePayment
        fields = ['id', 'amount', 'payment_mode', 'payment_date', 'notes',
                  'recorded_by', 'recorded_by_username', 'recorded_at']
        read_only_fields = ['recorded_by', 'recorded_at']

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError('Payment amount must be greater than zero.')
        return value


class InvoiceSerializer(serializers.ModelSerializer):
    items = InvoiceItemSerializer(many=True)
    payments = InvoicePaymentSerializer(many=True, read_only=True)
    balance = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    customer_company = serializers.CharField(source='customer.company_name', read_only=True, default=None)
    created_by_username = serializers.CharField(source='created_by.username', read_only=True, default=None)

    class Meta:
        model = Invoice
        fields = [
            'id', 'invoice_number', 'customer', 'customer_company', 'customer_name', 'invoice_date',
            'due_date', 'items', 'empty_weight', 'gross_weight', 'net_weight', 'subtotal', 'tax_rate',
            'tax_amount', 'total_amount', 'amount_paid', 'balance', 'status', 'payment_mode',
            'payment_date', 'notes', 'terms_conditions', 'payments',
            'created_by', 'created_by_username', 'created_at', 'updated_at'
        ]
        read_only_fields = ['invoice_number', 'subtotal', 'tax_amount', 'total_amount', 'status',
                            'created_by', 'created_at', 'updated_at']
        extra_kwargs = {'customer_name': {'required': False, 'allow_blank': True}}

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['items'] = instance.items
        return data

    def validate_items(self, value):
        if not value:
            raise serializers.ValidationError('Add at least one item.')
        return value

    def validate_tax_rate(self, value):
        if value < 0 or value > 100:
            raise serializers.ValidationError('Tax rate must be between 0 and 100.')
        return value

    def validate(self, attrs):
        instance = self.instance
        customer = attrs.get('customer', getattr(instance, 'customer', None))
        if 'customer_name' in attrs:
            name = attrs['customer_name']
        else:
            name = getattr(instance, 'customer_name', '')
        if not (name or '').strip():
            if customer is None:
                raise serializers.ValidationError({'customer_name': 'Customer name is required.'})
            attrs['customer_name'] = customer.company_name

        empty = attrs.get('empty_weight', getattr(instance, 'empty_weight', None))
        gross = attrs.get('gross_weight', getattr(instance, 'gross_weight', None))
        for field, value in (('empty_weight', empty), ('gross_weight', gross)):
            if value is not None and value < 0:
                raise serializers.ValidationError({field: 'Weight cannot be negative.'})
        weight = net_weight(empty, gross)
        if weight is not None and weight <= 0:
            raise serializers.ValidationError({'gross_weight': 'Gross weight must be more than empty weight.'})
        if weight is None:
            weight = attrs.get('net_weight', getattr(instance, 'net_weight', None))
            if weight is not None and weight <= 0:
                raise serializers.ValidationError({'net_weight': 'Net weight must be greater than zero.'})

        items = attrs.get('items', getattr(instance, 'items', []))
        tax_rate = attrs.get('tax_rate', getattr(instance, 'tax_rate', Decimal('5.00')))
        _, _, total = invoice_totals(price_items(items, weight), tax_rate)

        paid = attrs.get('amount_paid', getattr(instance, 'amount_paid', Decimal('0')))
        if paid < 0:
            raise serializers.ValidationError({'amount_paid': 'Amount paid cannot be negative.'})
        if paid > total:
            raise serializers.ValidationError(
                {'amount_paid': f'Amount paid ({paid}) exceeds the invoice total ({total}).'}
            )
        return attrs

    def create(self, validated_data):
        invoice = Invoice.objects.create(**validated_data)
        if invoice.amount_paid > 0:
            InvoicePayment.objects.create(
                invoice=invoice,
                amount=invoice.amount_paid,
                payment_mode=invoice.payment_mode,
                payment_date=invoice.payment_date or invoice.invoice_date,
                notes='Initial payment on invoice creation',
                recorded_by=invoice.created_by,
            )
        return invoice

    def update(self, instance, validated_data):
        # Payments after creation go through the payments endpoint
        validated_data.pop('amount_paid', None)
        for key, value in validated_data.items():
            setattr(instance, key, value)
        instance.save()
        return instance


class InvoiceListSerializer(serializers.ModelSerializer):
    balance = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = Invoice
        fields = ['id', 'invoice_number', 'customer', 'customer_name', 'invoice_date', 'due_date',
                  'net_weight', 'total_amount', 'amount_paid', 'balance', 'status', 'created_at']


class PaymentInputSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    payment_mode = serializers.ChoiceField(choices=PAYMENT_MODE_CHOICES, required=False, allow_blank=True)
    payment_date = serializers.DateField(required=False)
    notes = serializers.CharField(max_length=255, required=False, allow_blank=True)


class DispatchEntrySerializer(serializers.ModelSerializer):
    created_by_username = serializers.CharField(source='created_by.username', read_only=True, default=None)

    class Meta:
        model = DispatchEntry
        fields = [
            'id', 'dispatch_number', 'material_type', 'quantity_dispatched', 'quantity_received',
            'balance_quantity', 'unit', 'transportation_mode', 'vehicle_number', 'driver_name',
            'driver_contact', 'destination', 'customer_name', 'dispatch_date', 'expected_delivery_date',
            'delivery_status', 'notes', 'created_by', 'created_by_username', 'created_at', 'updated_at'
        ]
        read_only_fields = ['balance_quantity', 'created_by', 'created_at', 'updated_at']

    def validate(self, attrs):
        dispatched = attrs.get('quantity_dispatched', getattr(self.instance, 'quantity_dispatched', None))
        received = attrs.get('quantity_received', getattr(self.instance, 'quantity_received', Decimal('0')))
        if dispatched is not None and dispatched <= 0:
            raise serializers.ValidationError({'quantity_dispatched': 'Quantity must be greater than zero.'})
        if received is not None and received < 0:
            raise serializers.ValidationError({'quantity_received': 'Quantity cannot be negative.'})
        if dispatched is not None and received is not None and received > dispatched:
            raise serializers.ValidationError(
                {'quantity_received': 'Received quantity cannot exceed dispatched quantity.'}
            )
        dispatch_date = attrs.get('dispatch_date', getattr(self.instance, 'dispatch_date', None))
        expected = attrs.get('expected_delivery_date', getattr(self.instance, 'expected_delivery_date', None))
        if dispatch_date and expected and expected < dispatch_date:
            raise serializers.ValidationError(
                {'expected_delivery_date': 'Expected delivery cannot be before the dispatch date.'}
            )
        return attrs


class AccountTransactionSerializer(serializers.ModelSerializer):
    created_by_username = serializers.CharField(source='created_by.username', read_only=True, default=None)

    class Meta:
        model = AccountTransaction
        fields = [
            'id', 'transaction_type', 'invoice_number', 'customer_name', 'amount', 'amount_given', 'balance',
            'reason', 'transaction_date', 'payment_method', 'status', 'notes',
            'created_by', 'created_by_username', 'created_at', 'updated_at'
        ]
        read_only_fields = ['balance', 'created_by', 'created_at', 'updated_at']

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError('Amount must be greater than zero.')
        return value

    def validate_amount_given(self, value):
        if value < 0:
            raise serializers.ValidationError('Amount given cannot be negative.')
        return value

    def validate(self, attrs):
        transaction_type = attrs.get('transaction_type', getattr(self.instance, 'transaction_type', None))
        reason = attrs.get('reason', getattr(self.instance, 'reason', ''))
        if transaction_type == 'expense' and not reason:
            raise serializers.ValidationError({'reason': 'Give a reason for the expense.'})
        return attrs
