from rest_framework import serializers

from .registry import APPROVAL_TYPES
from .services import DECISIONS


class DecisionSerializer(serializers.Serializer):
    decision = serializers.ChoiceField(choices=DECISIONS)


class ApprovalItemSerializer(serializers.Serializer):
    """One row of the cross-module approval queue"""
    record_type = serializers.ChoiceField(choices=list(APPROVAL_TYPES))
    record_type_label = serializers.CharField()
    record_id = serializers.IntegerField()
    reference = serializers.CharField()
    date = serializers.DateField(allow_null=True)
    status = serializers.CharField()
    submitted_by = serializers.CharField(allow_null=True)
    submitted_at = serializers.DateTimeField()
    reviewed_by = serializers.CharField(allow_null=True)
    reviewed_at = serializers.DateTimeField(allow_null=True)
