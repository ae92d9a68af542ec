"""Record types that go through the pending -> approved/rejected workflow"""
from django.apps import apps

# record_type -> (model label, date field, human label)
APPROVAL_TYPES = {
    'drilling': ('operations.DrillingRecord', 'date', 'Drilling'),
    'blasting': ('operations.BlastingRecord', 'date', 'Blasting'),
    'loading': ('operations.LoadingRecord', 'date', 'Breaking/Loading'),
    'transport': ('operations.TransportRecord', 'date', 'Transport'),
    'jcb': ('operations.JCBOperation', 'date', 'JCB Operation'),
    'fuel': ('resources.FuelRecord', 'date', 'Fuel'),
    'purchase_request': ('stock.PurchaseRequest', 'required_by', 'Purchase Request'),
}


class UnknownRecordType(KeyError):
    pass


def get_model(record_type):
    try:
        label = APPROVAL_TYPES[record_type][0]
    except KeyError:
        raise UnknownRecordType(record_type)
    return apps.get_model(label)


def date_field(record_type):
    return APPROVAL_TYPES[record_type][1]


def type_label(record_type):
    return APPROVAL_TYPES[record_type][2]
