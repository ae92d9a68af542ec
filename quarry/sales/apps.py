from django.apps import AppConfig


class SalesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'quarry.sales'
    verbose_name = 'Sales, Dispatch & Accounts'
