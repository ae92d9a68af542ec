from django.apps import AppConfig


class StockConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'quarry.stock'
    verbose_name = 'Stock Management'
