from django.apps import AppConfig


class ResourcesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'quarry.resources'
    verbose_name = 'Fuel, Inventory & Safety'
