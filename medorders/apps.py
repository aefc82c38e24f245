from django.apps import AppConfig


class MedordersConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'medorders'
    verbose_name = 'Medication orders'
