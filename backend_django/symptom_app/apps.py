from django.apps import AppConfig


class SymptomAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'symptom_app'
    verbose_name = 'SymptomCare'
