from django.apps import AppConfig


class CarpoolMainAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'carpool_main_app'

    def ready(self):
        import carpool_main_app.signals  # Register signals
