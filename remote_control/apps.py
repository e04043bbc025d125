from django.apps import AppConfig


class RemoteControlConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'remote_control'
