from django.urls import path
from . import views

urlpatterns = [
    path('voice-command', views.voice_command, name='assistant-voice-command'),
    path('tts', views.text_to_speech, name='assistant-tts'),
    path('system-status', views.system_status, name='assistant-system-status'),
    path('security-event', views.security_event, name='assistant-security-event'),
    path('suggest-scenes', views.suggest_scenes, name='assistant-suggest-scenes'),
]
