from django.urls import path
from . import views

urlpatterns = [
    # Device control
    path('devices/<uuid:device_id>/toggle',
         views.toggle_device,
         name='remote-toggle-device'),

    # Room-wide lights
    path('rooms/<str:room_name>/lights',
         views.set_room_lights,
         name='remote-room-lights'),

    # Scene activation
    path('scenes/activate',
         views.activate_scene,
         name='remote-activate-scene'),

    # Automation enable/pause
    path('automations/<uuid:automation_id>/toggle',
         views.toggle_automation,
         name='remote-toggle-automation'),
]
