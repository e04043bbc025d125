from django.urls import path
from . import views

urlpatterns = [
    path('devices/', views.DeviceListView.as_view(), name='device-list'),
    path('devices/<uuid:pk>/', views.DeviceDetailView.as_view(), name='device-detail'),
    path('rooms/', views.RoomListView.as_view(), name='room-list'),
    path('rooms/<str:pk>/', views.RoomDetailView.as_view(), name='room-detail'),
    path('scenes/', views.SceneListView.as_view(), name='scene-list'),
    path('scenes/<uuid:pk>/', views.SceneDetailView.as_view(), name='scene-detail'),
    path('automations/', views.AutomationListView.as_view(), name='automation-list'),
    path('automations/<uuid:pk>/', views.AutomationDetailView.as_view(), name='automation-detail'),
]
