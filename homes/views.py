from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsPanelAdminOrReadOnly
from .serializers import AutomationSerializer, DeviceSerializer, RoomSerializer, SceneSerializer
from .state import HomeStateService


class EntityListView(generics.ListAPIView):
    """
    List records of one kind; admins may also create them.

    GET  /api/homes/{kind}s/
    POST /api/homes/{kind}s/
    """
    kind = None
    label = None
    permission_classes = (IsPanelAdminOrReadOnly,)

    def get_queryset(self):
        return HomeStateService.for_request(self.request).get(self.kind)

    def post(self, request):
        obj = HomeStateService.for_request(request).create(self.kind, request.data)
        return Response({
            "status": "success",
            "message": f"{self.label} Created",
            self.kind: self.get_serializer(obj).data,
        }, status=status.HTTP_201_CREATED)


class EntityDetailView(APIView):
    """
    Read one record; admins may also update or delete it.

    GET    /api/homes/{kind}s/{id}/
    PATCH  /api/homes/{kind}s/{id}/
    DELETE /api/homes/{kind}s/{id}/
    """
    kind = None
    label = None
    serializer_class = None
    permission_classes = (IsPanelAdminOrReadOnly,)

    def get(self, request, pk):
        obj = HomeStateService.for_request(request).require(self.kind, pk)
        return Response(self.serializer_class(obj).data)

    def patch(self, request, pk):
        obj = HomeStateService.for_request(request).update(self.kind, pk, request.data)
        return Response({
            "status": "success",
            "message": f"{self.label} Updated",
            self.kind: self.serializer_class(obj).data,
        })

    def delete(self, request, pk):
        HomeStateService.for_request(request).delete(self.kind, pk)
        return Response({"status": "success", "message": f"{self.label} Deleted"})


class DeviceListView(EntityListView):
    kind = 'device'
    label = 'Device'
    serializer_class = DeviceSerializer


class DeviceDetailView(EntityDetailView):
    kind = 'device'
    label = 'Device'
    serializer_class = DeviceSerializer


class RoomListView(EntityListView):
    kind = 'room'
    label = 'Room'
    serializer_class = RoomSerializer


class RoomDetailView(EntityDetailView):
    kind = 'room'
    label = 'Room'
    serializer_class = RoomSerializer


class SceneListView(EntityListView):
    kind = 'scene'
    label = 'Scene'
    serializer_class = SceneSerializer


class SceneDetailView(EntityDetailView):
    kind = 'scene'
    label = 'Scene'
    serializer_class = SceneSerializer


class AutomationListView(EntityListView):
    kind = 'automation'
    label = 'Automation'
    serializer_class = AutomationSerializer


class AutomationDetailView(EntityDetailView):
    kind = 'automation'
    label = 'Automation'
    serializer_class = AutomationSerializer
