from django.urls import path

from .views import VehicleDetailView, VehicleListCreateView

urlpatterns = [
    path('vehicles/', VehicleListCreateView.as_view(), name='vehicle-list'),
    path('vehicles/<str:vehicle_id>', VehicleDetailView.as_view(), name='vehicle-detail'),
]
