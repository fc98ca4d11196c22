from django.urls import path

from .views import DeliveryDashboardView, DeliveryDetailView, DeliveryListCreateView

urlpatterns = [
    path('deliveries/', DeliveryListCreateView.as_view(), name='delivery-list'),
    path('deliveries/dashboard', DeliveryDashboardView.as_view(), name='delivery-dashboard'),
    path('deliveries/<str:delivery_id>', DeliveryDetailView.as_view(), name='delivery-detail'),
]
