from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('fleet.urls')),
    path('api/', include('deliveries.urls')),
    path('api/', include('pricing.urls')),
]
