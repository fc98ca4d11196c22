from django.urls import path

from .views import SuggestPriceView

app_name = 'pricing'

urlpatterns = [
    path('pricing/suggest-price', SuggestPriceView.as_view(), name='suggest-price'),
]
