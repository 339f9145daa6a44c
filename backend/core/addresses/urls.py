from django.urls import path

from addresses.views import AddressDetailAPIView, AddressListCreateAPIView

urlpatterns = [
    path("addresses/", AddressListCreateAPIView.as_view(), name="addresses-list"),
    path("addresses/<int:pk>/", AddressDetailAPIView.as_view(), name="addresses-detail"),
]
