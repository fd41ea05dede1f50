from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),

    # REST API каталога, цветов, компаний и заказов
    path("api/", include("storefront.api_urls")),
    path("api/", include("accounts.api_urls")),
    path("api/", include("orders.api_urls")),
]
