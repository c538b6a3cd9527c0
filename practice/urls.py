from django.urls import include, path

urlpatterns = [
    path("", include("repetition.api.urls")),
]
