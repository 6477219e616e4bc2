from django.urls import path

from . import views

app_name = "activity"

urlpatterns = [
    path("admin/search-logs/", views.search_logs, name="search_logs"),
    path("admin/click-logs/", views.click_logs, name="click_logs"),
]
