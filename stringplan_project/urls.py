# stringplan_project/urls.py

from django.urls import path, include

urlpatterns = [
    path('', include('stringplan_app.urls')),  # ← Route the root URL to stringplan_app.urls
]
