# stringplan_app/urls.py

from django.urls import path
from .views import (
    pins, create_session, delete_session, upload_image, clear_image, string_art, stream_logs,
)

urlpatterns = [
    path('pins/', pins, name='pins'),
    path('sessions/', create_session, name='create_session'),
    path('sessions/<uuid:session_id>/', delete_session, name='delete_session'),
    path('sessions/<uuid:session_id>/image/', upload_image, name='upload_image'),
    path('sessions/<uuid:session_id>/clear-image/', clear_image, name='clear_image'),
    path('sessions/<uuid:session_id>/string-art/', string_art, name='string_art'),
    path('sessions/<uuid:session_id>/logs/', stream_logs, name='stream_logs'),
]
