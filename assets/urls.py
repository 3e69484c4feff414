from django.urls import path
from .api import MediaDetail, MediaListCreate

urlpatterns = [
    path('memorials/<uuid:memorial_id>/media/', MediaListCreate.as_view(), name='media-list'),
    path('media/<int:item_id>/', MediaDetail.as_view(), name='media-detail'),
]
