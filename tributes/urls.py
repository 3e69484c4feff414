from django.urls import path
from .api import GuestbookEntryDetail, GuestbookListCreate, RitualDetail, RitualListCreate

urlpatterns = [
    path('memorials/<uuid:memorial_id>/guestbook/', GuestbookListCreate.as_view(), name='guestbook-list'),
    path('guestbook/<int:entry_id>/', GuestbookEntryDetail.as_view(), name='guestbook-detail'),
    path('memorials/<uuid:memorial_id>/rituals/', RitualListCreate.as_view(), name='ritual-list'),
    path('rituals/<int:ritual_id>/', RitualDetail.as_view(), name='ritual-detail'),
]
