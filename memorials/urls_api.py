from django.urls import path
from .api import (
    InvitationAccept,
    InvitationDetail,
    InvitationListCreate,
    InvitationQRCode,
    InvitationRedeem,
    MemorialDetail,
    MemorialListCreate,
    ParticipantDetail,
    ParticipantListCreate,
)

urlpatterns = [
    path('memorials/', MemorialListCreate.as_view(), name='memorial-list'),
    path('memorials/<uuid:memorial_id>/', MemorialDetail.as_view(), name='memorial-detail'),
    path('memorials/<uuid:memorial_id>/participants/', ParticipantListCreate.as_view(), name='participant-list'),
    path('memorials/<uuid:memorial_id>/participants/<int:participant_id>/', ParticipantDetail.as_view(), name='participant-detail'),
    path('memorials/<uuid:memorial_id>/invitations/', InvitationListCreate.as_view(), name='invitation-list'),
    path('invitations/redeem/', InvitationRedeem.as_view(), name='invitation-redeem'),
    path('invitations/<uuid:invitation_id>/', InvitationDetail.as_view(), name='invitation-detail'),
    path('invitations/<uuid:invitation_id>/accept/', InvitationAccept.as_view(), name='invitation-accept'),
    path('invitations/<uuid:invitation_id>/qr/', InvitationQRCode.as_view(), name='invitation-qr'),
]
