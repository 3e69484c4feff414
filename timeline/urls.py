from django.urls import path
from .api import MilestoneApprove, MilestoneDetail, MilestoneReject, PendingMilestones, TimelineListCreate

urlpatterns = [
    path('memorials/<uuid:memorial_id>/milestones/', TimelineListCreate.as_view(), name='milestone-list'),
    path('memorials/<uuid:memorial_id>/milestones/pending/', PendingMilestones.as_view(), name='milestone-pending'),
    path('milestones/<int:milestone_id>/', MilestoneDetail.as_view(), name='milestone-detail'),
    path('milestones/<int:milestone_id>/approve/', MilestoneApprove.as_view(), name='milestone-approve'),
    path('milestones/<int:milestone_id>/reject/', MilestoneReject.as_view(), name='milestone-reject'),
]
