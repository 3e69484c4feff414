from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from remembrance.permissions import IsMemorialMember, child_access
from . import services
from .models import Milestone
from .serializers import MilestoneSerializer, MilestoneWriteSerializer


def _visible_milestone(request, milestone_id):
    access, milestone = child_access(request, Milestone, milestone_id)
    # Pending and rejected rows of other submitters do not exist for non-owners
    return access, services.get_milestone(access, milestone.pk)


class TimelineListCreate(APIView):
    permission_classes = [IsMemorialMember]
    failure_action = {'get': 'load timeline', 'post': 'submit milestone'}

    def get(self, request, memorial_id):
        milestones = services.list_timeline(request.memorial_access)
        return Response(MilestoneSerializer(milestones, many=True).data)

    def post(self, request, memorial_id):
        serializer = MilestoneWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        milestone = services.submit_milestone(request.memorial_access, **serializer.validated_data)
        return Response(MilestoneSerializer(milestone).data, status=status.HTTP_201_CREATED)


class PendingMilestones(APIView):
    permission_classes = [IsMemorialMember]
    failure_action = 'load pending milestones'

    def get(self, request, memorial_id):
        milestones = services.list_pending(request.memorial_access)
        return Response(MilestoneSerializer(milestones, many=True).data)


class MilestoneDetail(APIView):
    failure_action = {'patch': 'update milestone', 'delete': 'delete milestone'}

    def patch(self, request, milestone_id):
        access, milestone = _visible_milestone(request, milestone_id)
        serializer = MilestoneWriteSerializer(milestone, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        milestone = services.update_milestone(access, milestone, **serializer.validated_data)
        return Response(MilestoneSerializer(milestone).data)

    def delete(self, request, milestone_id):
        access, milestone = _visible_milestone(request, milestone_id)
        services.delete_milestone(access, milestone)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MilestoneApprove(APIView):
    failure_action = 'approve milestone'
    approve = True

    def post(self, request, milestone_id):
        access, milestone = _visible_milestone(request, milestone_id)
        milestone = services.review_milestone(access, milestone.pk, approve=self.approve)
        return Response(MilestoneSerializer(milestone).data)


class MilestoneReject(MilestoneApprove):
    failure_action = 'reject milestone'
    approve = False
