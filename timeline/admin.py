from django.contrib import admin

from memorials.admin import MemorialRelatedAdminMixin
from .models import ApprovalStatus, Milestone


@admin.register(Milestone)
class MilestoneAdmin(MemorialRelatedAdminMixin, admin.ModelAdmin):
    list_display = ('id', 'memorial', 'title', 'event_date', 'status', 'submitted_by', 'created_at')
    list_filter = ('status', 'event_date')
    search_fields = ('title', 'description', 'memorial__name', 'submitted_by__email')
    # Status moves only through the review actions
    readonly_fields = ('status', 'submitted_by', 'reviewed_by', 'reviewed_at', 'created_at', 'updated_at')
    actions = ['approve_selected', 'reject_selected']

    def save_model(self, request, obj, form, change):
        if not change:
            obj.submitted_by = request.user
            if obj.memorial.owner_id == request.user.pk:
                obj.status = ApprovalStatus.APPROVED
            else:
                obj.status = ApprovalStatus.PENDING
        super().save_model(request, obj, form, change)

    @admin.action(description="Approve selected pending milestones")
    def approve_selected(self, request, queryset):
        count = 0
        for milestone in queryset.filter(status=ApprovalStatus.PENDING):
            milestone.approve(request.user)
            count += 1
        self.message_user(request, f"Approved {count} milestones")

    @admin.action(description="Reject selected pending milestones")
    def reject_selected(self, request, queryset):
        count = 0
        for milestone in queryset.filter(status=ApprovalStatus.PENDING):
            milestone.reject(request.user)
            count += 1
        self.message_user(request, f"Rejected {count} milestones")
