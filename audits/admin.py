from django.contrib import admin
from django.db.models import Q
from .models import AuditLog

@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ('id', 'action', 'actor_display', 'target_type', 'target_id', 'created_at')
    list_filter = ('action', 'actor_type', 'target_type', 'created_at')
    search_fields = ('actor_id', 'target_id', 'target_type')
    date_hierarchy = 'created_at'

    def actor_display(self, obj):
        return obj.get_actor_display()
    actor_display.short_description = 'Actor'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        qs = super().get_queryset(request)

        # Superusers see everything
        if request.user.is_superuser:
            return qs

        # Owners see entries about their own memorials
        from memorials.models import Memorial

        memorial_ids = [
            str(pk) for pk in Memorial.objects.filter(owner=request.user).values_list('id', flat=True)
        ]
        owner_filter = Q(target_type='memorial', target_id__in=memorial_ids) | \
                       Q(metadata__memorial_id__in=memorial_ids)
        return qs.filter(owner_filter)
