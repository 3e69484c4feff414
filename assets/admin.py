from django.contrib import admin

from memorials.admin import MemorialRelatedAdminMixin
from .models import MediaItem


@admin.register(MediaItem)
class MediaItemAdmin(MemorialRelatedAdminMixin, admin.ModelAdmin):
    list_display = ('id', 'memorial', 'media_type', 'caption', 'uploaded_by', 'created_at')
    list_filter = ('media_type', 'created_at')
    search_fields = ('caption', 'url', 'memorial__name')
    readonly_fields = ('uploaded_by', 'created_at')

    def save_model(self, request, obj, form, change):
        if not change:
            obj.uploaded_by = request.user
        super().save_model(request, obj, form, change)
