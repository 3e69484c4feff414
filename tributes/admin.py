from django.contrib import admin

from memorials.admin import MemorialRelatedAdminMixin
from .models import GuestbookEntry, Ritual


@admin.register(GuestbookEntry)
class GuestbookEntryAdmin(MemorialRelatedAdminMixin, admin.ModelAdmin):
    list_display = ('id', 'memorial', 'author_name', 'relationship', 'created_at')
    search_fields = ('author_name', 'message', 'memorial__name')
    readonly_fields = ('author', 'created_at')
    date_hierarchy = 'created_at'


@admin.register(Ritual)
class RitualAdmin(MemorialRelatedAdminMixin, admin.ModelAdmin):
    list_display = ('id', 'memorial', 'ritual_type', 'guest_name', 'expires_at', 'created_at')
    list_filter = ('ritual_type', 'expires_at')
    search_fields = ('guest_name', 'message', 'memorial__name')
    readonly_fields = ('user', 'created_at')
