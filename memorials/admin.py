from django.contrib import admin
from django.contrib import messages
from django.contrib.auth import get_user_model
from django.core.exceptions import PermissionDenied
from django.shortcuts import redirect

from .models import Invitation, Memorial, Participant


# ===== BASE MIXIN FOR EVERY MODEL WITH A Memorial FOREIGN KEY =====
class MemorialRelatedAdminMixin:
    """
    Mixin for all models with a ForeignKey to Memorial.
    Staff users only see and edit rows of memorials they own.
    """

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        if request.user.is_superuser:
            return qs
        return qs.filter(memorial__owner=request.user)

    def formfield_for_foreignkey(self, db_field, request, **kwargs):
        """Limit the memorial dropdown to owned memorials"""
        if db_field.name == "memorial" and not request.user.is_superuser:
            kwargs["queryset"] = Memorial.objects.filter(owner=request.user)
        return super().formfield_for_foreignkey(db_field, request, **kwargs)

    def changeform_view(self, request, object_id=None, form_url='', extra_context=None):
        """Refuse ?memorial_id= prefill for memorials owned by someone else"""
        memorial_id = request.GET.get('memorial_id')
        if request.method == 'GET' and memorial_id and not request.user.is_superuser:
            if not Memorial.objects.filter(pk=memorial_id, owner=request.user).exists():
                messages.error(
                    request,
                    f"You do not have access to this memorial to create {self.model._meta.verbose_name}."
                )
                app_label = self.model._meta.app_label
                model_name = self.model._meta.model_name
                return redirect(f'admin:{app_label}_{model_name}_changelist')
        return super().changeform_view(request, object_id, form_url, extra_context)

    def get_changeform_initial_data(self, request):
        initial = super().get_changeform_initial_data(request)
        if 'memorial_id' in request.GET:
            initial['memorial'] = request.GET['memorial_id']
        return initial

    def save_model(self, request, obj, form, change):
        if not request.user.is_superuser and obj.memorial.owner_id != request.user.pk:
            raise PermissionDenied(
                f"Cannot create or change {self.model._meta.verbose_name} of another owner's memorial"
            )
        super().save_model(request, obj, form, change)


@admin.register(Memorial)
class MemorialAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'owner', 'passing_date', 'created_at')
    search_fields = ('name', 'owner__email')
    date_hierarchy = 'created_at'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        if request.user.is_superuser:
            return qs
        return qs.filter(owner=request.user)

    def formfield_for_foreignkey(self, db_field, request, **kwargs):
        """Staff can only create memorials they own themselves"""
        if db_field.name == "owner" and not request.user.is_superuser:
            kwargs["queryset"] = get_user_model().objects.filter(pk=request.user.pk)
            kwargs["initial"] = request.user.pk
        return super().formfield_for_foreignkey(db_field, request, **kwargs)

    def save_model(self, request, obj, form, change):
        if not change and not request.user.is_superuser:
            obj.owner = request.user
        super().save_model(request, obj, form, change)

    def get_readonly_fields(self, request, obj=None):
        # Ownership is fixed once the memorial exists
        if obj is not None:
            return ('owner', 'created_at', 'updated_at')
        return ('created_at', 'updated_at')


@admin.register(Participant)
class ParticipantAdmin(MemorialRelatedAdminMixin, admin.ModelAdmin):
    list_display = ('id', 'memorial', 'user', 'guest_email', 'access_level', 'invited_at', 'accepted_at')
    list_filter = ('access_level', 'accepted_at')
    search_fields = ('user__email', 'guest_email', 'guest_name', 'memorial__name')


@admin.register(Invitation)
class InvitationAdmin(MemorialRelatedAdminMixin, admin.ModelAdmin):
    list_display = ('id', 'memorial', 'email', 'access_code', 'access_level', 'expires_at', 'accepted_at')
    list_filter = ('access_level', 'expires_at', 'accepted_at')
    search_fields = ('email', 'access_code', 'memorial__name')
    readonly_fields = ('access_code', 'accepted_at', 'created_at')
