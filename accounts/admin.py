from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import BaseUserCreationForm, UserChangeForm

from .models import User


class WorkspaceUserCreationForm(BaseUserCreationForm):
    class Meta:
        model = User
        fields = ('email', 'name', 'role')


class WorkspaceUserChangeForm(UserChangeForm):
    class Meta:
        model = User
        fields = '__all__'


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin console for workspace members."""

    form = WorkspaceUserChangeForm
    add_form = WorkspaceUserCreationForm

    list_display = ['email', 'name', 'role', 'is_active', 'last_login', 'date_joined']
    list_filter = ['role', 'is_active', 'is_staff']
    search_fields = ['email', 'name']
    ordering = ['name']
    readonly_fields = ['last_login', 'date_joined', 'updated_at']

    fieldsets = [
        (None, {
            'fields': ['email', 'password']
        }),
        ('Profile', {
            'fields': ['name', 'role', 'profile_photo']
        }),
        ('Permissions', {
            'fields': ['is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'],
            'classes': ['collapse']
        }),
        ('Metadata', {
            'fields': ['last_login', 'date_joined', 'updated_at'],
            'classes': ['collapse']
        }),
    ]
    add_fieldsets = [
        (None, {
            'classes': ['wide'],
            'fields': ['email', 'name', 'role', 'password1', 'password2'],
        }),
    ]
