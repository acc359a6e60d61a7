from django.contrib import admin

from .models import Project, Task


class TaskInline(admin.TabularInline):
    """Inline admin for viewing tasks within a project."""
    model = Task
    extra = 0
    fields = ['title', 'assignee', 'priority', 'completed', 'due_date']
    readonly_fields = ['title']
    show_change_link = True


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ['name', 'icon', 'task_count', 'created_at']
    search_fields = ['name', 'description']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [TaskInline]

    def task_count(self, obj):
        return obj.tasks.count()
    task_count.short_description = "Tasks"


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    """Admin interface for managing tasks."""

    list_display = [
        'id',
        'title',
        'project',
        'assignee',
        'created_by',
        'priority',
        'completed',
        'due_date',
        'created_at',
    ]
    list_filter = ['completed', 'priority', 'project']
    search_fields = ['title', 'description', 'assignee__name', 'assignee__email']
    list_select_related = ['project', 'assignee', 'created_by']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'created_at'

    fieldsets = [
        ('Task', {
            'fields': ['title', 'description', 'project', 'priority', 'due_date']
        }),
        ('People', {
            'fields': ['created_by', 'assignee']
        }),
        ('Status', {
            'fields': ['completed', 'is_favorite']
        }),
        ('Metadata', {
            'fields': ['created_at', 'updated_at'],
            'classes': ['collapse']
        }),
    ]
