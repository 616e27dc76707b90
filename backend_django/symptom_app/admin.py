from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User, SymptomReport

@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Custom User admin"""
    list_display = ('email', 'first_name', 'last_name', 'is_active', 'created_at')
    list_filter = ('is_active', 'is_staff', 'created_at')
    search_fields = ('email', 'first_name', 'last_name')
    ordering = ('-created_at',)

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Personal info', {'fields': ('first_name', 'last_name', 'username')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Important dates', {'fields': ('last_login', 'created_at', 'updated_at')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'username', 'password1', 'password2'),
        }),
    )

    readonly_fields = ('created_at', 'updated_at')

@admin.register(SymptomReport)
class SymptomReportAdmin(admin.ModelAdmin):
    """Saved symptom reports (read-only history)"""
    list_display = ('id', 'user', 'primary_diagnosis', 'has_report_file', 'created_at')
    list_filter = ('created_at',)
    search_fields = ('user__email', 'symptom_description')
    readonly_fields = ('id', 'user', 'symptom_description', 'scan_findings_description',
                       'report_file_data_uri', 'analysis_result', 'created_at')
    ordering = ('-created_at',)

    fieldsets = (
        ('Basic Info', {
            'fields': ('id', 'user', 'created_at')
        }),
        ('Input', {
            'fields': ('symptom_description', 'scan_findings_description', 'report_file_data_uri')
        }),
        ('Analysis', {
            'fields': ('analysis_result',)
        }),
    )

    def has_add_permission(self, request):
        return False
