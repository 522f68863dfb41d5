"""
Django admin registrations for the clinic models.

Only minimal configuration is applied: enough for staff to inspect
records and make manual corrections during development.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import Appointment, Doctor, Patient, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('username', 'email', 'first_name', 'last_name', 'is_staff', 'last_connected_at')
    readonly_fields = ('last_connected_at', 'modified_at')
    fieldsets = BaseUserAdmin.fieldsets + (
        ('Activity', {'fields': ('last_connected_at', 'modified_at')}),
    )


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('id', 'first_name', 'last_name', 'email', 'specialty')
    list_filter = ('specialty',)
    search_fields = ('first_name', 'last_name', 'email')


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'first_name', 'last_name', 'email', 'phone', 'birth_date')
    search_fields = ('first_name', 'last_name', 'email', 'phone')


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'doctor', 'patient', 'scheduled_at', 'status')
    list_filter = ('status', 'doctor')
    search_fields = ('patient__first_name', 'patient__last_name', 'doctor__last_name')
