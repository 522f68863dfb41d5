"""
URL mappings for the clinic API.

Trailing slashes are deliberately omitted (``APPEND_SLASH = False``).
"""
from django.urls import path, include

from .auth_views import login_view, jwt_refresh_view, jwt_logout_view
from .views import health
from .views.users import users_list, user_detail
from .views.doctors import doctors_list, doctor_detail
from .views.patients import patients_list, patient_detail
from .views.appointments import appointments_list, appointment_detail, appointment_cancel


urlpatterns = [
    path('metrics', include('django_prometheus.urls')),
    path('healthz', health.healthz),
    # Authentication
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/refresh', jwt_refresh_view),
    path('api/auth/logout', jwt_logout_view),
    # Users
    path('api/users', users_list, name='users_list'),
    path('api/users/<int:pk>', user_detail, name='user_detail'),
    # Doctors
    path('api/doctors', doctors_list, name='doctors_list'),
    path('api/doctors/<int:pk>', doctor_detail, name='doctor_detail'),
    # Patients
    path('api/patients', patients_list, name='patients_list'),
    path('api/patients/<int:pk>', patient_detail, name='patient_detail'),
    # Appointments
    path('api/appointments', appointments_list, name='appointments_list'),
    path('api/appointments/<int:pk>', appointment_detail, name='appointment_detail'),
    path('api/appointments/<int:pk>/cancel', appointment_cancel, name='appointment_cancel'),
]
