"""
Composition of services with their storage.

Views and jobs obtain their collaborators here instead of building them
inline, so the storage behind a service is chosen in one place.
"""
from clinic.cache import CacheService, get_cache_service
from clinic.models import Appointment, Doctor, Patient, User
from clinic.repositories import ModelRepository

from .appointments import AppointmentService
from .doctors import DoctorService
from .patients import PatientService
from .users import UserService


def cache_service() -> CacheService:
    return get_cache_service()


def user_repository() -> ModelRepository:
    return ModelRepository(User)


def user_service() -> UserService:
    return UserService(user_repository(), cache_service())


def doctor_service() -> DoctorService:
    return DoctorService(ModelRepository(Doctor), cache_service())


def patient_service() -> PatientService:
    return PatientService(ModelRepository(Patient), cache_service())


def appointment_service() -> AppointmentService:
    return AppointmentService(ModelRepository(Appointment, select_related=('doctor', 'patient')))
