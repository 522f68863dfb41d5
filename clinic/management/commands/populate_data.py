"""
Management command to populate the database with demo data.
"""
from datetime import timedelta

from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand
from django.utils import timezone

from clinic.models import Appointment, Doctor, Patient, User


class Command(BaseCommand):
    help = 'Populate database with demo users, doctors, patients and appointments'

    def handle(self, *args, **options):
        self.stdout.write('Creating demo data...')

        self.create_users()
        doctors = self.create_doctors()
        patients = self.create_patients()
        self.create_appointments(doctors, patients)

        self.stdout.write(self.style.SUCCESS('Demo data created.'))

    def create_users(self):
        users = []
        for username in ('admin1', 'frontdesk1', 'frontdesk2'):
            user, created = User.objects.get_or_create(
                username=username,
                defaults={
                    'email': f'{username}@clinic.example',
                    'password': make_password('Clinic#2024'),
                    'first_name': username.rstrip('0123456789').capitalize(),
                    'is_staff': username.startswith('admin'),
                },
            )
            users.append(user)
            self.stdout.write(f'user: {user.username}')
        return users

    def create_doctors(self):
        doctors = []
        doctor_data = [
            ('Gregory', 'House', 'Diagnostics'),
            ('Meredith', 'Grey', 'General Surgery'),
            ('John', 'Carter', 'Emergency Medicine'),
            ('Lisa', 'Cuddy', 'Endocrinology'),
        ]
        for first, last, specialty in doctor_data:
            doctor, created = Doctor.objects.get_or_create(
                email=f'{first}.{last}@clinic.example'.lower(),
                defaults={'first_name': first, 'last_name': last, 'specialty': specialty},
            )
            doctors.append(doctor)
            self.stdout.write(f'doctor: {doctor}')
        return doctors

    def create_patients(self):
        patients = []
        patient_data = [
            ('Ana', 'Lopez', '1985-04-12'),
            ('Ben', 'Okafor', '1992-11-03'),
            ('Chen', 'Wei', '1978-01-27'),
            ('Dana', 'Kowalski', '2001-07-19'),
            ('Eli', 'Novak', '1969-09-30'),
        ]
        for first, last, birth_date in patient_data:
            patient, created = Patient.objects.get_or_create(
                email=f'{first}.{last}@mail.example'.lower(),
                defaults={'first_name': first, 'last_name': last, 'birth_date': birth_date},
            )
            patients.append(patient)
            self.stdout.write(f'patient: {patient}')
        return patients

    def create_appointments(self, doctors, patients):
        now = timezone.now().replace(minute=0, second=0, microsecond=0)
        statuses = [c for c, _ in Appointment.STATUS_CHOICES]
        for i, patient in enumerate(patients):
            doctor = doctors[i % len(doctors)]
            Appointment.objects.get_or_create(
                doctor=doctor,
                patient=patient,
                scheduled_at=now + timedelta(days=i + 1, hours=i),
                defaults={'status': statuses[i % len(statuses)], 'reason': 'Follow-up visit'},
            )
        self.stdout.write(f'appointments: {Appointment.objects.count()}')
