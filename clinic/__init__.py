"""Clinic application for the medsync backend.

This package contains the models, the Redis-backed cache layer, the CRUD
services and the API views for users, doctors, patients and appointments.
"""
