from django.core.management.base import BaseCommand
from django.utils import timezone

from clinic.cache import cache_repository, CacheService
from clinic.services.registry import doctor_service, patient_service, user_service


class Command(BaseCommand):
    help = "Warm the entity caches (users, doctors, patients) from the database."

    def handle(self, *args, **options):
        now = timezone.now()
        keys_refreshed = []

        with cache_repository():
            for build in (user_service, doctor_service, patient_service):
                service = build()
                items, _ = service.repository.find()
                data = [service.serialize(i) for i in items]
                service.cache.save_collection(service.collection_prefix, data)
                keys_refreshed.append(CacheService.key(service.collection_prefix))
                for item in data:
                    service.cache.save_entity(service.entity_prefix, item)
                    keys_refreshed.append(CacheService.key(service.entity_prefix, item['id']))

        self.stdout.write(self.style.SUCCESS(f"Refreshed {len(keys_refreshed)} keys at {now}"))
