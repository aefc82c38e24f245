from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from medorders.models import Medicine

DEFAULT_MEDICINES = [
    # name, price, stock, unit
    ('Paracetamol 500mg', Decimal('2.50'), Decimal('500'), 'tablet'),
    ('Amoxicillin 500mg', Decimal('8.00'), Decimal('200'), 'capsule'),
    ('Ibuprofen 400mg', Decimal('3.75'), Decimal('300'), 'tablet'),
    ('Cetirizine 10mg', Decimal('1.20'), Decimal('400'), 'tablet'),
    ('Omeprazole 20mg', Decimal('5.40'), Decimal('150'), 'capsule'),
    ('Salbutamol Inhaler 100mcg', Decimal('12.00'), Decimal('50'), 'inhaler'),
    ('Metformin 500mg', Decimal('4.10'), Decimal('250'), 'tablet'),
    ('Oral Rehydration Salts', Decimal('0.90'), Decimal('600'), 'sachet'),
]


class Command(BaseCommand):
    help = '写入一份本地开发用的药品目录。按名称去重，重复执行不会产生重复数据。'

    def add_arguments(self, parser):
        parser.add_argument(
            '--restore',
            action='store_true',
            help='Clear deleted_at on seeded medicines that were soft-deleted.',
        )

    def handle(self, *args, **options):
        created = 0
        restored = 0

        with transaction.atomic():
            for name, price, stock, unit in DEFAULT_MEDICINES:
                medicine = Medicine.all_objects.filter(name=name).first()
                if medicine is None:
                    Medicine.all_objects.create(name=name, price=price, stock=stock, unit=unit)
                    created += 1
                elif options['restore'] and medicine.deleted_at is not None:
                    medicine.deleted_at = None
                    medicine.save(update_fields=['deleted_at', 'updated_at'])
                    restored += 1

        self.stdout.write(self.style.SUCCESS(
            f'Seeded medicines: {created} created, {restored} restored, '
            f'{len(DEFAULT_MEDICINES) - created - restored} unchanged.'
        ))
