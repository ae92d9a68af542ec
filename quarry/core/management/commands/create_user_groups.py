from django.core.management.base import BaseCommand
from django.contrib.auth.models import Group

from quarry.core.roles import ROLE_GROUPS, MODULE_ROLES, DIRECTOR


class Command(BaseCommand):
    help = 'Create Django user groups for the quarry roles: Director, Manager, CrusherManager, Contractor, Sales'

    def handle(self, *args, **options):
        created_count = 0
        existing_count = 0

        for group_name, role in ROLE_GROUPS.items():
            group, created = Group.objects.get_or_create(name=group_name)

            if created:
                self.stdout.write(self.style.SUCCESS(f'✓ Created group: {group_name}'))
                created_count += 1
            else:
                self.stdout.write(f'  Group already exists: {group_name}')
                existing_count += 1

            if role == DIRECTOR:
                modules = sorted(MODULE_ROLES)
            else:
                modules = sorted(m for m, roles in MODULE_ROLES.items() if role in roles)
            self.stdout.write(f'  Modules: {", ".join(modules) or "none"}')

        self.stdout.write(self.style.SUCCESS(
            f'\nCompleted: {created_count} groups created, {existing_count} groups already existed'
        ))
