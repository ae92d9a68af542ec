from django.core.management import call_command
from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model

from quarry.core.serializers import assign_role
from quarry.core.roles import GROUP_FOR_ROLE

User = get_user_model()

DEMO_ACCOUNTS = [
    ('director', 'director@quarry.local', 'Demo Director'),
    ('manager', 'manager@quarry.local', 'Demo Manager'),
    ('crusher_manager', 'crusher@quarry.local', 'Demo Crusher Manager'),
    ('contractor', 'contractor@quarry.local', 'Demo Contractor'),
    ('sales', 'sales@quarry.local', 'Demo Sales'),
]


class Command(BaseCommand):
    help = 'Create one demo login per role (username = role name)'

    def add_arguments(self, parser):
        parser.add_argument('--password', default='demo12345',
                            help='Password for every demo account (default: demo12345)')
        parser.add_argument('--reset-password', action='store_true',
                            help='Reset the password of accounts that already exist')

    def handle(self, *args, **options):
        call_command('create_user_groups', stdout=self.stdout)
        password = options['password']

        for role, email, full_name in DEMO_ACCOUNTS:
            user, created = User.objects.get_or_create(
                username=role,
                defaults={'email': email, 'full_name': full_name, 'is_active': True},
            )
            if created or options['reset_password']:
                user.set_password(password)
                user.save()
            assign_role(user, role)

            if created:
                self.stdout.write(self.style.SUCCESS(f'✓ Created {GROUP_FOR_ROLE[role]} account: {role}'))
            else:
                self.stdout.write(f'  Account already exists: {role}')

        self.stdout.write(self.style.SUCCESS('\nDemo accounts ready'))
