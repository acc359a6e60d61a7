"""
Management command to prepare a fresh workspace.

The command will:
1. Create the default project if the data migration has not (or it was deleted)
2. Create an initial admin member, or reuse an existing one with --use-existing

Usage:
    # Defaults: admin@localhost / admin
    python manage.py seed_workspace

    # Specific admin
    python manage.py seed_workspace --email jane@co.com --name "Jane Doe" --password s3cret
"""

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from tasks.models import Project

User = get_user_model()


class Command(BaseCommand):
    help = 'Create the default project and an initial admin member'

    def add_arguments(self, parser):
        parser.add_argument(
            '--email',
            type=str,
            help='Email for the admin (default: admin@localhost)',
        )
        parser.add_argument(
            '--name',
            type=str,
            help='Display name for the admin (default: Admin)',
        )
        parser.add_argument(
            '--password',
            type=str,
            help='Password for the admin (default: admin)',
        )
        parser.add_argument(
            '--use-existing',
            action='store_true',
            help='Use existing user if found instead of raising error',
        )

    def handle(self, *args, **options):
        email = options.get('email') or 'admin@localhost'
        name = options.get('name') or 'Admin'
        password = options.get('password') or 'admin'

        self.stdout.write(self.style.HTTP_INFO('Step 1: Default Project'))
        self.stdout.write('-' * 60)

        project, created = Project.objects.get_or_create(
            name=settings.DEFAULT_PROJECT_NAME,
            defaults={'description': 'General office tasks', 'icon': 'briefcase'},
        )
        if created:
            self.stdout.write(self.style.SUCCESS(f'✓ Created project: {project.name}'))
        else:
            self.stdout.write(self.style.SUCCESS(f'✓ Using existing project: {project.name}'))

        self.stdout.write('')
        self.stdout.write(self.style.HTTP_INFO('Step 2: Admin Setup'))
        self.stdout.write('-' * 60)

        user, created = self._get_or_create_admin(
            email, name, password, options.get('use_existing', False)
        )
        if created:
            self.stdout.write(self.style.SUCCESS(f'✓ Created admin: {user.email}'))
        else:
            self.stdout.write(self.style.SUCCESS(f'✓ Using existing user: {user.email}'))

        self._display_summary(user, project)

    def _get_or_create_admin(self, email, name, password, use_existing):
        """Get or create the admin member."""
        user = User.objects.by_email(email).first()
        if user is not None:
            if not use_existing:
                raise CommandError(
                    f'User "{email}" already exists. Use --use-existing to use this user, '
                    f'or choose a different email.'
                )
            return user, False

        try:
            user = User.objects.create_superuser(email=email, password=password, name=name)
        except Exception as e:
            raise CommandError(f'Error creating user: {e}') from e
        return user, True

    def _display_summary(self, user, project):
        self.stdout.write('')
        self.stdout.write('=' * 60)
        self.stdout.write(self.style.SUCCESS('✓ WORKSPACE READY'))
        self.stdout.write('=' * 60)
        self.stdout.write('')

        self.stdout.write(self.style.HTTP_INFO('Admin:'))
        self.stdout.write(f'  Name: {user.name}')
        self.stdout.write(f'  Email: {user.email}')
        self.stdout.write(f'  Role: {user.get_role_display()}')
        self.stdout.write('')

        self.stdout.write(self.style.HTTP_INFO('Default Project:'))
        self.stdout.write(f'  Name: {project.name}')
        self.stdout.write(f'  Admin link: /admin/tasks/project/{project.id}/change/')
        self.stdout.write('')
