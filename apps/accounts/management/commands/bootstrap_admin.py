"""
manage.py bootstrap_admin

Create the administrator role and, on an empty installation, the default
administrator account (``INVENTORY_DEFAULT_ADMIN_EMAIL`` /
``INVENTORY_DEFAULT_ADMIN_PASSWORD`` unless overridden).
"""
from django.core.management.base import BaseCommand, CommandError

from apps.accounts.roles import system_administrator_role
from apps.accounts.services.bootstrap import BootstrapError, run_first_setup
from apps.accounts.services.identity import identity_provider


class Command(BaseCommand):
    help = "Ensure the administrator role exists and create the first administrator on an empty database."

    def add_arguments(self, parser):
        parser.add_argument("--email", help="E-mail of the default administrator.")
        parser.add_argument("--password", help="Password of the default administrator.")

    def handle(self, *args, **options):
        try:
            outcome = run_first_setup(email=options.get("email"), password=options.get("password"))
        except BootstrapError as exc:
            raise CommandError(str(exc)) from exc

        if not outcome.performed:
            identity_provider.ensure_role(system_administrator_role())
            self.stdout.write("Users already exist; first setup skipped.")
            return
        self.stdout.write(self.style.SUCCESS(f"Administrator {outcome.admin_email} is ready."))
