"""
Management command to reconcile restocking alerts.

Usage:
    python manage.py reconcile_restocking_alerts
    python manage.py reconcile_restocking_alerts --threshold 10
    python manage.py reconcile_restocking_alerts --dry-run
"""

from django.core.management.base import BaseCommand

from restockman.services.alerts import AlertEngine


class Command(BaseCommand):
    """Reconcile restocking alerts command."""

    help = 'Cria alertas de reposição para produtos abaixo do limite'

    def add_arguments(self, parser):
        parser.add_argument(
            '--threshold',
            type=int,
            default=None,
            help='Limite global para produtos sem limite próprio'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Mostra os produtos abaixo do limite sem criar alertas'
        )

    def handle(self, *args, **options):
        threshold = options['threshold']

        if options['dry_run']:
            shortages = AlertEngine.below_threshold(global_default=threshold)
            for product, limit in shortages:
                self.stdout.write(f'{product.name}: {product.stock} < {limit}')
            self.stdout.write(f'{len(shortages)} produto(s) abaixo do limite')
            return

        result = AlertEngine.reconcile(global_default=threshold)
        self.stdout.write(
            self.style.SUCCESS(
                f'{len(result.created)} alerta(s) criado(s), '
                f'{len(result.alerts)} ativo(s)'
            )
        )
        for product_id, error in result.failed:
            self.stderr.write(f'Falha no produto {product_id}: {error}')
