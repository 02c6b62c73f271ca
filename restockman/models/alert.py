"""
RestockingAlert model — low-stock alert per product.

Usage:
    # Reconcile alerts against current catalog stock
    from restockman.services.alerts import AlertEngine
    result = AlertEngine.reconcile()

    # Query active alerts
    RestockingAlert.objects.active()
"""

from django.db import models
from django.utils.translation import gettext_lazy as _
from django.utils import timezone

from restockman.models.enums import AlertStatus


class AlertQuerySet(models.QuerySet):
    """QuerySet with lifecycle filters."""

    def active(self):
        return self.filter(status=AlertStatus.ACTIVE)

    def resolved(self):
        return self.filter(status=AlertStatus.RESOLVED)

    def for_product(self, product_id):
        return self.filter(product_id=str(product_id))


class RestockingAlert(models.Model):
    """
    Alert raised when a product's stock drops below its effective threshold.

    LIFECYCLE:

        none ──reconcile()──► ACTIVE ──resolve()──► RESOLVED

    Resolution is terminal for the alert instance; a later shortage
    creates a brand-new alert. Name, stock and threshold are snapshots
    taken at creation and never refreshed.

    The conditional unique constraint allows at most one ACTIVE alert
    per product, regardless of how many reconciliation passes race.
    """

    product_id = models.CharField(
        max_length=64,
        db_index=True,
        verbose_name=_('ID do Produto'),
    )
    product_name = models.CharField(max_length=255, verbose_name=_('Produto'))
    current_stock = models.IntegerField(verbose_name=_('Estoque na criação'))
    threshold = models.PositiveIntegerField(
        verbose_name=_('Limite'),
        help_text=_('Limite efetivo que disparou o alerta'),
    )

    status = models.CharField(
        max_length=20,
        choices=AlertStatus.choices,
        default=AlertStatus.ACTIVE,
        db_index=True,
        verbose_name=_('Status'),
    )
    created_at = models.DateTimeField(default=timezone.now, verbose_name=_('Criado em'))
    resolved_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_('Resolvido em'),
    )

    objects = AlertQuerySet.as_manager()

    class Meta:
        verbose_name = _('Alerta de Reposição')
        verbose_name_plural = _('Alertas de Reposição')
        ordering = ['-created_at', '-id']
        constraints = [
            models.UniqueConstraint(
                fields=['product_id'],
                condition=models.Q(status='active'),
                name='restockman_one_active_alert',
            ),
        ]

    @property
    def is_active(self) -> bool:
        return self.status == AlertStatus.ACTIVE

    def __str__(self) -> str:
        return f"Alert: {self.product_name} ({self.current_stock} < {self.threshold}) [{self.status}]"
