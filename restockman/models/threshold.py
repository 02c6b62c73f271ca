"""
StockThreshold model — per-product override of the global low-stock threshold.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class StockThreshold(models.Model):
    """
    Low-stock threshold for a single product.

    No row means "use the global default" (RESTOCKMAN['DEFAULT_THRESHOLD']).
    product_id is unique: concurrent upserts collapse onto one row.
    """

    product_id = models.CharField(
        max_length=64,
        unique=True,
        verbose_name=_('ID do Produto'),
    )
    value = models.PositiveIntegerField(
        verbose_name=_('Limite'),
        help_text=_('Alerta dispara quando estoque < este valor'),
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_('Criado em'))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_('Atualizado em'))

    class Meta:
        verbose_name = _('Limite de Estoque')
        verbose_name_plural = _('Limites de Estoque')
        ordering = ['product_id']

    def __str__(self) -> str:
        return f"{self.product_id} < {self.value}"
