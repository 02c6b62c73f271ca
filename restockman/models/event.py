"""
StockEvent model — Immutable ledger of stock transitions.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from restockman.exceptions import ValidationError
from restockman.models.enums import StockEventType


class StockEvent(models.Model):
    """
    Immutable record of a stock transition for one product.

    Rules:
    - NEVER update() or delete()
    - change_amount is always new_stock - previous_stock
    - Corrections are new events, never edits

    The ledger records history; the catalog owns the current stock.
    Ordering is (timestamp, id): the auto-increment id is the write
    sequence that breaks ties between events sharing a timestamp.
    """

    product_id = models.CharField(
        max_length=64,
        verbose_name=_('ID do Produto'),
    )

    previous_stock = models.IntegerField(verbose_name=_('Estoque Anterior'))
    new_stock = models.IntegerField(verbose_name=_('Estoque Novo'))
    change_amount = models.IntegerField(
        verbose_name=_('Variação'),
        help_text=_('Positivo = entrada, Negativo = saída'),
    )

    event_type = models.CharField(
        max_length=20,
        choices=StockEventType.choices,
        default=StockEventType.UPDATE,
        db_index=True,
        verbose_name=_('Tipo'),
    )

    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Data/Hora'))
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Usuário'),
    )
    notes = models.TextField(blank=True, default='', verbose_name=_('Observações'))

    class Meta:
        verbose_name = _('Evento de Estoque')
        verbose_name_plural = _('Eventos de Estoque')
        ordering = ['-timestamp', '-id']
        indexes = [
            models.Index(fields=['product_id', 'timestamp'], name='restockman_evt_product_ts'),
        ]

    def save(self, *args, **kwargs):
        """Save event once; later saves are rejected."""
        if not self._state.adding:
            raise ValidationError(
                'IMMUTABLE_EVENT',
                "Eventos são imutáveis. Para corrigir, registre um novo evento.",
                event_id=self.pk,
            )

        expected = self.new_stock - self.previous_stock
        if self.change_amount is None:
            self.change_amount = expected
        elif self.change_amount != expected:
            raise ValidationError(
                'CHANGE_MISMATCH',
                change_amount=self.change_amount,
                expected=expected,
            )

        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """Prevent deletion — events are immutable."""
        raise ValidationError(
            'IMMUTABLE_EVENT',
            "Eventos são imutáveis. Para estornar, registre um novo evento.",
            event_id=self.pk,
        )

    def __str__(self) -> str:
        signal = '+' if self.change_amount and self.change_amount > 0 else ''
        return f"{self.product_id}: {signal}{self.change_amount} | {self.get_event_type_display()}"
