"""
Restockman Admin.

Provides views for production debugging:
- StockEvent: read-only audit trail (timestamp, product, transition)
- StockThreshold: editable per-product thresholds
- RestockingAlert: read-only with "resolve" action
"""

import logging

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from restockman.exceptions import RestockError
from restockman.models import AlertStatus, RestockingAlert, StockEvent, StockThreshold

logger = logging.getLogger(__name__)


# =========================================================================
# STOCK EVENT ADMIN (read-only audit trail)
# =========================================================================

@admin.register(StockEvent)
class StockEventAdmin(admin.ModelAdmin):
    """StockEvent admin — read-only. Immutable audit trail."""

    list_display = ['timestamp', 'product_id', 'event_type', 'previous_stock',
                    'new_stock', 'change_amount', 'actor']
    list_filter = ['event_type', 'timestamp']
    search_fields = ['product_id', 'notes']
    readonly_fields = ['product_id', 'previous_stock', 'new_stock', 'change_amount',
                       'event_type', 'timestamp', 'actor', 'notes']
    date_hierarchy = 'timestamp'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =========================================================================
# THRESHOLD ADMIN
# =========================================================================

@admin.register(StockThreshold)
class StockThresholdAdmin(admin.ModelAdmin):
    """StockThreshold admin — per-product low-stock limits."""

    list_display = ['product_id', 'value', 'updated_at']
    search_fields = ['product_id']
    readonly_fields = ['created_at', 'updated_at']


# =========================================================================
# RESTOCKING ALERT ADMIN (read-only with resolve action)
# =========================================================================

@admin.register(RestockingAlert)
class RestockingAlertAdmin(admin.ModelAdmin):
    """RestockingAlert admin — read-only with resolve action."""

    list_display = ['id', 'product_name', 'current_stock', 'threshold',
                    'status', 'created_at', 'resolved_at']
    list_filter = ['status', 'created_at']
    search_fields = ['product_id', 'product_name']
    readonly_fields = ['product_id', 'product_name', 'current_stock', 'threshold',
                       'status', 'created_at', 'resolved_at']
    actions = ['resolve_alerts']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.action(description=_('Resolver alertas selecionados'))
    def resolve_alerts(self, request, queryset):
        from restockman.services.alerts import AlertEngine

        count = 0
        for alert in queryset.filter(status=AlertStatus.ACTIVE):
            try:
                AlertEngine.resolve(alert.pk)
                count += 1
            except RestockError as exc:
                logger.warning("resolve_alerts: failed to resolve %s: %s", alert.pk, exc)

        self.message_user(request, _('{count} alerta(s) resolvido(s).').format(count=count))
