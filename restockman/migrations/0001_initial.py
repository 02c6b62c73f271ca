"""
Initial migration for Restockman models.
"""

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    """Create Restockman models: StockEvent, StockThreshold, RestockingAlert."""

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='StockEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('product_id', models.CharField(max_length=64, verbose_name='ID do Produto')),
                ('previous_stock', models.IntegerField(verbose_name='Estoque Anterior')),
                ('new_stock', models.IntegerField(verbose_name='Estoque Novo')),
                ('change_amount', models.IntegerField(help_text='Positivo = entrada, Negativo = saída', verbose_name='Variação')),
                ('event_type', models.CharField(choices=[('update', 'Atualização'), ('restock', 'Reposição'), ('sale', 'Venda'), ('adjustment', 'Ajuste')], db_index=True, default='update', max_length=20, verbose_name='Tipo')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Data/Hora')),
                ('notes', models.TextField(blank=True, default='', verbose_name='Observações')),
                ('actor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Evento de Estoque',
                'verbose_name_plural': 'Eventos de Estoque',
                'ordering': ['-timestamp', '-id'],
                'indexes': [models.Index(fields=['product_id', 'timestamp'], name='restockman_evt_product_ts')],
            },
        ),
        migrations.CreateModel(
            name='StockThreshold',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('product_id', models.CharField(max_length=64, unique=True, verbose_name='ID do Produto')),
                ('value', models.PositiveIntegerField(help_text='Alerta dispara quando estoque < este valor', verbose_name='Limite')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
            ],
            options={
                'verbose_name': 'Limite de Estoque',
                'verbose_name_plural': 'Limites de Estoque',
                'ordering': ['product_id'],
            },
        ),
        migrations.CreateModel(
            name='RestockingAlert',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('product_id', models.CharField(db_index=True, max_length=64, verbose_name='ID do Produto')),
                ('product_name', models.CharField(max_length=255, verbose_name='Produto')),
                ('current_stock', models.IntegerField(verbose_name='Estoque na criação')),
                ('threshold', models.PositiveIntegerField(help_text='Limite efetivo que disparou o alerta', verbose_name='Limite')),
                ('status', models.CharField(choices=[('active', 'Ativo'), ('resolved', 'Resolvido')], db_index=True, default='active', max_length=20, verbose_name='Status')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, verbose_name='Criado em')),
                ('resolved_at', models.DateTimeField(blank=True, null=True, verbose_name='Resolvido em')),
            ],
            options={
                'verbose_name': 'Alerta de Reposição',
                'verbose_name_plural': 'Alertas de Reposição',
                'ordering': ['-created_at', '-id'],
                'constraints': [models.UniqueConstraint(condition=models.Q(('status', 'active')), fields=('product_id',), name='restockman_one_active_alert')],
            },
        ),
    ]
