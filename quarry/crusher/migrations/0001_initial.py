# Generated manually
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='CrusherProduction',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(default=django.utils.timezone.localdate)),
                ('shift', models.CharField(choices=[('morning', 'Morning'), ('night', 'Night')], default='morning', max_length=10)),
                ('crusher_type', models.CharField(choices=[('jaw', 'Jaw Crusher'), ('vsi', 'VSI')], default='jaw', max_length=10)),
                ('machine_working_hours', models.DecimalField(decimal_places=2, default=0, max_digits=5)),
                ('machine_downtime', models.DecimalField(decimal_places=2, default=0, max_digits=5)),
                ('maintenance_hours', models.DecimalField(decimal_places=2, default=0, max_digits=5)),
                ('material_source', models.CharField(choices=[('quarry', 'Quarry'), ('stockyard', 'Stockyard')], default='quarry', max_length=20)),
                ('material_input', models.DecimalField(decimal_places=2, default=0, help_text='Tons fed', max_digits=12)),
                ('total_output', models.DecimalField(decimal_places=2, default=0, help_text='Tons produced', max_digits=12)),
                ('status', models.CharField(choices=[('completed', 'Completed'), ('in_progress', 'In Progress'), ('maintenance', 'Maintenance'), ('breakdown', 'Breakdown')], default='completed', max_length=20)),
                ('maintenance_notes', models.TextField(blank=True)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='crusher_productions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'crusher_production',
                'ordering': ['-date', '-created_at'],
                'indexes': [
                    models.Index(fields=['date'], name='idx_crusher_date'),
                ],
            },
        ),
        migrations.CreateModel(
            name='EBReport',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('report_date', models.DateField(default=django.utils.timezone.localdate)),
                ('starting_reading', models.JSONField(default=dict)),
                ('ending_reading', models.JSONField(default=dict)),
                ('units_consumed', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('cost_per_unit', models.DecimalField(decimal_places=2, default=0, max_digits=8)),
                ('total_cost', models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='eb_reports', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'eb_reports',
                'ordering': ['-report_date', '-created_at'],
            },
        ),
    ]
