# Generated manually
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Permit',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('company_name', models.CharField(max_length=200)),
                ('permit_type', models.CharField(choices=[('quarry', 'Quarry'), ('crusher', 'Crusher')], max_length=10)),
                ('approval_date', models.DateField()),
                ('expiry_date', models.DateField()),
                ('status', models.CharField(choices=[('active', 'Active'), ('expired', 'Expired'), ('pending_renewal', 'Pending Renewal')], default='active', max_length=20)),
                ('description', models.TextField(blank=True)),
                ('document_url', models.URLField(blank=True, max_length=500)),
                ('quantity_in_mt', models.DecimalField(blank=True, decimal_places=2, help_text='Permitted quantity in metric tons', max_digits=14, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='permits', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'permits',
                'ordering': ['expiry_date'],
            },
        ),
    ]
