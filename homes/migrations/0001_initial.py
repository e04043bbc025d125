from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Room',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, unique=True)),
                ('temperature', models.FloatField(default=21.0)),
                ('lights_on', models.IntegerField(default=0)),
                ('lights_total', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'rooms',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='Scene',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True)),
                ('icon_name', models.CharField(default='Sparkles', max_length=50)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                'db_table': 'scenes',
                'ordering': ['created_at', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Automation',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True)),
                ('trigger', models.CharField(max_length=255)),
                ('action', models.CharField(max_length=255)),
                ('icon_name', models.CharField(default='Zap', max_length=50)),
                ('active', models.BooleanField(default=True)),
                ('status', models.CharField(default='Active', max_length=10)),
                ('last_run', models.CharField(default='Never', max_length=100)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                'db_table': 'automations',
                'ordering': ['created_at', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Device',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255)),
                ('category', models.CharField(choices=[('light', 'Light'), ('lock', 'Lock'), ('camera', 'Camera'), ('ac', 'AC'), ('security', 'Security'), ('other', 'Other')], default='other', max_length=20)),
                ('icon_name', models.CharField(blank=True, max_length=50)),
                ('active', models.BooleanField(default=False)),
                ('status', models.CharField(default='Off', max_length=50)),
                ('status_variant', models.CharField(choices=[('default', 'Default'), ('secondary', 'Secondary'), ('destructive', 'Destructive')], default='secondary', max_length=20)),
                ('last_changed', models.DateTimeField(default=django.utils.timezone.now)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('room', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='devices', to='homes.room')),
            ],
            options={
                'db_table': 'devices',
                'ordering': ['created_at', 'name'],
                'indexes': [models.Index(fields=['room', 'category'], name='devices_room_category_idx')],
            },
        ),
    ]
