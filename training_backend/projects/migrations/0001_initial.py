# Generated manually on 2026-10-05

import uuid

import django.db.models.deletion
import django.utils.timezone
import django_fsm
import model_utils.fields
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('organizations', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Instructor',
            fields=[
                ('created', model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name='created')),
                ('modified', model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name='modified')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('first_name', models.CharField(max_length=150, verbose_name='first name')),
                ('last_name', models.CharField(blank=True, max_length=150, verbose_name='last name')),
                ('email', models.EmailField(blank=True, max_length=254, verbose_name='email address')),
                ('instructor_type', models.CharField(choices=[('main', 'Main'), ('assistant', 'Assistant'), ('guest', 'Guest')], default='main', max_length=20, verbose_name='instructor type')),
                ('sub_organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='instructors', to='organizations.suborganization', verbose_name='sub-organization')),
            ],
            options={
                'verbose_name': 'instructor',
                'verbose_name_plural': 'instructors',
                'ordering': ['last_name', 'first_name'],
            },
        ),
        migrations.CreateModel(
            name='Participant',
            fields=[
                ('created', model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name='created')),
                ('modified', model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name='modified')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('first_name', models.CharField(max_length=150, verbose_name='first name')),
                ('last_name', models.CharField(blank=True, max_length=150, verbose_name='last name')),
                ('email', models.EmailField(blank=True, max_length=254, verbose_name='email address')),
                ('company', models.CharField(blank=True, max_length=255, verbose_name='company')),
                ('sub_organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='participants', to='organizations.suborganization', verbose_name='sub-organization')),
            ],
            options={
                'verbose_name': 'participant',
                'verbose_name_plural': 'participants',
                'ordering': ['last_name', 'first_name'],
            },
        ),
        migrations.CreateModel(
            name='Project',
            fields=[
                ('created', model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name='created')),
                ('modified', model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name='modified')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=255, verbose_name='title')),
                ('summary', models.TextField(blank=True, verbose_name='summary')),
                ('project_type', models.CharField(blank=True, help_text='e.g. Workshop series, Technical training', max_length=100, verbose_name='type')),
                ('project_category', models.CharField(blank=True, max_length=100, verbose_name='category')),
                ('status', django_fsm.FSMField(choices=[('pending', 'Pending'), ('ongoing', 'Ongoing'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], default='pending', max_length=50, protected=True, verbose_name='status')),
                ('color', models.CharField(blank=True, help_text='Bar color as #RRGGBB, status color when empty', max_length=7, verbose_name='color')),
                ('start_date', models.DateField(blank=True, null=True, verbose_name='start date')),
                ('end_date', models.DateField(blank=True, null=True, verbose_name='end date')),
                ('duration', models.PositiveIntegerField(blank=True, help_text='Duration in weeks', null=True, verbose_name='duration')),
                ('tags', models.JSONField(blank=True, default=list, verbose_name='tags')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_projects', to=settings.AUTH_USER_MODEL, verbose_name='created by')),
                ('instructors', models.ManyToManyField(blank=True, related_name='projects', to='projects.instructor', verbose_name='instructors')),
                ('participants', models.ManyToManyField(blank=True, related_name='projects', to='projects.participant', verbose_name='participants')),
                ('sub_organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='projects', to='organizations.suborganization', verbose_name='sub-organization')),
            ],
            options={
                'verbose_name': 'project',
                'verbose_name_plural': 'projects',
                'ordering': ['-created'],
            },
        ),
        migrations.CreateModel(
            name='Event',
            fields=[
                ('created', model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name='created')),
                ('modified', model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name='modified')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=255, verbose_name='title')),
                ('description', models.TextField(blank=True, verbose_name='description')),
                ('event_type', models.CharField(choices=[('class', 'Class'), ('workshop', 'Workshop'), ('meeting', 'Meeting'), ('other', 'Other')], default='class', max_length=20, verbose_name='event type')),
                ('status', models.CharField(choices=[('scheduled', 'Scheduled'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], default='scheduled', max_length=20, verbose_name='status')),
                ('start', models.DateTimeField(verbose_name='start')),
                ('end', models.DateTimeField(verbose_name='end')),
                ('all_day', models.BooleanField(default=False, verbose_name='all day')),
                ('location', models.CharField(blank=True, max_length=255, verbose_name='location')),
                ('timezone', models.CharField(default='UTC', max_length=64, verbose_name='timezone')),
                ('color', models.CharField(blank=True, max_length=7, verbose_name='color')),
                ('attendees', models.ManyToManyField(blank=True, related_name='events', to='projects.participant', verbose_name='attendees')),
                ('instructors', models.ManyToManyField(blank=True, related_name='events', to='projects.instructor', verbose_name='instructors')),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='events', to='projects.project', verbose_name='project')),
            ],
            options={
                'verbose_name': 'event',
                'verbose_name_plural': 'events',
                'ordering': ['start'],
                'constraints': [models.CheckConstraint(condition=models.Q(('end__gt', models.F('start'))), name='event_end_after_start')],
            },
        ),
    ]
