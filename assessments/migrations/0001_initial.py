import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('exams', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='CandidateSession',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('email', models.EmailField(max_length=254)),
                ('session_token', models.CharField(max_length=64, unique=True)),
                ('start_time', models.DateTimeField()),
                ('end_time', models.DateTimeField(blank=True, null=True)),
                ('score', models.DecimalField(blank=True, decimal_places=2, max_digits=8, null=True)),
                ('total_marks', models.PositiveIntegerField(default=0)),
                ('is_submitted', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('exam', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sessions', to='exams.exam')),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='AnswerResponse',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('selected_option', models.CharField(blank=True, max_length=1, null=True)),
                ('is_correct', models.BooleanField(default=False)),
                ('marks_obtained', models.DecimalField(decimal_places=2, default=0, max_digits=7)),
                ('answered_at', models.DateTimeField()),
                ('question', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='responses', to='exams.question')),
                ('session', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='responses', to='assessments.candidatesession')),
            ],
        ),
        migrations.AddIndex(
            model_name='candidatesession',
            index=models.Index(fields=['exam', 'email'], name='session_exam_email_idx'),
        ),
        migrations.AddIndex(
            model_name='candidatesession',
            index=models.Index(fields=['exam', 'is_submitted'], name='session_exam_submitted_idx'),
        ),
        migrations.AddConstraint(
            model_name='candidatesession',
            constraint=models.UniqueConstraint(condition=models.Q(('is_submitted', False)), fields=('exam', 'email'), name='unique_open_session_per_candidate'),
        ),
        migrations.AddConstraint(
            model_name='answerresponse',
            constraint=models.UniqueConstraint(fields=('session', 'question'), name='unique_response_per_question'),
        ),
    ]
