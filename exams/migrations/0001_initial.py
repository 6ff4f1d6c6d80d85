import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Exam',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('exam_code', models.CharField(max_length=50, unique=True)),
                ('description', models.TextField(blank=True)),
                ('duration_minutes', models.PositiveIntegerField(default=30, validators=[django.core.validators.MinValueValidator(1)])),
                ('marks_per_question', models.PositiveIntegerField(default=1)),
                ('negative_marking', models.DecimalField(decimal_places=2, default=0, help_text='Flat deduction per wrong answer. 0 disables negative marking.', max_digits=5, validators=[django.core.validators.MinValueValidator(0)])),
                ('result_mode', models.CharField(choices=[('private', 'Candidate only'), ('public', 'Public'), ('after_publish', 'After publishing'), ('admin_only', 'Administrator only')], default='admin_only', max_length=20)),
                ('allow_back_navigation', models.BooleanField(default=True)),
                ('shuffle_questions', models.BooleanField(default=False)),
                ('prevent_duplicate_attempts', models.BooleanField(default=True)),
                ('is_active', models.BooleanField(default=True)),
                ('results_published', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Question',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('question_text', models.TextField()),
                ('option_a', models.TextField()),
                ('option_b', models.TextField()),
                ('option_c', models.TextField()),
                ('option_d', models.TextField()),
                ('correct_option', models.CharField(choices=[('A', 'Option A'), ('B', 'Option B'), ('C', 'Option C'), ('D', 'Option D')], max_length=1)),
                ('marks', models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ('question_order', models.PositiveIntegerField(blank=True, null=True)),
                ('exam', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='questions', to='exams.exam')),
            ],
            options={
                'ordering': ['question_order', 'id'],
            },
        ),
        migrations.AddConstraint(
            model_name='exam',
            constraint=models.CheckConstraint(condition=models.Q(('negative_marking__gte', 0)), name='exam_negative_marking_non_negative'),
        ),
        migrations.AddIndex(
            model_name='question',
            index=models.Index(fields=['exam', 'question_order'], name='question_exam_order_idx'),
        ),
        migrations.AddConstraint(
            model_name='question',
            constraint=models.CheckConstraint(condition=models.Q(('correct_option__in', ['A', 'B', 'C', 'D'])), name='question_correct_option_valid'),
        ),
    ]
