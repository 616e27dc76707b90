import uuid
from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    """Custom User model for SymptomCare"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    first_name = models.CharField(max_length=30, blank=True)
    last_name = models.CharField(max_length=30, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    def __str__(self):
        full_name = f"{self.first_name} {self.last_name}".strip()
        return f"{full_name} ({self.email})" if full_name else self.email


class SymptomReport(models.Model):
    """A saved analysis: the user's input paired with the model's diagnosis output.

    Rows are append-only from the application's point of view.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='symptom_reports')

    symptom_description = models.TextField()
    scan_findings_description = models.TextField(null=True, blank=True)
    # base64 data URI, at most SC_REPORT_FILE_MAX_BYTES once decoded
    report_file_data_uri = models.TextField(null=True, blank=True)

    analysis_result = models.JSONField(default=dict)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'symptom_reports'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', '-created_at'], name='symptom_rep_user_created_idx'),
        ]

    def __str__(self):
        return f"Report {self.id} - {self.user.email}"

    @property
    def primary_diagnosis(self):
        diagnoses = (self.analysis_result or {}).get('potentialDiagnoses') or []
        return diagnoses[0] if diagnoses else 'N/A'

    @property
    def has_report_file(self):
        return bool(self.report_file_data_uri)
