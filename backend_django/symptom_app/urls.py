from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView
from . import views

app_name = 'symptom_app'

urlpatterns = [
    # Server-rendered checker page
    path('', views.CheckerPageView.as_view(), name='checker'),

    # Authentication endpoints
    path('api/auth/register/', views.RegisterView.as_view(), name='register'),
    path('api/auth/login/', views.LoginView.as_view(), name='login'),
    path('api/auth/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('api/auth/profile/', views.ProfileView.as_view(), name='profile'),

    # Analysis endpoints
    path('api/analyze', views.AnalyzeView.as_view(), name='analyze'),
    path('api/diagnose/', views.DiagnoseView.as_view(), name='diagnose'),
    path('api/improve-description/', views.ImproveDescriptionView.as_view(), name='improve_description'),
    path('api/symptoms/suggestions/', views.symptom_suggestions, name='symptom_suggestions'),

    # Report history
    path('api/reports/', views.ReportListCreateView.as_view(), name='reports'),
    path('api/reports/<uuid:report_id>/', views.ReportDetailView.as_view(), name='report_detail'),
    path('api/reports/<uuid:report_id>/pdf/', views.download_report_pdf, name='report_pdf'),
]
