"""
URL configuration for the SymptomCare project.
"""
from django.contrib import admin
from django.urls import path, include
from rest_framework.response import Response
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny

@api_view(['GET'])
@permission_classes([AllowAny])
def api_root(request):
    """API root endpoint with available endpoints"""
    return Response({
        'message': 'SymptomCare API v1.0',
        'status': 'running',
        'endpoints': {
            'authentication': {
                'register': '/api/auth/register/',
                'login': '/api/auth/login/',
                'refresh': '/api/auth/refresh/',
                'profile': '/api/auth/profile/',
            },
            'analysis': {
                'analyze': '/api/analyze',
                'diagnose': '/api/diagnose/',
                'improve_description': '/api/improve-description/',
                'suggestions': '/api/symptoms/suggestions/',
            },
            'reports': {
                'list_create': '/api/reports/',
                'detail': '/api/reports/{id}/',
                'download_pdf': '/api/reports/{id}/pdf/',
            }
        }
    })

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', api_root, name='api_root'),
    path('', include('symptom_app.urls')),
]
