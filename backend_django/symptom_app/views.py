import logging
from collections.abc import Mapping

from django.db import IntegrityError
from django.http import Http404, HttpResponse
from django.shortcuts import render
from django.views import View
from rest_framework import status, generics, permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ParseError
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from . import actions
from .adapters.reports.pdf_report import build_report_pdf
from .config.container import get_symptom_list_use_case
from .domain.errors import (
    ConfigurationError,
    InputValidationError,
    ResponseParseError,
    ResponseSchemaError,
    summarize_errors,
)
from .domain.symptoms import COMMON_SYMPTOMS, split_symptom_text, suggest_symptoms, unique_symptoms
from .models import User
from .presentation import diagnosis_rows, results_context
from .serializers import (
    UserRegistrationSerializer, UserLoginSerializer, UserProfileSerializer,
    AnalyzeRequestSerializer, DiagnoseRequestSerializer,
    ImproveDescriptionRequestSerializer, SaveReportRequestSerializer,
)

logger = logging.getLogger(__name__)

NO_SYMPTOMS = "Please provide at least one symptom"
API_KEY_MISSING = "API key not configured"
PARSE_FAILED = "Failed to parse AI response"
ANALYSIS_FAILED = "Failed to analyze symptoms. Please try again."


def analysis_error_message(exc):
    """User-facing message for a failed analysis, by error kind."""
    if isinstance(exc, InputValidationError):
        return exc.message
    if isinstance(exc, ConfigurationError):
        return API_KEY_MISSING
    if isinstance(exc, (ResponseParseError, ResponseSchemaError)):
        return PARSE_FAILED
    return ANALYSIS_FAILED


def _request_payload(request):
    # A body that is not a JSON object is treated as empty
    try:
        data = request.data
    except ParseError:
        return {}
    return data if isinstance(data, Mapping) else {}


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


class RegisterView(generics.CreateAPIView):
    """User registration endpoint"""
    queryset = User.objects.all()
    serializer_class = UserRegistrationSerializer
    permission_classes = [permissions.AllowAny]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            user = serializer.save()
        except IntegrityError:
            return Response({'email': 'This email is already registered'}, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            'message': 'Account created',
            'user': UserProfileSerializer(user, context={"request": request}).data,
            'tokens': _tokens_for(user),
        }, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """User login endpoint"""
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = UserLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data['user']
        return Response({
            'message': 'Logged in',
            'user': UserProfileSerializer(user, context={"request": request}).data,
            'tokens': _tokens_for(user),
        })


class ProfileView(APIView):
    """Retrieve and update the authenticated user's profile."""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        serializer = UserProfileSerializer(request.user, context={"request": request})
        return Response(serializer.data)

    def patch(self, request):
        serializer = UserProfileSerializer(instance=request.user, data=request.data, partial=True, context={"request": request})
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)


class AnalyzeView(APIView):
    """Tag-based checker: ``{symptoms: [...]}`` in, validated conditions out."""
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = AnalyzeRequestSerializer(data=_request_payload(request))
        if not serializer.is_valid():
            return Response({'error': NO_SYMPTOMS}, status=status.HTTP_400_BAD_REQUEST)
        symptoms = unique_symptoms(serializer.validated_data['symptoms'])
        if not symptoms:
            return Response({'error': NO_SYMPTOMS}, status=status.HTTP_400_BAD_REQUEST)

        try:
            result = get_symptom_list_use_case().execute(symptoms)
        except InputValidationError as e:
            return Response({'error': e.message}, status=status.HTTP_400_BAD_REQUEST)
        except Exception as e:
            logger.error("Analysis error: %s", e)
            return Response({'error': analysis_error_message(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(result.to_response())


class DiagnoseView(APIView):
    """Free-text diagnosis assistant. Errors keep the output shape (``Error:`` notes)."""
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = DiagnoseRequestSerializer(data=_request_payload(request))
        if not serializer.is_valid():
            return Response(
                actions.failed_analysis_output(summarize_errors(serializer.errors)),
                status=status.HTTP_400_BAD_REQUEST,
            )
        data = serializer.validated_data
        try:
            output = actions.analyze_symptoms(
                data['symptomDescription'],
                data.get('scanFindingsDescription'),
                data.get('reportFileDataUri'),
            )
        except InputValidationError as e:
            return Response(actions.failed_analysis_output(e.message), status=status.HTTP_400_BAD_REQUEST)
        except Exception as e:
            logger.error("Diagnosis error: %s", e)
            return Response(
                actions.failed_analysis_output(analysis_error_message(e)),
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response(output)


class ImproveDescriptionView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = ImproveDescriptionRequestSerializer(data=_request_payload(request))
        if not serializer.is_valid():
            return Response({'error': "Please enter your symptoms first."}, status=status.HTTP_400_BAD_REQUEST)
        try:
            result = actions.improve_symptom_description(serializer.validated_data['symptomDescription'])
        except InputValidationError as e:
            return Response({'error': e.message}, status=status.HTTP_400_BAD_REQUEST)
        except Exception as e:
            logger.error("Improve description error: %s", e)
            return Response({'error': analysis_error_message(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(result)


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def symptom_suggestions(request):
    selected = request.query_params.getlist('selected')
    if len(selected) == 1:
        selected = split_symptom_text(selected[0])
    return Response({'suggestions': suggest_symptoms(request.query_params.get('q', ''), selected)})


class ReportListCreateView(APIView):
    """Saved reports of the authenticated user (newest first) and saving new ones."""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        result = actions.get_symptom_reports_action(request.user)
        if result['error']:
            return Response({'error': result['error']}, status=status.HTTP_502_BAD_GATEWAY)
        return Response({'reports': result['reports']})

    def post(self, request):
        serializer = SaveReportRequestSerializer(data=_request_payload(request))
        if not serializer.is_valid():
            return Response({'error': summarize_errors(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)
        data = serializer.validated_data
        fields = {
            'symptom_description': data['symptomDescription'],
            'analysis_result': data['analysisResult'],
            'scan_findings_description': data.get('scanFindingsDescription'),
            'report_file_data_uri': data.get('reportFileDataUri'),
        }
        try:
            actions.validate_report_input(**fields)
        except InputValidationError as e:
            return Response({'error': e.message}, status=status.HTTP_400_BAD_REQUEST)

        # Input is valid at this point, so any remaining error is the store's
        result = actions.save_symptom_report_action(request.user, **fields)
        if result['error']:
            return Response({'error': result['error']}, status=status.HTTP_502_BAD_GATEWAY)
        return Response({'data': result['data']}, status=status.HTTP_201_CREATED)


def _owned_report(request, report_id):
    result = actions.get_symptom_report_action(request.user, report_id)
    if result['error']:
        return None, Response({'error': result['error']}, status=status.HTTP_502_BAD_GATEWAY)
    if result['data'] is None:
        raise Http404("Report not found")
    return result['data'], None


class ReportDetailView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, report_id):
        report, error_response = _owned_report(request, report_id)
        if error_response is not None:
            return error_response
        payload = dict(report)
        payload['diagnoses'] = diagnosis_rows(report['analysis_result'])
        return Response(payload)


@api_view(['GET'])
@permission_classes([permissions.IsAuthenticated])
def download_report_pdf(request, report_id):
    """Generate and return a PDF export of one saved report"""
    report, error_response = _owned_report(request, report_id)
    if error_response is not None:
        return error_response
    pdf = build_report_pdf(report, owner_email=request.user.email)
    response = HttpResponse(pdf, content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="symptom_report_{report_id}.pdf"'
    return response


class CheckerPageView(View):
    """Server-rendered checker: Idle (GET) -> Success | Failed (POST) -> Idle."""
    template_name = 'symptom_app/checker.html'

    def get(self, request):
        return render(request, self.template_name, {'state': 'idle', 'common_symptoms': COMMON_SYMPTOMS})

    def post(self, request):
        raw = list(request.POST.getlist('symptoms'))
        raw.extend(split_symptom_text(request.POST.get('symptom_text', '')))
        symptoms = unique_symptoms(raw)
        context = {'common_symptoms': COMMON_SYMPTOMS, 'selected': symptoms}
        if not symptoms:
            context.update(state='failed', error=NO_SYMPTOMS)
            return render(request, self.template_name, context, status=400)

        try:
            result = get_symptom_list_use_case().execute(symptoms)
        except Exception as e:
            logger.error("Analysis error: %s", e)
            context.update(state='failed', error=analysis_error_message(e))
            code = 400 if isinstance(e, InputValidationError) else 500
            return render(request, self.template_name, context, status=code)

        context.update(state='success', **results_context(result.analysis, result.analyzed_symptoms))
        return render(request, self.template_name, context)
