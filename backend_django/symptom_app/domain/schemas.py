"""Expected shapes of the model replies, validated with DRF serializers.

Shape A (tag-based checker): AnalysisResultSerializer / ConditionSerializer.
Shape B (free-text diagnosis assistant): DiagnosisOutputSerializer.
"""

from __future__ import annotations

from rest_framework import serializers

SEVERITY_LEVELS = ('low', 'moderate', 'high', 'critical')
URGENCY_LEVELS = ('low', 'moderate', 'high', 'emergency')


class LowercaseChoiceField(serializers.ChoiceField):
    """ChoiceField that accepts "Moderate" / " HIGH " as their lowercase choice."""

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = data.strip().lower()
        return super().to_internal_value(data)


def _string_list():
    return serializers.ListField(
        child=serializers.CharField(allow_blank=True),
        required=False,
        default=list,
    )


class ConditionSerializer(serializers.Serializer):
    name = serializers.CharField()
    description = serializers.CharField(required=False, allow_blank=True, default='')
    confidence = serializers.IntegerField(min_value=0, max_value=100, required=False, allow_null=True, default=None)
    severity = LowercaseChoiceField(choices=SEVERITY_LEVELS, required=False, allow_null=True, default=None)
    matchedSymptoms = _string_list()
    additionalSymptoms = _string_list()
    recommendedActions = _string_list()


class AnalysisResultSerializer(serializers.Serializer):
    conditions = ConditionSerializer(many=True, allow_empty=False)
    urgencyScore = serializers.IntegerField(min_value=1, max_value=10, required=False, allow_null=True, default=None)
    urgencyLevel = LowercaseChoiceField(choices=URGENCY_LEVELS, required=False, allow_null=True, default=None)
    generalRecommendations = _string_list()
    disclaimer = serializers.CharField(required=False, allow_blank=True, default='')
    whenToSeekHelp = _string_list()


class DiagnosisOutputSerializer(serializers.Serializer):
    potentialDiagnoses = serializers.ListField(child=serializers.CharField(), allow_empty=False)
    confidenceLevels = serializers.ListField(
        child=serializers.FloatField(min_value=0.0, max_value=1.0),
        required=False,
    )
    additionalNotes = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        levels = attrs.get('confidenceLevels')
        if levels is not None and len(levels) != len(attrs['potentialDiagnoses']):
            raise serializers.ValidationError({
                'confidenceLevels': 'Must have one confidence level per potential diagnosis.'
            })
        return attrs


class ImprovedDescriptionSerializer(serializers.Serializer):
    improvedDescription = serializers.CharField()


def expected_urgency_level(score: int) -> str:
    """Band an urgency score into a level (1-3 low, 4-5 moderate, 6-7 high, 8+ emergency).

    Drives the urgency banner; not enforced on model output.
    """
    if score <= 3:
        return 'low'
    if score <= 5:
        return 'moderate'
    if score <= 7:
        return 'high'
    return 'emergency'
