# PATH: apps/domains/results/serializers/submission.py
from __future__ import annotations

from typing import List

from rest_framework import serializers

from apps.domains.results.services.submission_service import AnswerInput


class AnswerInputSerializer(serializers.Serializer):
    question_id = serializers.IntegerField(min_value=1)
    selected_option_id = serializers.IntegerField(required=False, allow_null=True)
    answer_text = serializers.CharField(required=False, allow_blank=True, default="")
    code = serializers.CharField(required=False, allow_blank=True, default="", trim_whitespace=False)


class SubmitExamSerializer(serializers.Serializer):
    """
    {
      "answers": [
        {"question_id": 1, "selected_option_id": 3},
        {"question_id": 2, "answer_text": "..."},
        {"question_id": 3, "code": "..."}
      ]
    }
    """

    answers = AnswerInputSerializer(many=True, allow_empty=True)

    def to_answer_inputs(self) -> List[AnswerInput]:
        return [
            AnswerInput(
                question_id=a["question_id"],
                selected_option_id=a.get("selected_option_id"),
                answer_text=a.get("answer_text") or "",
                code=a.get("code") or "",
            )
            for a in self.validated_data["answers"]
        ]


class SaveAnswerSerializer(serializers.Serializer):
    # question_id 는 URL 에서 받는다
    selected_option_id = serializers.IntegerField(required=False, allow_null=True)
    answer_text = serializers.CharField(required=False, allow_blank=True, default="")
    code = serializers.CharField(required=False, allow_blank=True, default="", trim_whitespace=False)


class SubmissionOutcomeSerializer(serializers.Serializer):
    exam_id = serializers.IntegerField(read_only=True)
    total_marks = serializers.IntegerField(read_only=True)
    obtained_marks = serializers.IntegerField(read_only=True)
    percentage = serializers.IntegerField(read_only=True)
    passed = serializers.BooleanField(read_only=True)
    certificate_issued = serializers.BooleanField(read_only=True)
    submitted_at = serializers.DateTimeField(read_only=True)
    skipped_question_ids = serializers.ListField(child=serializers.IntegerField(), read_only=True)
