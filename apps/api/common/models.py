# PATH: apps/api/common/models.py
from django.db import models


class TimestampModel(models.Model):
    """
    생성 / 수정 시간 자동 기록 추상 모델
    """
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class BaseModel(TimestampModel):
    """
    모든 도메인 모델이 상속하는 공통 베이스 모델.
    """
    class Meta:
        abstract = True
