# 학생 1명 = room 1개. 같은 학생의 모든 연결(탭/기기)이 함께 주소 지정된다.

AUTO_SUBMITTED_EVENT = "exam:autoSubmitted"
EXAM_START_EVENT = "exam:start"


def student_room(student_id: int) -> str:
    return f"user_{int(student_id)}"
