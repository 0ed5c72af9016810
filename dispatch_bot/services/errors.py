"""외부 서비스 호출 오류 정의

의도 인식/QnA 호출 실패는 로컬에서 재시도하거나 삼키지 않고
호스트 어댑터의 턴 오류 처리기까지 그대로 전파됩니다.
"""


class DispatchError(Exception):
    """디스패치 처리 중 발생하는 오류의 기본 클래스"""

    def __init__(self, service: str, message: str):
        self.service = service
        super().__init__(f"{service}: {message}")


class RecognitionUnavailable(DispatchError):
    """의도 인식 서비스 호출 실패 (네트워크/인증 오류)"""


class AnswerServiceUnavailable(DispatchError):
    """QnA 서비스 호출 실패 (네트워크/인증 오류)"""
