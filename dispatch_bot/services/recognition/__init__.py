"""의도 인식 서비스 패키지

메시지 텍스트를 외부 의도 인식 서비스로 보내 의도별 점수와
엔티티를 받아옵니다.

주요 모듈:
- base: 의도 인식 기본 인터페이스 (BaseRecognizer, RecognizerResult, top_intent)
- luis_recognizer: LUIS 디스패치 앱 구현체 (LuisRecognizer)
- dummy_recognizer: 키워드 기반 더미 구현체 (DummyRecognizer)
- factory: 의도 인식 서비스 팩토리 함수
"""

from .base import BaseRecognizer, IntentScore, RecognizerResult, top_intent
from .dummy_recognizer import DummyRecognizer
from .luis_recognizer import LuisRecognizer
from .factory import get_recognizer

__all__ = [
    # 기본 인터페이스
    "BaseRecognizer",
    "IntentScore",
    "RecognizerResult",
    "top_intent",
    # 서비스
    "LuisRecognizer",
    "DummyRecognizer",
    # 팩토리
    "get_recognizer",
]
