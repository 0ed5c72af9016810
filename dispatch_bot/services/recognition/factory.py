"""의도 인식 서비스 팩토리"""

from dispatch_bot.settings import settings

from .base import BaseRecognizer
from .dummy_recognizer import DummyRecognizer
from .luis_recognizer import LuisRecognizer


def get_recognizer() -> BaseRecognizer:
    """설정에 따라 적절한 의도 인식 서비스 반환

    Returns:
        BaseRecognizer 인스턴스
    """
    if settings.recognizer_provider == "luis":
        return LuisRecognizer()
    elif settings.recognizer_provider == "dummy":
        return DummyRecognizer()
    else:
        raise ValueError(f"지원하지 않는 의도 인식 제공자: {settings.recognizer_provider}")
