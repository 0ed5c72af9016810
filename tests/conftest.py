"""테스트 픽스처 및 설정"""

from types import MappingProxyType

import pytest

from dispatch_bot.services.dispatch import DispatchBot, KnowledgeBaseBinding
from dispatch_bot.settings import DEFAULT_QNA_DOMAINS

from tests.fixtures import RecordingAdapter, StaticQnA, StubRecognizer, make_recognizer_result


@pytest.fixture
def adapter():
    """답장 기록용 어댑터 픽스처"""
    return RecordingAdapter()


@pytest.fixture
def qna_services():
    """도메인 키 -> 답변 없는 QnA 서비스 픽스처"""
    return {domain.key: StaticQnA() for domain in DEFAULT_QNA_DOMAINS}


@pytest.fixture
def bindings(qna_services):
    """기본 도메인 바인딩 픽스처"""
    return MappingProxyType(
        {
            domain.intent: KnowledgeBaseBinding(domain=domain, service=qna_services[domain.key])
            for domain in DEFAULT_QNA_DOMAINS
        }
    )


@pytest.fixture
def recognizer():
    """고정 결과 의도 인식기 픽스처 (기본: None 의도)"""
    return StubRecognizer(make_recognizer_result({"None": 0.9}))


@pytest.fixture
def bot(recognizer, bindings):
    """디스패치 봇 픽스처"""
    return DispatchBot(recognizer, bindings)
