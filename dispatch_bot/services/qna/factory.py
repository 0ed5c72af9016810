"""QnA 서비스 팩토리

도메인별 QnA 서비스를 한 번만 생성하고, 의도 식별자 -> 바인딩
읽기 전용 테이블로 묶어 디스패처에 전달합니다.
"""

import logging
from types import MappingProxyType
from typing import Mapping

from dispatch_bot.settings import KnowledgeBaseDomain, load_qna_endpoint, settings
from dispatch_bot.services.dispatch.models import KnowledgeBaseBinding

from .base import BaseQnAService
from .dummy_qna import DummyQnA
from .qnamaker import QnAMaker

logger = logging.getLogger(__name__)


# 더미 모드에서 도메인별로 쓰는 예시 답변
DUMMY_ANSWERS: dict[str, dict[str, str]] = {
    "covid": {"mask": "Wear a mask in crowded indoor spaces."},
    "food": {"vegetable": "Eat vegetables."},
    "housing": {"rent": "Contact your local housing authority about rent assistance."},
    "financial": {"loan": "Compare interest rates before taking a loan."},
}


def get_qna_service(domain: KnowledgeBaseDomain) -> BaseQnAService:
    """설정에 따라 도메인의 QnA 서비스 반환

    Args:
        domain: 지식베이스 도메인

    Returns:
        BaseQnAService 인스턴스
    """
    if settings.qna_provider == "qnamaker":
        return QnAMaker.from_settings(load_qna_endpoint(domain), name=domain.label)
    elif settings.qna_provider == "dummy":
        return DummyQnA(domain.label, DUMMY_ANSWERS.get(domain.key))
    else:
        raise ValueError(f"지원하지 않는 QnA 제공자: {settings.qna_provider}")


def build_knowledge_base_bindings(
    domains: list[KnowledgeBaseDomain] | None = None,
) -> Mapping[str, KnowledgeBaseBinding]:
    """의도 식별자 -> 지식베이스 바인딩 테이블 생성

    Args:
        domains: 도메인 목록 (None이면 설정값 사용)

    Returns:
        읽기 전용 매핑

    Raises:
        ValueError: 같은 의도 식별자가 두 도메인에 설정된 경우
    """
    bindings: dict[str, KnowledgeBaseBinding] = {}
    for domain in domains if domains is not None else settings.qna_domains:
        if domain.intent in bindings:
            raise ValueError(f"중복된 QnA 의도 식별자: {domain.intent}")
        bindings[domain.intent] = KnowledgeBaseBinding(
            domain=domain, service=get_qna_service(domain)
        )
        logger.info(f"QnA 바인딩 등록: {domain.intent} -> {domain.label}")
    return MappingProxyType(bindings)
