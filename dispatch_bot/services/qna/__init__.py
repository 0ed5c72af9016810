"""QnA 서비스 패키지

도메인별 지식베이스에 질문을 보내 답변 후보를 받아옵니다.

주요 모듈:
- base: QnA 서비스 기본 인터페이스 (BaseQnAService, QueryResult)
- qnamaker: QnA Maker 구현체 (QnAMaker)
- dummy_qna: 사전 기반 더미 구현체 (DummyQnA)
- factory: 도메인별 서비스 생성 및 바인딩 테이블 구성
"""

from .base import BaseQnAService, QueryResult
from .dummy_qna import DummyQnA
from .qnamaker import QnAMaker
from .factory import build_knowledge_base_bindings, get_qna_service

__all__ = [
    # 기본 인터페이스
    "BaseQnAService",
    "QueryResult",
    # 서비스
    "QnAMaker",
    "DummyQnA",
    # 팩토리
    "get_qna_service",
    "build_knowledge_base_bindings",
]
