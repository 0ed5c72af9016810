"""디스패치 데이터 모델"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Mapping

from dispatch_bot.settings import KnowledgeBaseDomain

if TYPE_CHECKING:
    from dispatch_bot.services.qna.base import BaseQnAService


HOME_AUTOMATION_INTENT = "l_HomeAutomation"
WEATHER_INTENT = "l_Weather"


class DispatchIntent(Enum):
    """디스패치 의도 유형 (닫힌 집합)"""

    HOME_AUTOMATION = "home_automation"  # 홈 오토메이션 LUIS 하위 모델
    WEATHER = "weather"  # 날씨 LUIS 하위 모델
    KNOWLEDGE_BASE = "knowledge_base"  # 바인딩된 QnA 지식베이스
    UNKNOWN = "unknown"  # 등록되지 않은 의도


@dataclass(frozen=True)
class KnowledgeBaseBinding:
    """의도 식별자에 연결된 QnA 지식베이스 (시작 시 한 번 생성)"""

    domain: KnowledgeBaseDomain
    service: "BaseQnAService"


@dataclass(frozen=True)
class DispatchRoute:
    """최고 점수 의도에 대한 라우팅 결정"""

    intent_type: DispatchIntent
    intent_id: str  # 인식 서비스가 반환한 원본 식별자
    score: float = 0.0
    binding: KnowledgeBaseBinding | None = None  # KNOWLEDGE_BASE일 때만

    @property
    def is_unknown(self) -> bool:
        return self.intent_type == DispatchIntent.UNKNOWN


def resolve_route(
    intent_id: str,
    bindings: Mapping[str, KnowledgeBaseBinding],
    score: float = 0.0,
) -> DispatchRoute:
    """의도 식별자를 디스패치 의도 유형으로 매핑

    Args:
        intent_id: 최고 점수 의도 식별자
        bindings: 의도 식별자 -> 지식베이스 바인딩
        score: 의도 점수 (로깅용)

    Returns:
        DispatchRoute 객체
    """
    if intent_id == HOME_AUTOMATION_INTENT:
        return DispatchRoute(DispatchIntent.HOME_AUTOMATION, intent_id, score)
    if intent_id == WEATHER_INTENT:
        return DispatchRoute(DispatchIntent.WEATHER, intent_id, score)

    binding = bindings.get(intent_id)
    if binding is not None:
        return DispatchRoute(DispatchIntent.KNOWLEDGE_BASE, intent_id, score, binding)

    return DispatchRoute(DispatchIntent.UNKNOWN, intent_id, score)
