"""의도 인식 서비스 기본 인터페이스"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from dispatch_bot.services.dispatch.turn import TurnContext


@dataclass(frozen=True)
class IntentScore:
    """의도별 신뢰도"""

    score: float = 0.0  # 0.0 ~ 1.0


@dataclass(frozen=True)
class RecognizerResult:
    """의도 인식 결과 (한 턴 동안만 유효)"""

    text: str
    altered_text: str | None = None
    intents: dict[str, IntentScore] = field(default_factory=dict)  # 선언 순서 유지
    entities: dict[str, Any] = field(default_factory=dict)
    luis_result: dict[str, Any] | None = None  # 서비스 원본 응답 (verbose)

    def get_top_scoring_intent(self) -> tuple[str, float]:
        """(최고 점수 의도, 점수) 반환. 의도가 없으면 ("", 0.0)"""
        intent = top_intent(self, default="")
        return intent, self.intents[intent].score if intent else 0.0


def top_intent(result: RecognizerResult, default: str = "None", min_score: float = 0.0) -> str:
    """최고 점수 의도 식별자 반환

    선언 순서대로 순회하며 더 큰 점수만 갱신하므로,
    동점이면 먼저 선언된 의도가 선택됩니다.

    Args:
        result: 의도 인식 결과
        default: 의도가 없거나 모두 min_score 미만일 때 반환할 값
        min_score: 최소 점수

    Returns:
        의도 식별자
    """
    top_name = default
    top_score = -1.0
    for name, intent in result.intents.items():
        if intent.score > top_score and intent.score >= min_score:
            top_name = name
            top_score = intent.score
    return top_name


class BaseRecognizer(ABC):
    """의도 인식 서비스 기본 추상 클래스"""

    @abstractmethod
    async def recognize(self, turn: "TurnContext") -> RecognizerResult:
        """턴의 메시지 텍스트에 대한 의도 인식

        Args:
            turn: 턴 컨텍스트

        Returns:
            RecognizerResult 객체

        Raises:
            RecognitionUnavailable: 서비스 호출 실패 시
        """
        pass

    async def aclose(self) -> None:
        """보유한 연결 자원 정리 (기본: 없음)"""
        pass
