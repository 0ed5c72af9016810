"""QnA 서비스 기본 인터페이스"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from dispatch_bot.services.dispatch.turn import TurnContext


@dataclass(frozen=True)
class QueryResult:
    """지식베이스 답변 후보"""

    answer: str
    score: float  # 0.0 ~ 1.0
    questions: list[str] = field(default_factory=list)
    id: int | None = None
    source: str | None = None
    metadata: list[dict[str, Any]] = field(default_factory=list)


class BaseQnAService(ABC):
    """QnA 서비스 기본 추상 클래스

    한 인스턴스는 하나의 지식베이스에만 연결됩니다.
    """

    @abstractmethod
    async def get_answers(self, turn: "TurnContext") -> list[QueryResult]:
        """턴의 메시지 텍스트에 대한 답변 후보 조회

        Args:
            turn: 턴 컨텍스트

        Returns:
            점수 내림차순 QueryResult 리스트 (답변이 없으면 빈 리스트)

        Raises:
            AnswerServiceUnavailable: 서비스 호출 실패 시
        """
        pass

    async def aclose(self) -> None:
        """보유한 연결 자원 정리 (기본: 없음)"""
        pass
