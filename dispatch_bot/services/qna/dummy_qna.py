"""더미 QnA 구현 (로컬 실행/테스트용)"""

from typing import TYPE_CHECKING

from .base import BaseQnAService, QueryResult

if TYPE_CHECKING:
    from dispatch_bot.services.dispatch.turn import TurnContext


class DummyQnA(BaseQnAService):
    """질문-답변 사전을 사용하는 더미 QnA 서비스

    질문 키워드가 메시지에 포함되면 해당 답변을 반환합니다.
    """

    def __init__(self, name: str, answers: dict[str, str] | None = None):
        self.name = name
        self.answers = answers or {}

    async def get_answers(self, turn: "TurnContext") -> list[QueryResult]:
        question = (turn.activity.text or "").lower()
        if not question.strip():
            return []

        results = []
        for keyword, answer in self.answers.items():
            if keyword.lower() in question:
                results.append(
                    QueryResult(answer=answer, score=1.0, questions=[keyword], source="dummy")
                )
        return results
