"""지식베이스 응답기 (QnAResponder)

바인딩된 QnA 서비스에 질문을 보내 최상위 답변을 그대로 돌려줍니다.
도메인별로 인스턴스만 달리하여 재사용합니다.
"""

import logging
from typing import TYPE_CHECKING

from .models import KnowledgeBaseBinding

if TYPE_CHECKING:
    from .turn import TurnContext

logger = logging.getLogger(__name__)

NO_ANSWER_TEMPLATE = "Sorry, could not find an answer in the {label} Q and A system."


class QnAResponder:
    """지식베이스 답변 응답 생성기"""

    def __init__(self, binding: KnowledgeBaseBinding):
        """
        Args:
            binding: 도메인과 QnA 서비스 바인딩
        """
        self.binding = binding

    @property
    def label(self) -> str:
        return self.binding.domain.label

    @property
    def no_answer_message(self) -> str:
        return NO_ANSWER_TEMPLATE.format(label=self.label)

    async def respond(self, turn: "TurnContext") -> None:
        """최상위 답변 또는 '답변 없음' 메시지 전송

        Args:
            turn: 턴 컨텍스트

        Raises:
            AnswerServiceUnavailable: QnA 서비스 호출 실패 시 (재시도 없음)
        """
        logger.info(f"{self.label} QnA 응답 처리")
        results = await self.binding.service.get_answers(turn)

        if results:
            await turn.send_activity(results[0].answer)
        else:
            logger.info(f"{self.label} QnA 답변 없음")
            await turn.send_activity(self.no_answer_message)
