"""LUIS 하위 모델 응답기 (LuisResponder)

디스패치 모델이 LUIS 하위 앱(홈 오토메이션, 날씨)으로 분류한 메시지에 대해
인식 결과를 사람이 읽을 수 있는 텍스트로 정리해 돌려줍니다.
추가 네트워크 호출은 하지 않습니다.
"""

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from dispatch_bot.services.recognition.base import RecognizerResult

    from .turn import TurnContext

logger = logging.getLogger(__name__)


class LuisResponder:
    """LUIS 하위 모델 결과 응답 생성기"""

    def __init__(self, label: str):
        """
        Args:
            label: 응답 앞에 붙는 도메인 이름 (예: "HomeAutomation")
        """
        self.label = label

    async def respond(self, turn: "TurnContext", result: "RecognizerResult") -> None:
        """인식 결과 응답 전송

        엔티티가 있으면 3개, 없으면 2개의 메시지를 순서대로 보냅니다.

        Args:
            turn: 턴 컨텍스트
            result: 의도 인식 결과
        """
        logger.info(f"{self.label} 응답 처리")
        luis_result = result.luis_result or {}

        top = self.get_sub_model_top_intent(luis_result)
        intents = [item.get("intent", "") for item in luis_result.get("intents") or []]
        entities = [item.get("entity", "") for item in luis_result.get("entities") or []]

        await turn.send_activity(f"{self.label} top intent {top}.")
        await turn.send_activity(f"{self.label} intents detected: {self._join(intents)}.")

        if entities:
            await turn.send_activity(
                f"{self.label} entities were found in the message: {self._join(entities)}."
            )

    @staticmethod
    def get_sub_model_top_intent(luis_result: dict[str, Any]) -> str:
        """연결된 하위 LUIS 앱의 최고 점수 의도 라벨"""
        connected = luis_result.get("connectedServiceResult") or {}
        return (connected.get("topScoringIntent") or {}).get("intent", "")

    @staticmethod
    def _join(items: list[str]) -> str:
        return "\n\n".join(items)
