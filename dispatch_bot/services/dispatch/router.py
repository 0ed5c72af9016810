"""디스패치 봇 (DispatchBot)

의도 인식 결과의 최고 점수 의도를 기준으로 알맞은 응답기로 라우팅합니다.
턴 사이에 상태를 두지 않으며, 턴 안에서는 인식 → 라우팅 → 응답이 순서대로 실행됩니다.
"""

import logging
from typing import TYPE_CHECKING, Mapping

from dispatch_bot.models.activity import ActivityTypes

from .luis_responder import LuisResponder
from .models import DispatchIntent, DispatchRoute, KnowledgeBaseBinding, resolve_route
from .qna_responder import QnAResponder
from .welcome_responder import WelcomeResponder

if TYPE_CHECKING:
    from dispatch_bot.services.recognition.base import BaseRecognizer, RecognizerResult

    from .turn import TurnContext

logger = logging.getLogger(__name__)


class DispatchBot:
    """디스패치 라우터

    의도인식 → 라우팅 → 응답생성 흐름을 관리합니다.
    """

    def __init__(
        self,
        recognizer: "BaseRecognizer",
        bindings: Mapping[str, KnowledgeBaseBinding],
    ):
        """
        Args:
            recognizer: 디스패치 의도 인식 서비스
            bindings: 의도 식별자 -> 지식베이스 바인딩 (읽기 전용)
        """
        self.recognizer = recognizer
        self.bindings = bindings

        # 각 응답기 초기화
        self.home_automation_responder = LuisResponder("HomeAutomation")
        self.weather_responder = LuisResponder("ProcessWeather")
        self.qna_responders = {
            intent: QnAResponder(binding) for intent, binding in bindings.items()
        }
        self.welcome_responder = WelcomeResponder()

    async def on_turn(self, turn: "TurnContext") -> None:
        """Activity 유형에 따라 처리 분기

        Args:
            turn: 턴 컨텍스트
        """
        activity = turn.activity
        if activity.type == ActivityTypes.MESSAGE:
            await self.on_message(turn)
        elif activity.type == ActivityTypes.CONVERSATION_UPDATE and activity.members_added:
            await self.on_members_added(turn)
        else:
            logger.debug(f"처리하지 않는 Activity 유형: {activity.type}")

    async def on_message(self, turn: "TurnContext") -> None:
        """메시지 처리

        Raises:
            RecognitionUnavailable: 의도 인식 서비스 호출 실패 시 (재시도 없음)
        """
        logger.info("Processing Message Activity.")

        # 1. 디스패치 모델로 어떤 서비스(LUIS 또는 QnA)를 쓸지 결정
        result = await self.recognizer.recognize(turn)

        # 2. 최고 점수 의도로 라우팅 결정
        route = self.route(result)
        logger.info(
            f"디스패치 의도: {route.intent_id} (score={route.score:.3f}, "
            f"route={route.intent_type.value})"
        )

        # 3. 응답 생성
        await self.dispatch_to_top_intent(turn, route, result)

    async def aclose(self) -> None:
        """의도 인식 서비스와 모든 QnA 서비스의 연결 정리"""
        await self.recognizer.aclose()
        for binding in self.bindings.values():
            await binding.service.aclose()

    async def on_members_added(self, turn: "TurnContext") -> None:
        await self.welcome_responder.respond(turn, turn.activity.members_added or [])

    def route(self, result: "RecognizerResult") -> DispatchRoute:
        """인식 결과를 라우팅 결정으로 변환

        동점인 최고 점수 의도는 먼저 선언된 것이 선택됩니다.
        """
        intent_id, score = result.get_top_scoring_intent()
        return resolve_route(intent_id or "None", self.bindings, score)

    async def dispatch_to_top_intent(
        self,
        turn: "TurnContext",
        route: DispatchRoute,
        result: "RecognizerResult",
    ) -> None:
        """라우팅 결정에 따라 응답기 하나를 실행

        Args:
            turn: 턴 컨텍스트
            route: 라우팅 결정
            result: 의도 인식 결과
        """
        intent_type = route.intent_type

        # 1. 홈 오토메이션 LUIS 하위 모델
        if intent_type == DispatchIntent.HOME_AUTOMATION:
            await self.home_automation_responder.respond(turn, result)
            return

        # 2. 날씨 LUIS 하위 모델
        if intent_type == DispatchIntent.WEATHER:
            await self.weather_responder.respond(turn, result)
            return

        # 3. QnA 지식베이스
        if intent_type == DispatchIntent.KNOWLEDGE_BASE:
            await self.qna_responders[route.intent_id].respond(turn)
            return

        # 4. 등록되지 않은 의도
        if intent_type == DispatchIntent.UNKNOWN:
            message = f"Dispatch unrecognized intent: {route.intent_id}."
            logger.warning(message)
            await turn.send_activity(message)
            return

        raise ValueError(f"처리되지 않은 디스패치 의도: {intent_type}")
