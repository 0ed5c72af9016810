"""봇 어댑터 (BotAdapter)

인바운드 Activity로 턴을 만들고 봇 로직을 실행한 뒤 답장을 전달합니다.
봇 로직에서 올라온 예외(의도 인식/QnA 호출 실패 포함)는
턴 오류 처리기에서 로그로 남기고 사용자에게 안내 메시지를 보냅니다.
"""

import logging
from typing import Awaitable, Callable

from dispatch_bot.models.activity import Activity, ResourceResponse
from dispatch_bot.services.dispatch.turn import TurnContext

from .connector import ConnectorClient

logger = logging.getLogger(__name__)

BotLogic = Callable[[TurnContext], Awaitable[None]]
TurnErrorHandler = Callable[[TurnContext, Exception], Awaitable[None]]

TURN_ERROR_MESSAGES = (
    "The bot encountered an error or bug.",
    "To continue to run this bot, please fix the bot source code.",
)


async def default_on_turn_error(turn: TurnContext, error: Exception) -> None:
    """기본 턴 오류 처리기: 로그 기록 후 안내 메시지 전송"""
    logger.error(f"[on_turn_error] unhandled error: {error!r}", exc_info=error)
    for message in TURN_ERROR_MESSAGES:
        await turn.send_activity(message)


class BotAdapter:
    """채널과 봇 로직 사이의 어댑터"""

    def __init__(
        self,
        connector: ConnectorClient | None = None,
        on_turn_error: TurnErrorHandler | None = None,
    ):
        """
        Args:
            connector: 답장 전송 클라이언트 (None이면 설정값으로 생성)
            on_turn_error: 턴 오류 처리기 (None이면 기본 처리기)
        """
        self.connector = connector or ConnectorClient()
        self.on_turn_error = on_turn_error or default_on_turn_error

    async def process_activity(self, activity: Activity, logic: BotLogic) -> list[Activity]:
        """인바운드 Activity 처리

        Args:
            activity: 인바운드 Activity
            logic: 봇 로직 (예: DispatchBot.on_turn)

        Returns:
            deliveryMode=expectReplies이면 버퍼링된 답장 목록, 아니면 빈 리스트
        """
        turn = TurnContext(self, activity)
        try:
            await logic(turn)
        except Exception as e:
            await self.on_turn_error(turn, e)
        return turn.buffered_replies

    async def send_activities(
        self,
        turn: TurnContext,
        activities: list[Activity],
    ) -> list[ResourceResponse]:
        """답장 전달

        expectReplies 턴은 버퍼에 쌓고, 그 외에는 Bot Connector로 바로 전송합니다.
        """
        responses = []
        for activity in activities:
            if turn.activity.expects_replies:
                turn.buffered_replies.append(activity)
                responses.append(ResourceResponse())
            else:
                responses.append(await self.connector.reply_to_activity(activity))
        return responses

    async def aclose(self):
        await self.connector.aclose()
