"""턴 컨텍스트 (TurnContext)

인바운드 Activity 하나와 그에 대한 응답 전송 수단을 묶은 객체입니다.
한 턴 동안만 유효하며, 핸들러는 Activity를 읽고 send_activity만 호출합니다.
"""

from typing import TYPE_CHECKING

from dispatch_bot.models.activity import Activity, ResourceResponse

if TYPE_CHECKING:
    from dispatch_bot.services.transport.adapter import BotAdapter


class TurnContext:
    """단일 턴 컨텍스트"""

    def __init__(self, adapter: "BotAdapter", activity: Activity):
        """
        Args:
            adapter: 응답을 실제로 전달할 어댑터
            activity: 인바운드 Activity
        """
        self.adapter = adapter
        self._activity = activity
        # deliveryMode=expectReplies일 때 HTTP 응답으로 돌려줄 답장
        self.buffered_replies: list[Activity] = []

    @property
    def activity(self) -> Activity:
        return self._activity

    async def send_activity(self, text: str) -> ResourceResponse:
        """텍스트 응답 전송

        Args:
            text: 응답 텍스트

        Returns:
            ResourceResponse 객체
        """
        reply = self._activity.create_reply(text)
        responses = await self.adapter.send_activities(self, [reply])
        return responses[0] if responses else ResourceResponse()
