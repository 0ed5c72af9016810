"""테스트 픽스처 및 헬퍼 함수

이 모듈은 테스트에서 공통으로 사용하는 Activity/턴 생성 헬퍼와
네트워크 없이 동작하는 가짜 어댑터/서비스를 제공합니다.
"""

from typing import Any

from dispatch_bot.models.activity import (
    Activity,
    ActivityTypes,
    ChannelAccount,
    ConversationAccount,
    ResourceResponse,
)
from dispatch_bot.services.dispatch.turn import TurnContext
from dispatch_bot.services.qna.base import BaseQnAService, QueryResult
from dispatch_bot.services.recognition.base import (
    BaseRecognizer,
    IntentScore,
    RecognizerResult,
)

BOT = ChannelAccount(id="bot-id", name="DispatchBot")
USER = ChannelAccount(id="user-id", name="Alice")


def make_activity(text: str | None = "hello", **overrides: Any) -> Activity:
    """메시지 Activity 생성

    Example:
        >>> make_activity("weather in seattle", delivery_mode="expectReplies")
    """
    fields = dict(
        type=ActivityTypes.MESSAGE,
        id="activity-1",
        text=text,
        from_property=USER,
        recipient=BOT,
        conversation=ConversationAccount(id="conv-1"),
        service_url="https://smba.example.com/",
        channel_id="test",
    )
    fields.update(overrides)
    return Activity(**fields)


def make_members_added(*members: ChannelAccount) -> Activity:
    """conversationUpdate(membersAdded) Activity 생성"""
    return make_activity(
        text=None,
        type=ActivityTypes.CONVERSATION_UPDATE,
        members_added=list(members),
    )


def make_recognizer_result(
    intents: dict[str, float],
    luis_result: dict[str, Any] | None = None,
    text: str = "hello",
) -> RecognizerResult:
    """의도 점수 dict로 RecognizerResult 생성 (선언 순서 유지)"""
    return RecognizerResult(
        text=text,
        intents={name: IntentScore(score=score) for name, score in intents.items()},
        luis_result=luis_result,
    )


class RecordingAdapter:
    """전송된 답장을 기록만 하는 어댑터"""

    def __init__(self):
        self.sent: list[Activity] = []

    @property
    def texts(self) -> list[str]:
        return [activity.text for activity in self.sent]

    async def send_activities(self, turn, activities):
        self.sent.extend(activities)
        return [ResourceResponse(id=str(len(self.sent))) for _ in activities]


def make_turn(activity: Activity | None = None, adapter: RecordingAdapter | None = None) -> TurnContext:
    return TurnContext(adapter or RecordingAdapter(), activity or make_activity())


class StubRecognizer(BaseRecognizer):
    """고정된 결과를 반환하는 의도 인식기"""

    def __init__(self, result: RecognizerResult):
        self.result = result
        self.calls = 0

    async def recognize(self, turn):
        self.calls += 1
        return self.result


class StaticQnA(BaseQnAService):
    """고정된 답변 목록을 반환하는 QnA 서비스"""

    def __init__(self, results: list[QueryResult] | None = None):
        self.results = results or []
        self.calls = 0

    async def get_answers(self, turn):
        self.calls += 1
        return list(self.results)
