"""환영 메시지 응답기 (WelcomeResponder)"""

from typing import TYPE_CHECKING

from dispatch_bot.models.activity import ChannelAccount

if TYPE_CHECKING:
    from .turn import TurnContext


WELCOME_TEXT = "Type a greeting or a question about the weather to get started."


class WelcomeResponder:
    """새로 참여한 멤버에게 환영 메시지 전송

    같은 멤버 추가 이벤트가 두 번 오면 두 번 환영합니다.
    중복 제거는 채널 쪽 책임입니다.
    """

    async def respond(self, turn: "TurnContext", members_added: list[ChannelAccount]) -> None:
        bot_id = turn.activity.recipient.id if turn.activity.recipient else None
        for member in members_added:
            if member.id != bot_id:
                await turn.send_activity(self.welcome_message(member))

    @staticmethod
    def welcome_message(member: ChannelAccount) -> str:
        return f"Welcome to Dispatch bot {member.name}. {WELCOME_TEXT}"
