"""메시징 채널 연동 패키지

- adapter: 턴 생성, 봇 로직 실행, 답장 전달, 턴 오류 처리 (BotAdapter)
- connector: Bot Connector REST 답장 전송 (ConnectorClient)
"""

from .connector import ConnectorClient
from .adapter import BotAdapter, default_on_turn_error

__all__ = [
    "BotAdapter",
    "ConnectorClient",
    "default_on_turn_error",
]
