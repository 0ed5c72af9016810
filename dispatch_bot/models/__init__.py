"""메시징 채널 데이터 모델"""

from .activity import (
    Activity,
    ActivityTypes,
    ChannelAccount,
    ConversationAccount,
    ResourceResponse,
)

__all__ = [
    "Activity",
    "ActivityTypes",
    "ChannelAccount",
    "ConversationAccount",
    "ResourceResponse",
]
