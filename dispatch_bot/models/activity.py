"""메시징 채널 Activity 모델

Bot Framework 채널이 주고받는 Activity(JSON)의 필요한 부분만
타입 안전하게 다루기 위한 Pydantic 모델 정의.
필드명은 파이썬 스타일(snake_case)이고 직렬화는 camelCase 별칭을 사용합니다.
"""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional
from typing_extensions import TypeAlias

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# 기본 타입 정의
# =============================================================================

ActivityType: TypeAlias = str
"""Activity 유형 (message, conversationUpdate 등)"""

DeliveryMode: TypeAlias = Literal['normal', 'notification', 'expectReplies']
"""응답 전달 방식"""


class ActivityTypes:
    """자주 쓰는 Activity 유형 상수"""
    MESSAGE = 'message'
    CONVERSATION_UPDATE = 'conversationUpdate'


class _WireModel(BaseModel):
    """camelCase 별칭을 쓰는 공통 베이스"""
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# 계정/대화 모델
# =============================================================================

class ChannelAccount(_WireModel):
    """채널 참여자 (사용자 또는 봇)"""
    id: str = Field(..., description="채널 내 참여자 ID")
    name: Optional[str] = Field(default=None, description="표시 이름")


class ConversationAccount(_WireModel):
    """대화 식별 정보"""
    id: str = Field(..., description="대화 ID")
    name: Optional[str] = Field(default=None, description="대화 이름")
    is_group: Optional[bool] = Field(default=None, alias='isGroup')


# =============================================================================
# Activity 모델
# =============================================================================

class Activity(_WireModel):
    """채널 Activity"""
    type: ActivityType = Field(..., description="Activity 유형")
    id: Optional[str] = Field(default=None, description="Activity ID")
    text: Optional[str] = Field(default=None, description="메시지 텍스트")
    from_property: Optional[ChannelAccount] = Field(default=None, alias='from')
    recipient: Optional[ChannelAccount] = None
    conversation: Optional[ConversationAccount] = None
    service_url: Optional[str] = Field(default=None, alias='serviceUrl')
    channel_id: Optional[str] = Field(default=None, alias='channelId')
    reply_to_id: Optional[str] = Field(default=None, alias='replyToId')
    members_added: Optional[List[ChannelAccount]] = Field(default=None, alias='membersAdded')
    delivery_mode: Optional[DeliveryMode] = Field(default=None, alias='deliveryMode')
    locale: Optional[str] = None

    @property
    def expects_replies(self) -> bool:
        return self.delivery_mode == 'expectReplies'

    def create_reply(self, text: str) -> 'Activity':
        """이 Activity에 대한 답장 Activity 생성 (발신자/수신자 교환)"""
        return Activity(
            type=ActivityTypes.MESSAGE,
            text=text,
            from_property=self.recipient,
            recipient=self.from_property,
            conversation=self.conversation,
            service_url=self.service_url,
            channel_id=self.channel_id,
            reply_to_id=self.id,
            locale=self.locale,
        )


class ResourceResponse(_WireModel):
    """Activity 전송 결과"""
    id: Optional[str] = Field(default=None, description="채널이 부여한 Activity ID")


__all__ = [
    'ActivityType',
    'ActivityTypes',
    'DeliveryMode',
    'ChannelAccount',
    'ConversationAccount',
    'Activity',
    'ResourceResponse',
]
