"""디스패치 레이어

의도인식 → 라우팅 → 응답생성 흐름을 관리합니다.

구성:
- DispatchBot: 최고 점수 의도 기반으로 적절한 응답기로 라우팅
- LuisResponder: LUIS 하위 모델(홈 오토메이션, 날씨) 결과 정리
- QnAResponder: 도메인별 지식베이스 최상위 답변 전달
- WelcomeResponder: 새 참여자 환영 메시지
- TurnContext: 인바운드 Activity와 응답 전송 수단
"""

from .models import (
    DispatchIntent,
    DispatchRoute,
    KnowledgeBaseBinding,
    resolve_route,
)
from .turn import TurnContext
from .luis_responder import LuisResponder
from .qna_responder import QnAResponder
from .welcome_responder import WelcomeResponder
from .router import DispatchBot

__all__ = [
    "DispatchIntent",
    "DispatchRoute",
    "KnowledgeBaseBinding",
    "resolve_route",
    "TurnContext",
    "LuisResponder",
    "QnAResponder",
    "WelcomeResponder",
    "DispatchBot",
]
