"""Dispatch bot: 의도 인식 결과에 따라 LUIS 하위 모델 또는 QnA 지식베이스로 메시지를 라우팅"""

__version__ = "0.1.0"
