"""애플리케이션 설정 관리"""

from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# .env 파일 로드
load_dotenv()

# 프로젝트 루트 디렉토리
ROOT_DIR = Path(__file__).parent.parent


class KnowledgeBaseDomain(BaseModel):
    """QnA 지식베이스 도메인 정의"""

    key: str  # 환경변수 접두사 (예: "food" -> FOOD_QNA_*)
    label: str  # 사용자 메시지에 표시되는 이름 (예: "Food")
    intent: str  # 디스패치 모델의 의도 식별자 (예: "q_food-qna")


DEFAULT_QNA_DOMAINS = [
    KnowledgeBaseDomain(key="covid", label="Covid", intent="q_covid-19-qna"),
    KnowledgeBaseDomain(key="food", label="Food", intent="q_food-qna"),
    KnowledgeBaseDomain(key="housing", label="Housing", intent="q_housing-qna"),
    KnowledgeBaseDomain(key="financial", label="Financial", intent="q_financial-qna"),
]


class QnAEndpointSettings(BaseSettings):
    """도메인별 QnA Maker 엔드포인트 설정

    도메인마다 `_env_prefix`를 달리하여 생성합니다.
    예: QnAEndpointSettings(_env_prefix="FOOD_QNA_") -> FOOD_QNA_KNOWLEDGEBASE_ID
    """

    knowledgebase_id: str | None = Field(default=None, description="지식베이스 ID")
    endpoint_key: str | None = Field(default=None, description="엔드포인트 키")
    endpoint_host_name: str | None = Field(default=None, description="엔드포인트 호스트")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.knowledgebase_id and self.endpoint_key and self.endpoint_host_name)


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 의도 인식(LUIS) 설정
    recognizer_provider: Literal["luis", "dummy"] = Field(
        default="luis", description="의도 인식 제공자 (luis | dummy)"
    )
    luis_app_id: str | None = Field(default=None, description="LUIS 디스패치 앱 ID")
    luis_api_key: str | None = Field(default=None, description="LUIS 엔드포인트 키")
    luis_api_host_name: str | None = Field(
        default=None, description="LUIS 호스트명 (예: westus)"
    )
    luis_timeout: float = Field(default=10.0, description="LUIS 요청 타임아웃 (초)")
    luis_staging: bool = Field(default=False, description="스테이징 슬롯 사용 여부")
    luis_log: bool = Field(default=True, description="LUIS 쿼리 로그 저장 여부")

    # QnA 설정
    qna_provider: Literal["qnamaker", "dummy"] = Field(
        default="qnamaker", description="QnA 제공자 (qnamaker | dummy)"
    )
    qna_domains: list[KnowledgeBaseDomain] = Field(
        default_factory=lambda: list(DEFAULT_QNA_DOMAINS),
        description="QnA 지식베이스 도메인 목록 (JSON)",
    )
    qna_top: int = Field(default=1, ge=1, description="요청할 답변 개수")
    qna_score_threshold: float = Field(
        default=0.3, ge=0.0, le=1.0, description="답변 최소 점수 (0~1)"
    )
    qna_timeout: float = Field(default=10.0, description="QnA 요청 타임아웃 (초)")

    # 메시징 채널(Bot Connector) 설정
    microsoft_app_id: str | None = Field(default=None, description="봇 앱 ID")
    microsoft_app_password: str | None = Field(default=None, description="봇 앱 비밀번호")
    connector_timeout: float = Field(default=10.0, description="응답 전송 타임아웃 (초)")

    # 앱 설정
    app_debug: bool = Field(default=False, description="디버그 모드")
    log_level: str = Field(default="INFO", description="로그 레벨")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# 전역 설정 인스턴스
settings = Settings()


def load_qna_endpoint(domain: KnowledgeBaseDomain) -> QnAEndpointSettings:
    """도메인의 QnA 엔드포인트 설정을 환경변수에서 로드"""
    return QnAEndpointSettings(_env_prefix=f"{domain.key.upper()}_QNA_")


def validate_settings() -> dict[str, str]:
    """설정 유효성 검사 및 경고 메시지 반환"""
    warnings = {}

    # 의도 인식 설정 검증
    if settings.recognizer_provider == "luis":
        missing = [
            name
            for name, value in (
                ("LUIS_APP_ID", settings.luis_app_id),
                ("LUIS_API_KEY", settings.luis_api_key),
                ("LUIS_API_HOST_NAME", settings.luis_api_host_name),
            )
            if not value
        ]
        if missing:
            warnings["luis"] = f"LUIS 사용을 위해서는 {', '.join(missing)} 환경변수가 필요합니다."

    # QnA 설정 검증
    if settings.qna_provider == "qnamaker":
        for domain in settings.qna_domains:
            if not load_qna_endpoint(domain).is_configured:
                prefix = f"{domain.key.upper()}_QNA_"
                warnings[f"qna.{domain.key}"] = (
                    f"{domain.label} 지식베이스 사용을 위해서는 "
                    f"{prefix}KNOWLEDGEBASE_ID, {prefix}ENDPOINT_KEY, "
                    f"{prefix}ENDPOINT_HOST_NAME 환경변수가 필요합니다."
                )

    # 채널 인증 설정 검증
    if bool(settings.microsoft_app_id) != bool(settings.microsoft_app_password):
        warnings["connector"] = (
            "MICROSOFT_APP_ID와 MICROSOFT_APP_PASSWORD는 함께 설정해야 합니다."
        )

    return warnings
