"""LUIS 디스패치 모델 기반 의도 인식

LUIS v2 엔드포인트를 verbose 모드로 호출하여 모든 의도 점수와
원본 응답(connectedServiceResult 포함)을 RecognizerResult로 변환합니다.
"""

import logging
from typing import TYPE_CHECKING, Any

import httpx

from dispatch_bot.settings import settings
from dispatch_bot.services.errors import RecognitionUnavailable

from .base import BaseRecognizer, IntentScore, RecognizerResult

if TYPE_CHECKING:
    from dispatch_bot.services.dispatch.turn import TurnContext

logger = logging.getLogger(__name__)


def build_luis_endpoint(host_name: str) -> str:
    """호스트 설정값을 LUIS 엔드포인트 URL로 변환

    "westus" -> "https://westus.api.cognitive.microsoft.com"
    """
    host_name = host_name.strip().rstrip("/")
    if host_name.startswith(("http://", "https://")):
        return host_name
    if "." in host_name:
        return f"https://{host_name}"
    return f"https://{host_name}.api.cognitive.microsoft.com"


def normalize_intent_name(name: str) -> str:
    return name.replace(".", "_").replace(" ", "_")


class LuisRecognizer(BaseRecognizer):
    """LUIS 앱을 사용한 의도 인식 서비스"""

    SERVICE_NAME = "LUIS"

    def __init__(
        self,
        app_id: str | None = None,
        api_key: str | None = None,
        host_name: str | None = None,
        *,
        timeout: float | None = None,
        staging: bool | None = None,
        log: bool | None = None,
        include_instance_data: bool = True,
        client: httpx.AsyncClient | None = None,
    ):
        """LUIS 클라이언트 초기화

        Args:
            app_id: LUIS 앱 ID (None이면 설정값 사용)
            api_key: 엔드포인트 키 (None이면 설정값 사용)
            host_name: 호스트명 또는 엔드포인트 URL (None이면 설정값 사용)
            timeout: 요청 타임아웃 (초)
            staging: 스테이징 슬롯 사용 여부
            log: LUIS 쿼리 로그 저장 여부
            include_instance_data: 엔티티 위치 정보($instance) 포함 여부
            client: 재사용할 httpx.AsyncClient (테스트용)
        """
        self.app_id = app_id or settings.luis_app_id
        self.api_key = api_key or settings.luis_api_key
        self.endpoint = build_luis_endpoint(host_name or settings.luis_api_host_name or "")
        self.staging = settings.luis_staging if staging is None else staging
        self.log = settings.luis_log if log is None else log
        self.include_instance_data = include_instance_data
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout or settings.luis_timeout)
        )

    @property
    def url(self) -> str:
        return f"{self.endpoint}/luis/v2.0/apps/{self.app_id}"

    async def aclose(self):
        await self._client.aclose()

    async def recognize(self, turn: "TurnContext") -> RecognizerResult:
        """턴의 메시지 텍스트를 LUIS로 인식

        Args:
            turn: 턴 컨텍스트

        Returns:
            RecognizerResult 객체

        Raises:
            RecognitionUnavailable: 네트워크 오류 또는 인증 실패
        """
        text = turn.activity.text or ""
        if not text.strip():
            # 빈 메시지는 서비스를 호출하지 않음
            return RecognizerResult(text=text)

        params = {
            "q": text,
            "verbose": "true",
            "log": str(self.log).lower(),
            "staging": str(self.staging).lower(),
        }
        headers = {"Ocp-Apim-Subscription-Key": self.api_key or ""}

        try:
            response = await self._client.get(self.url, params=params, headers=headers)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as http_err:
            logger.error(
                f"LUIS 호출 실패: status={http_err.response.status_code}, app={self.app_id}"
            )
            raise RecognitionUnavailable(
                self.SERVICE_NAME, f"HTTP {http_err.response.status_code}"
            ) from http_err
        except httpx.HTTPError as e:
            logger.error(f"LUIS 연결 실패: {e!r}")
            raise RecognitionUnavailable(self.SERVICE_NAME, str(e) or type(e).__name__) from e
        except ValueError as e:
            logger.error(f"LUIS 응답 파싱 실패: {e!r}")
            raise RecognitionUnavailable(self.SERVICE_NAME, "invalid JSON response") from e

        if not isinstance(payload, dict):
            raise RecognitionUnavailable(self.SERVICE_NAME, "unexpected response format")

        return self._to_result(text, payload)

    def _to_result(self, text: str, payload: dict[str, Any]) -> RecognizerResult:
        """LUIS 응답을 RecognizerResult로 변환"""
        return RecognizerResult(
            text=text,
            altered_text=payload.get("alteredQuery"),
            intents=self._get_intents(payload),
            entities=self._get_entities(payload),
            luis_result=payload,
        )

    @staticmethod
    def _get_intents(payload: dict[str, Any]) -> dict[str, IntentScore]:
        """의도 목록 추출 (응답 순서 유지)

        verbose가 아닌 응답은 intents 없이 topScoringIntent만 포함합니다.
        """
        intents: dict[str, IntentScore] = {}
        raw_intents = payload.get("intents")
        if raw_intents:
            for item in raw_intents:
                name = normalize_intent_name(item.get("intent", ""))
                intents[name] = IntentScore(score=float(item.get("score") or 0.0))
        else:
            top = payload.get("topScoringIntent") or {}
            if top.get("intent"):
                name = normalize_intent_name(top["intent"])
                intents[name] = IntentScore(score=float(top.get("score") or 0.0))
        return intents

    def _get_entities(self, payload: dict[str, Any]) -> dict[str, Any]:
        """엔티티를 유형별로 그룹핑

        {"Weather_Location": ["seattle"], "$instance": {"Weather_Location": [...]}}
        """
        entities: dict[str, Any] = {}
        instances: dict[str, list[dict[str, Any]]] = {}
        for entity in payload.get("entities") or []:
            entity_type = normalize_intent_name(entity.get("type", "entity"))
            entities.setdefault(entity_type, []).append(entity.get("entity"))
            if self.include_instance_data:
                start = entity.get("startIndex")
                end = entity.get("endIndex")
                instances.setdefault(entity_type, []).append(
                    {
                        "startIndex": start,
                        "endIndex": end + 1 if end is not None else None,
                        "text": entity.get("entity"),
                        "score": entity.get("score"),
                    }
                )
        if self.include_instance_data and instances:
            entities["$instance"] = instances
        return entities
