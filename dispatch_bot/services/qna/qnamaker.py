"""QnA Maker 지식베이스 기반 답변 조회"""

import logging
from typing import TYPE_CHECKING, Any

import httpx

from dispatch_bot.settings import QnAEndpointSettings, settings
from dispatch_bot.services.errors import AnswerServiceUnavailable

from .base import BaseQnAService, QueryResult

if TYPE_CHECKING:
    from dispatch_bot.services.dispatch.turn import TurnContext

logger = logging.getLogger(__name__)


def build_qnamaker_host(host: str) -> str:
    """호스트 설정값 정규화

    스킴이 없으면 https://를 붙이고, 끝의 /qnamaker는 제거합니다.
    """
    host = host.strip().rstrip("/")
    if not host.startswith(("http://", "https://")):
        host = f"https://{host}"
    if host.endswith("/qnamaker"):
        host = host[: -len("/qnamaker")]
    return host


class QnAMaker(BaseQnAService):
    """QnA Maker 지식베이스 하나에 연결된 서비스"""

    def __init__(
        self,
        knowledge_base_id: str,
        endpoint_key: str,
        host: str,
        *,
        name: str = "QnAMaker",
        top: int | None = None,
        score_threshold: float | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """QnA Maker 클라이언트 초기화

        Args:
            knowledge_base_id: 지식베이스 ID
            endpoint_key: 엔드포인트 키
            host: 엔드포인트 호스트
            name: 로그/오류 메시지에 쓰는 서비스 이름
            top: 요청할 답변 개수 (None이면 설정값 사용)
            score_threshold: 답변 최소 점수 0~1 (None이면 설정값 사용)
            timeout: 요청 타임아웃 (초)
            client: 재사용할 httpx.AsyncClient (테스트용)
        """
        self.knowledge_base_id = knowledge_base_id
        self.endpoint_key = endpoint_key
        self.host = build_qnamaker_host(host)
        self.name = name
        self.top = top or settings.qna_top
        self.score_threshold = (
            settings.qna_score_threshold if score_threshold is None else score_threshold
        )
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout or settings.qna_timeout)
        )

    @classmethod
    def from_settings(cls, endpoint: QnAEndpointSettings, name: str, **kwargs) -> "QnAMaker":
        return cls(
            knowledge_base_id=endpoint.knowledgebase_id or "",
            endpoint_key=endpoint.endpoint_key or "",
            host=endpoint.endpoint_host_name or "",
            name=name,
            **kwargs,
        )

    @property
    def url(self) -> str:
        return f"{self.host}/qnamaker/knowledgebases/{self.knowledge_base_id}/generateAnswer"

    async def aclose(self):
        await self._client.aclose()

    async def get_answers(self, turn: "TurnContext") -> list[QueryResult]:
        """지식베이스에서 답변 후보 조회

        Args:
            turn: 턴 컨텍스트

        Returns:
            점수 내림차순 QueryResult 리스트

        Raises:
            AnswerServiceUnavailable: 네트워크 오류 또는 인증 실패
        """
        question = (turn.activity.text or "").strip()
        if not question:
            return []

        body = {
            "question": question,
            "top": self.top,
            "scoreThreshold": round(self.score_threshold * 100, 4),
        }
        headers = {"Authorization": f"EndpointKey {self.endpoint_key}"}

        try:
            response = await self._client.post(self.url, json=body, headers=headers)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as http_err:
            logger.error(
                f"{self.name} QnA 호출 실패: status={http_err.response.status_code}, "
                f"kb={self.knowledge_base_id}"
            )
            raise AnswerServiceUnavailable(
                self.name, f"HTTP {http_err.response.status_code}"
            ) from http_err
        except httpx.HTTPError as e:
            logger.error(f"{self.name} QnA 연결 실패: {e!r}")
            raise AnswerServiceUnavailable(self.name, str(e) or type(e).__name__) from e
        except ValueError as e:
            logger.error(f"{self.name} QnA 응답 파싱 실패: {e!r}")
            raise AnswerServiceUnavailable(self.name, "invalid JSON response") from e

        if not isinstance(payload, dict):
            raise AnswerServiceUnavailable(self.name, "unexpected response format")

        return self._format_answers(payload)

    def _format_answers(self, payload: dict[str, Any]) -> list[QueryResult]:
        """응답 점수(0~100)를 0~1로 정규화하고 임계값 이하 답변 제거"""
        results = []
        for item in payload.get("answers") or []:
            score = float(item.get("score") or 0.0) / 100
            if score <= self.score_threshold:
                continue
            results.append(
                QueryResult(
                    answer=item.get("answer", ""),
                    score=score,
                    questions=list(item.get("questions") or []),
                    id=item.get("id"),
                    source=item.get("source"),
                    metadata=list(item.get("metadata") or []),
                )
            )
        results.sort(key=lambda r: r.score, reverse=True)
        return results
