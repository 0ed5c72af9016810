"""Bot Connector REST 클라이언트

채널의 serviceUrl로 답장 Activity를 전송합니다.
앱 ID/비밀번호가 설정되어 있으면 client credentials 방식으로
토큰을 발급받아 만료 직전까지 재사용합니다.
"""

import logging
import time

import httpx

from dispatch_bot.models.activity import Activity, ResourceResponse
from dispatch_bot.settings import settings

logger = logging.getLogger(__name__)

TOKEN_URL = "https://login.microsoftonline.com/botframework.com/oauth2/v2.0/token"
TOKEN_SCOPE = "https://api.botframework.com/.default"
TOKEN_REFRESH_MARGIN = 300.0  # 만료 5분 전 갱신


class ConnectorClient:
    """Bot Connector 응답 전송 클라이언트"""

    def __init__(
        self,
        app_id: str | None = None,
        app_password: str | None = None,
        *,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Args:
            app_id: 봇 앱 ID (None이면 설정값 사용)
            app_password: 봇 앱 비밀번호 (None이면 설정값 사용)
            timeout: 요청 타임아웃 (초)
            client: 재사용할 httpx.AsyncClient (테스트용)
        """
        self.app_id = app_id or settings.microsoft_app_id
        self.app_password = app_password or settings.microsoft_app_password
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout or settings.connector_timeout)
        )
        self._token: str | None = None
        self._token_expires_at = 0.0

    @property
    def requires_auth(self) -> bool:
        return bool(self.app_id and self.app_password)

    async def aclose(self):
        await self._client.aclose()

    async def get_token(self) -> str | None:
        """채널 인증 토큰 반환 (인증 미설정 시 None)"""
        if not self.requires_auth:
            return None
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token

        response = await self._client.post(
            TOKEN_URL,
            data={
                "grant_type": "client_credentials",
                "client_id": self.app_id,
                "client_secret": self.app_password,
                "scope": TOKEN_SCOPE,
            },
        )
        response.raise_for_status()
        payload = response.json()

        self._token = payload["access_token"]
        expires_in = float(payload.get("expires_in", 3600))
        self._token_expires_at = time.monotonic() + max(0.0, expires_in - TOKEN_REFRESH_MARGIN)
        logger.info("채널 인증 토큰 발급 완료")
        return self._token

    async def reply_to_activity(self, activity: Activity) -> ResourceResponse:
        """답장 Activity 전송

        Args:
            activity: 답장 Activity (service_url, conversation 필수)

        Returns:
            ResourceResponse 객체

        Raises:
            ValueError: serviceUrl 또는 conversation이 없는 경우
            httpx.HTTPError: 전송 실패 시
        """
        if not activity.service_url or activity.conversation is None:
            raise ValueError("답장 전송에는 serviceUrl과 conversation이 필요합니다.")

        base = activity.service_url.rstrip("/")
        conversation_id = activity.conversation.id
        if activity.reply_to_id:
            url = f"{base}/v3/conversations/{conversation_id}/activities/{activity.reply_to_id}"
        else:
            url = f"{base}/v3/conversations/{conversation_id}/activities"

        headers = {}
        token = await self.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        response = await self._client.post(url, json=activity.to_wire(), headers=headers)
        response.raise_for_status()
        if not response.content:
            return ResourceResponse()
        return ResourceResponse.model_validate(response.json())
