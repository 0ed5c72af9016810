"""
디스패치 봇 HTTP 서버 - 기본 포트 3978
채널에서 Activity를 받아 DispatchBot으로 처리합니다.

엔드포인트:
- POST /api/messages: Activity 수신 (deliveryMode=expectReplies면 답장을 본문으로 반환)
- GET /health: 상태 확인
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from dispatch_bot.models.activity import Activity
from dispatch_bot.services.dispatch import DispatchBot
from dispatch_bot.services.qna import build_knowledge_base_bindings
from dispatch_bot.services.recognition import get_recognizer
from dispatch_bot.services.transport import BotAdapter
from dispatch_bot.settings import settings, validate_settings
from dispatch_bot.utils.runtime import load_server_settings, setup_logging

logger = logging.getLogger(__name__)


def create_bot() -> DispatchBot:
    """설정에 따라 의도 인식 서비스와 QnA 바인딩을 한 번만 생성"""
    for key, message in validate_settings().items():
        logger.warning(f"설정 경고 [{key}]: {message}")
    return DispatchBot(get_recognizer(), build_knowledge_base_bindings())


def create_app(bot: DispatchBot | None = None, adapter: BotAdapter | None = None) -> Starlette:
    """Starlette 앱 생성

    Args:
        bot: 디스패치 봇 (None이면 설정값으로 생성)
        adapter: 봇 어댑터 (None이면 설정값으로 생성)
    """

    @asynccontextmanager
    async def lifespan(app: Starlette):
        app.state.bot = bot or create_bot()
        app.state.adapter = adapter or BotAdapter()
        logger.info("🚀 디스패치 봇 준비 완료")
        yield
        await app.state.adapter.aclose()
        await app.state.bot.aclose()
        logger.info("디스패치 봇 종료")

    async def messages(request: Request) -> Response:
        if "application/json" not in request.headers.get("content-type", ""):
            return Response(status_code=415)

        try:
            activity = Activity.model_validate(await request.json())
        except (ValueError, ValidationError) as e:
            logger.warning(f"잘못된 Activity 수신: {e}")
            return JSONResponse({"error": "invalid activity"}, status_code=400)

        replies = await request.app.state.adapter.process_activity(
            activity, request.app.state.bot.on_turn
        )
        if activity.expects_replies:
            return JSONResponse({"activities": [reply.to_wire() for reply in replies]})
        return Response(status_code=201)

    async def health(_request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok", "server": "DispatchBot"})

    routes = [
        Route("/api/messages", endpoint=messages, methods=["POST"]),
        Route("/health", endpoint=health, methods=["GET"]),
    ]
    return Starlette(debug=settings.app_debug, routes=routes, lifespan=lifespan)


if __name__ == "__main__":
    setup_logging()
    host, port = load_server_settings()
    logger.info(f"🌐 서버 주소: http://{host}:{port}/api/messages")
    uvicorn.run(create_app(), host=host, port=port)
