"""서버 실행용 공통 런타임 유틸리티

- setup_logging(): config/logging.yml 로깅 설정을 불러오고, 없으면 기본 로깅으로 대체
- load_server_settings(): 봇 서버 호스트/포트를 환경변수 또는 설정 파일에서 로드
"""
from __future__ import annotations

import logging
import logging.config
import os
from typing import Any, Dict, Tuple

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from dispatch_bot.settings import ROOT_DIR, settings

logger = logging.getLogger(__name__)


def get_project_root() -> str:
    """프로젝트 루트의 절대 경로를 반환합니다(dispatch_bot의 상위 디렉터리)."""
    return str(ROOT_DIR)


def _load_yaml(path: str) -> Dict[str, Any]:
    """YAML 파일을 로드합니다. 파일이 없으면 빈 dict 반환."""
    if not os.path.exists(path):
        return {}
    yaml = YAML(typ="safe")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.load(f) or {}
    return data if isinstance(data, dict) else {}


def setup_logging(config_rel_path: str = os.path.join("config", "logging.yml")) -> None:
    """로깅 설정을 초기화합니다.

    - 프로젝트 루트 기준 `config/logging.yml` 파일이 있으면 이를 로드해 로깅을 구성합니다.
    - 없거나 잘못된 설정이면 settings.log_level 기준 기본 로깅 설정으로 대체합니다.

    Args:
        config_rel_path: 프로젝트 루트 기준 로깅 YAML 파일의 상대 경로.
    """
    cfg_path = os.path.join(get_project_root(), config_rel_path)
    try:
        data = _load_yaml(cfg_path)
        if data:
            logging.config.dictConfig(data)
            return
    except (OSError, ValueError, YAMLError) as e:
        logging.basicConfig(level=settings.log_level.upper(), format='%(asctime)s - %(levelname)s - %(message)s')
        logger.warning(f"로깅 설정 파일 로드 실패, 기본 설정 사용: {cfg_path} ({e})")
        return
    logging.basicConfig(level=settings.log_level.upper(), format='%(asctime)s - %(levelname)s - %(message)s')


def load_server_settings(default_port: int = 3978, default_host: str = "127.0.0.1") -> Tuple[str, int]:
    """봇 서버의 호스트/포트를 환경변수 또는 설정 파일에서 로드합니다.

    우선순위(높음 → 낮음):
    1) 환경변수: BOT_HOST, BOT_PORT
    2) 설정 파일: config/runtime.yml 의 server.host, server.port
    3) 함수 인자의 기본값(default_host, default_port)

    Args:
        default_port: 포트 기본값
        default_host: 호스트 기본값

    Returns:
        (host, port)

    Raises:
        ValueError: 포트 값이 정수가 아닌 경우
    """
    cfg_path = os.path.join(get_project_root(), "config", "runtime.yml")
    data = _load_yaml(cfg_path)

    server = data.get("server") or {}
    file_host = server.get("host") if isinstance(server, dict) else None
    file_port = server.get("port") if isinstance(server, dict) else None

    host = os.getenv("BOT_HOST") or file_host or default_host
    env_port = os.getenv("BOT_PORT")
    port = int(env_port) if env_port is not None else int(file_port) if file_port is not None else int(default_port)

    return host, port
