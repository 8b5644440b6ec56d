#!/usr/bin/env python3
"""ローカル開発用の展開サービス起動スクリプト"""
import argparse
import sys
from pathlib import Path

# プロジェクトルートをPythonパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn

from src.infrastructure.config.settings import Settings
from src.shared.logging.config import setup_logging, get_logger


def main():
    """メイン関数"""
    parser = argparse.ArgumentParser(
        description="Google Maps短縮リンク展開サービス（ローカル開発用）"
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        help="ポート番号（デフォルト: 設定値 3001）",
    )
    parser.add_argument(
        "--debug",
        "-d",
        action="store_true",
        help="デバッグモードで実行（コード変更時に自動リロード）",
    )

    args = parser.parse_args()

    settings = Settings()

    log_level = "DEBUG" if args.debug else settings.log_level
    setup_logging(level=log_level)
    logger = get_logger(__name__)

    port = args.port or settings.port

    logger.info("=" * 80)
    logger.info("Maps URL Expander (local development)")
    logger.info("=" * 80)
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Listening on: http://{settings.host}:{port}/expand?url=...")
    logger.info(f"CORS origins: {settings.get_cors_origins()}")
    logger.info(f"Debug Mode: {args.debug}")
    logger.info("=" * 80)

    try:
        uvicorn.run(
            "src.server:app",
            host=settings.host,
            port=port,
            reload=args.debug,
            log_level=log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.warning("Expander interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
