"""短縮リンク展開用HTTPサーバー（FastAPI）"""
import asyncio
from typing import Any, Iterator, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .features.expander.services.link_expander import LinkExpander
from .infrastructure.config.settings import Settings
from .shared.exceptions.errors import HTTPError, NoRedirectError
from .shared.http.client import HTTPClient
from .shared.logging.config import get_logger, setup_logging

# 設定を読み込み
settings = Settings()

# ロギングを設定
setup_logging(level=settings.log_level)
logger = get_logger(__name__)

app = FastAPI(
    title="Maps URL Expander",
    description="Google Mapsの短縮リンクを1ホップ展開し、座標を抽出するサービス",
    version="1.0.0",
    # 本番環境ではAPIドキュメントを公開しない
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_methods=["GET"],
    allow_headers=["*"],
)


def get_link_expander() -> Iterator[LinkExpander]:
    """リクエストごとにセッションを持たない展開サービスを作成"""
    expander = LinkExpander(
        http_client=HTTPClient(timeout=settings.redirect_fetch_timeout, user_agent=settings.user_agent),
        redirect_timeout=settings.redirect_fetch_timeout,
        html_timeout=settings.html_fetch_timeout,
    )
    try:
        yield expander
    finally:
        expander.close()


@app.on_event("startup")
async def startup_event() -> None:
    """起動時の処理"""
    logger.info("Application starting up")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Project: {settings.project_name}")


@app.on_event("shutdown")
async def shutdown_event() -> None:
    """シャットダウン時の処理"""
    logger.info("Application shutting down")


@app.get("/")
async def root() -> dict[str, Any]:
    """ルートエンドポイント"""
    return {
        "service": "Maps URL Expander",
        "version": "1.0.0",
        "status": "running",
        "environment": settings.environment,
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """ヘルスチェックエンドポイント"""
    return {"status": "healthy"}


@app.get("/expand")
async def expand(
    url: Optional[str] = None,
    expander: LinkExpander = Depends(get_link_expander),
) -> Any:
    """
    短縮リンクを展開

    Args:
        url: 展開する短縮リンク
        expander: 展開サービス

    Returns:
        展開後URLと座標、または座標が見つからない旨のエラー
    """
    if not url:
        return JSONResponse(status_code=400, content={"error": "No URL provided"})

    logger.info(f"Received expand request: {url}")

    try:
        result = await asyncio.to_thread(expander.expand, url)
    except NoRedirectError:
        return JSONResponse(status_code=400, content={"error": "No redirect found"})
    except HTTPError as e:
        logger.warning(f"Failed to expand {url}: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to expand URL"})
    except Exception as e:
        logger.error(f"Unexpected error while expanding {url}: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Failed to expand URL"})

    return result.to_response()


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """グローバル例外ハンドラー"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
