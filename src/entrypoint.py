"""CLIエントリーポイント"""
import argparse
import asyncio
import csv
import sys
from pathlib import Path
from typing import Optional

from tqdm import tqdm

from .features.maps_link.domain.models import (
    Coordinate,
    ExpansionNeeded,
    Resolved,
    ResolutionFailure,
)
from .features.maps_link.services.location_service import MapsLocationService
from .infrastructure.config.settings import Settings
from .shared.logging.config import get_logger, setup_logging

logger = get_logger(__name__)

CSV_COLUMNS = ["input", "status", "latitude", "longitude", "reason"]


def load_links(links: list[str], file_path: Optional[str]) -> list[str]:
    """
    引数とファイルから解決対象のリンクを集める

    Args:
        links: コマンドライン引数のリンク
        file_path: 1行1リンクのファイルパス

    Returns:
        list[str]: 空行を除いたリンクのリスト
    """
    collected = [link for link in links if link.strip()]

    if file_path:
        with open(file_path, encoding="utf-8") as f:
            collected.extend(line.strip() for line in f if line.strip())

    return collected


def to_row(link: str, result: object) -> dict[str, str]:
    """解決結果をCSVの1行に変換"""
    if isinstance(result, Resolved):
        result = result.coordinate

    if isinstance(result, Coordinate):
        latitude, longitude = result.as_display()
        return {"input": link, "status": "resolved", "latitude": latitude, "longitude": longitude, "reason": ""}

    if isinstance(result, ResolutionFailure):
        return {"input": link, "status": "failed", "latitude": "", "longitude": "", "reason": result.reason.value}

    if isinstance(result, ExpansionNeeded):
        return {"input": link, "status": "expansion_needed", "latitude": "", "longitude": "", "reason": ""}

    return {"input": link, "status": "unresolved", "latitude": "", "longitude": "", "reason": "unresolved"}


async def resolve_links(
    service: MapsLocationService,
    links: list[str],
    offline: bool = False,
    show_progress: bool = True,
) -> list[dict[str, str]]:
    """
    複数のリンクを順に解決

    Args:
        service: 座標解決サービス
        links: リンクのリスト
        offline: ネットワークを使わずに解決するか
        show_progress: プログレスバーを表示するか

    Returns:
        list[dict[str, str]]: CSV形式の結果行
    """
    rows = []
    iterator = tqdm(links, desc="Resolving") if show_progress else links

    for link in iterator:
        if offline:
            result: object = service.check(link)
        else:
            result = await service.resolve(link)
        rows.append(to_row(link, result))

    return rows


def write_rows(rows: list[dict[str, str]], output: Optional[str]) -> None:
    """結果をCSVファイルまたは標準出力に書き出す"""
    if output:
        with open(Path(output), "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
            writer.writeheader()
            writer.writerows(rows)
        logger.info(f"Wrote {len(rows)} rows to {output}")
        return

    writer = csv.DictWriter(sys.stdout, fieldnames=CSV_COLUMNS)
    writer.writeheader()
    writer.writerows(rows)


def main(argv: Optional[list[str]] = None) -> int:
    """
    メインエントリーポイント

    Returns:
        int: 終了コード（0: 全件解決, 1: 失敗あり）
    """
    parser = argparse.ArgumentParser(
        description="Google Mapsのリンクや座標文字列から緯度・経度を取得するツール"
    )

    parser.add_argument(
        "links",
        nargs="*",
        help="解決するリンクまたは 'lat,lng' 形式の座標",
    )

    parser.add_argument(
        "--file",
        type=str,
        help="1行1リンクのファイルパス",
    )

    parser.add_argument(
        "--offline",
        action="store_true",
        help="短縮リンクを展開せず、文字列のみから解決する",
    )

    parser.add_argument(
        "--output",
        type=str,
        help="結果を書き出すCSVファイルのパス（省略時は標準出力）",
    )

    parser.add_argument(
        "--env-file",
        type=str,
        default=".env",
        help="環境変数ファイルのパス（デフォルト: .env）",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="ログレベル",
    )

    args = parser.parse_args(argv)

    try:
        settings = Settings(_env_file=args.env_file)

        if args.log_level:
            settings.log_level = args.log_level

        setup_logging(level=settings.log_level)

        links = load_links(args.links, args.file)
        if not links:
            logger.error("No links given")
            return 1

        with MapsLocationService.from_settings(settings) as service:
            rows = asyncio.run(
                resolve_links(service, links, offline=args.offline, show_progress=len(links) > 1)
            )

        write_rows(rows, args.output)

        resolved = sum(1 for row in rows if row["status"] == "resolved")
        logger.info(f"Resolved {resolved}/{len(rows)} links")
        return 0 if resolved == len(rows) else 1

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130  # SIGINT
    except Exception as e:
        logger.error(f"Application failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
