"""カスタム例外定義"""


class MapsLinkError(Exception):
    """地図リンク解決の基底例外"""

    pass


class HTTPError(MapsLinkError):
    """HTTP関連のエラー"""

    pass


class ValidationError(MapsLinkError):
    """バリデーションエラー（座標範囲外など）"""

    pass


class NoRedirectError(MapsLinkError):
    """短縮リンクがLocationヘッダーを返さなかった"""

    pass


class ExpansionServiceError(MapsLinkError):
    """展開サービスに到達できない、またはサーバーエラー"""

    pass


class ConfigurationError(MapsLinkError):
    """設定エラー"""

    pass
