"""シフトローテーション計算エンジン

作業員ごとの週次ローテーションと日別の手動上書きから、
週間勤務表ドキュメントを決定的に生成する。
"""

try:
    from importlib.metadata import version

    __version__ = version("floorrota")
except (ImportError, Exception):
    # Fallback for development installs or when package is not installed
    __version__ = "0.1.0"

__all__ = ["__version__"]
