"""設定モジュール

このモジュールは、ツールの設定を管理します。
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pokit.header import HeaderOptions

logger = logging.getLogger(__name__)

# デフォルト設定
DEFAULT_CONFIG: Dict[str, Any] = {
    # POファイル読み込み時の fuzzy エントリの扱い
    "parser": {
        "ignore_fuzzy": True,
        "report_warning": True,
    },
    # POTファイルのヘッダー
    "header": {
        "package_name": "PACKAGE",
        "package_version": "VERSION",
        "msgid_bugs_address": "",
        "copyright_holder": "THE PACKAGE'S COPYRIGHT HOLDER",
        "to_code": "UTF-8",
    },
    # 文字列の抽出
    "xgettext": {
        # マジックコメントのないファイルのエンコーディング
        "from_code": "utf-8",
    },
    # 出力（0 は折り返しなし）
    "writer": {
        "width": 0,
    },
    "logging": {
        "level": "WARNING",
    },
}


class Config:
    """設定クラス"""

    def __init__(self, config_path: Optional[Path] = None):
        """初期化

        Args:
            config_path: 設定ファイルのパス。指定しない場合はユーザーの設定ディレクトリを使用
        """
        self._config = copy.deepcopy(DEFAULT_CONFIG)
        self._config_path = Path(config_path) if config_path else self._get_config_path()
        self._load_config()

    @property
    def path(self) -> Path:
        return self._config_path

    def _get_config_path(self) -> Path:
        """設定ファイルのパスを取得"""
        # ユーザーのホームディレクトリ
        home_dir = Path.home()

        # プラットフォームに応じた設定ディレクトリ
        if os.name == "nt":  # Windows
            config_dir = home_dir / "AppData" / "Roaming" / "pokit"
        else:  # macOS, Linux
            config_dir = home_dir / ".config" / "pokit"

        return config_dir / "config.json"

    def _load_config(self) -> None:
        """設定ファイルを読み込む"""
        if not self._config_path.exists():
            logger.debug(
                f"設定ファイルが見つかりません。デフォルト設定を使用します: {self._config_path}"
            )
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                loaded_config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"設定ファイルの読み込みに失敗しました: {e}")
            return

        # 読み込んだ設定をデフォルト設定にマージ
        self._merge_config(self._config, loaded_config)
        logger.info(f"設定ファイルを読み込みました: {self._config_path}")

    def _save_config(self) -> None:
        """設定ファイルを保存する"""
        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._config_path, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=4, ensure_ascii=False)

            logger.info(f"設定ファイルを保存しました: {self._config_path}")
        except OSError as e:
            logger.error(f"設定ファイルの保存に失敗しました: {e}")

    def _merge_config(self, target: Dict[str, Any], source: Dict[str, Any]) -> None:
        """設定を再帰的にマージする

        Args:
            target: マージ先の辞書
            source: マージ元の辞書
        """
        for key, value in source.items():
            if (
                key in target
                and isinstance(target[key], dict)
                and isinstance(value, dict)
            ):
                # 両方が辞書の場合は再帰的にマージ
                self._merge_config(target[key], value)
            else:
                # それ以外の場合は上書き
                target[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """設定値を取得する

        Args:
            key: 設定キー（ドット区切りで階層指定可能）
            default: デフォルト値

        Returns:
            設定値
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """設定値を設定する

        Args:
            key: 設定キー（ドット区切りで階層指定可能）
            value: 設定値
        """
        keys = key.split(".")
        target = self._config

        # 最後のキー以外を処理
        for k in keys[:-1]:
            if k not in target:
                target[k] = {}
            target = target[k]

        # 最後のキーを設定
        target[keys[-1]] = value

        # 設定を保存
        self._save_config()

    def header_options(self, **overrides: Any) -> HeaderOptions:
        """ヘッダーのオプションを作成する

        Args:
            overrides: 設定値より優先する値（None は無視）
        """
        values = dict(self.get("header", {}))
        values.update({k: v for k, v in overrides.items() if v is not None})
        return HeaderOptions.model_validate(values)


# シングルトンインスタンス
_config_instance = None


def get_config() -> Config:
    """設定インスタンスを取得する

    Returns:
        Config: 設定インスタンス
    """
    global _config_instance

    if _config_instance is None:
        _config_instance = Config()

    return _config_instance
