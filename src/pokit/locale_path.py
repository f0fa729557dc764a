"""インストール済みの翻訳ファイル（.mo）の検索

テキストドメイン名と言語タグから、存在する .mo ファイルのパスを探します。
"""

from __future__ import annotations

import os
import re
import sys
from typing import List, Optional

# {lang} と {name} を含むパスのテンプレート（%{lang} 形式も可）
DEFAULT_RULES: List[str] = []
for _rule in (
    f"{sys.prefix}/share/locale/{{lang}}/LC_MESSAGES/{{name}}.mo",
    f"{sys.base_prefix}/share/locale/{{lang}}/LC_MESSAGES/{{name}}.mo",
    "/usr/share/locale/{lang}/LC_MESSAGES/{name}.mo",
    "/usr/local/share/locale/{lang}/LC_MESSAGES/{name}.mo",
):
    if _rule not in DEFAULT_RULES:
        DEFAULT_RULES.append(_rule)

LANGUAGE_TAG_PATTERN = re.compile(
    r"^(?P<language>[A-Za-z]{2,8})"
    r"(?:[-_](?P<region>[A-Za-z]{2}|[0-9]{3}))?"
    r"(?:\.(?P<charset>[\w-]+))?"
    r"(?:@(?P<modifier>\w+))?$"
)


def normalize_rule(rule: str) -> str:
    """``%{lang}`` / ``%{name}`` 形式のプレースホルダーを ``{lang}`` / ``{name}`` に揃えます。"""
    return rule.replace("%{lang}", "{lang}").replace("%{name}", "{name}")


def add_default_rule(rule: str) -> None:
    """既定の検索ルールの先頭にルールを追加します。

    Note:
        ``/foo/%{lang}/%{name}.mo`` と ``/foo/{lang}/{name}.mo`` はどちらも使えます。
    """
    DEFAULT_RULES.insert(0, normalize_rule(rule))


def candidate_languages(tag: str) -> List[str]:
    """言語タグから検索に使う言語名の候補を詳しい順に返します。

    Note:
        ``ja-JP.UTF-8`` は ``ja_JP.UTF-8``、``ja_JP``、``ja`` の順に試します。
    """
    match = LANGUAGE_TAG_PATTERN.match(tag.strip())
    if match is None:
        return [tag]

    language = match.group("language").lower()
    region = match.group("region")
    charset = match.group("charset")
    modifier = match.group("modifier")

    base = f"{language}_{region.upper()}" if region else language
    candidates = []
    if charset and modifier:
        candidates.append(f"{base}.{charset}@{modifier}")
    if modifier:
        candidates.append(f"{base}@{modifier}")
    if charset:
        candidates.append(f"{base}.{charset}")
    candidates.append(base)
    if region:
        candidates.append(language)
    return candidates


class LocalePath:
    """テキストドメインの .mo ファイルを検索するクラス

    Args:
        name: テキストドメイン名
        topdir: 検索するディレクトリ。指定しない場合は DEFAULT_RULES を使用
    """

    def __init__(self, name: str, topdir: Optional[str] = None) -> None:
        self.name = name
        if topdir is None:
            self.locale_paths = [
                normalize_rule(rule).replace("{name}", name) for rule in DEFAULT_RULES
            ]
        else:
            self.locale_paths = [
                f"{topdir}/{{lang}}/LC_MESSAGES/{name}.mo",
                f"{topdir}/{{lang}}/{name}.mo",
            ]

    def current_path(self, tag: str) -> Optional[str]:
        """言語タグに一致する最初の存在するファイルのパスを返します。"""
        for lang in candidate_languages(tag):
            for template in self.locale_paths:
                path = template.replace("{lang}", lang)
                if os.path.exists(path):
                    return path
        return None
