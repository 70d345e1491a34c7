# -*- coding: utf-8 -*-
"""
文件名语法：把目录页上的一行文字解析为 Document。

形如 9700_s20_qp_11.pdf / 9700_w19_er.pdf；一次正则匹配取出全部字段，
不再二次 split，避免校验与提取不一致。
"""
from __future__ import annotations

import re

from .errors import GrammarError, GrammarFailure
from .models import Document, DocumentKind, Season, SubjectCode

LISTING_NAME_RE = re.compile(
    r"^(?P<code>[0-9]+)"
    r"_(?P<season>[A-Za-z])(?P<yy>[0-9]{2})"
    r"_(?P<kind>[A-Za-z]+)"
    r"(?:_(?P<variant>[0-9]*))?"
    r"(?:\..*)?$"
)


def parse_listing_name(text: str) -> Document:
    """解析一行目录文字；失败抛出 GrammarError（由调用方记录并丢弃）。"""
    s = (text or '').strip()
    m = LISTING_NAME_RE.match(s)
    if not m:
        raise GrammarError(GrammarFailure.REGEX_NO_MATCH, s)
    try:
        season = Season.from_tag(m.group('season'))
    except ValueError:
        raise GrammarError(GrammarFailure.INVALID_SEASON, s) from None
    try:
        kind = DocumentKind.from_tag(m.group('kind'))
    except ValueError:
        raise GrammarError(GrammarFailure.INVALID_KIND, s) from None
    # 两位年份一律视为 20xx
    year = '20' + m.group('yy')
    variant = (m.group('variant') or '') if kind.has_variant else ''
    return Document(year=year, season=season, kind=kind, variant=variant)


def canonical_filename(document: Document, subject: SubjectCode) -> str:
    stem = f"{subject.code}_{document.season.tag}{document.short_year}_{document.kind.tag}"
    if document.variant:
        stem = f"{stem}_{document.variant}"
    return f"{stem}.pdf"
