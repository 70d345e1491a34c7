# -*- coding: utf-8 -*-
"""
数据类：科目、考季、文档类型、文档与检索目标。

所有值对象均为不可变（frozen），可以在线程间安全共享。
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Optional, Sequence


class Season(enum.Enum):
    MARCH = 'm'
    SUMMER = 's'
    WINTER = 'w'

    @property
    def tag(self) -> str:
        return self.value

    @classmethod
    def from_tag(cls, tag: str) -> 'Season':
        return cls(tag.lower())


class DocumentKind(enum.Enum):
    QUESTION_PAPER = 'qp'
    MARK_SCHEME = 'ms'
    EXAMINER_REPORT = 'er'
    INSERT = 'in'
    GRADE_THRESHOLDS = 'gt'
    INSTRUCTIONS = 'ir'
    CONFIDENTIAL_INSTRUCTIONS = 'ci'

    @property
    def tag(self) -> str:
        return self.value

    @property
    def has_variant(self) -> bool:
        # 考官报告与分数线按考季整体发布，不区分卷别
        return self not in (DocumentKind.EXAMINER_REPORT, DocumentKind.GRADE_THRESHOLDS)

    @classmethod
    def from_tag(cls, tag: str) -> 'DocumentKind':
        return cls(tag.lower())


@dataclass(frozen=True)
class SubjectCode:
    name: str
    code: str
    catalog_path: str

    @property
    def label(self) -> str:
        return f"{self.name} ({self.code})"


@dataclass(frozen=True)
class Document:
    year: str
    season: Season
    kind: DocumentKind
    variant: str = ''

    @property
    def short_year(self) -> str:
        return self.year[-2:]


@dataclass(frozen=True)
class RetrievalTarget:
    subject: SubjectCode
    year: str
    seasons: FrozenSet[Season]
    kinds: FrozenSet[DocumentKind]


@dataclass(frozen=True)
class Selection:
    """用户选择；None 表示“全部”（年份则表示“远程发现”）。"""
    subjects: Optional[Sequence[str]] = None
    years: Optional[Sequence[str]] = None
    seasons: Optional[FrozenSet[Season]] = None
    kinds: Optional[FrozenSet[DocumentKind]] = None

    def resolved_seasons(self) -> FrozenSet[Season]:
        return frozenset(Season) if self.seasons is None else frozenset(self.seasons)

    def resolved_kinds(self) -> FrozenSet[DocumentKind]:
        return frozenset(DocumentKind) if self.kinds is None else frozenset(self.kinds)


@dataclass(frozen=True)
class PlannedDownload:
    subject: SubjectCode
    document: Document


class ErrorKind(enum.Enum):
    NETWORK = 'network'
    HTTP_STATUS = 'http_status'
    CONTENT = 'content'
    WRITE = 'write'


@dataclass
class FetchOutcome:
    subject: SubjectCode
    document: Document
    path: Path
    ok: bool
    error_kind: Optional[ErrorKind] = None
    message: str = ''
    size_bytes: int = 0


@dataclass
class RunStats:
    total: int = 0
    success: int = 0
    failed: int = 0
    failures: list = field(default_factory=list)
