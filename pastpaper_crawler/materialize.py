# -*- coding: utf-8 -*-
"""
本地落盘：{root}/{name} ({code})/{year}/{canonical_filename}

目录创建幂等；写文件直接覆盖，不做原子重命名或校验。
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .grammar import canonical_filename
from .models import Document, SubjectCode


def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def subject_dir(root: Path, subject: SubjectCode) -> Path:
    return root / subject.label


def ensure_layout(root: Path, subject: SubjectCode, years: Iterable[str]) -> Path:
    base = subject_dir(root, subject)
    ensure_dir(base)
    for year in set(years):
        ensure_dir(base / year)
    return base


def target_path(root: Path, subject: SubjectCode, document: Document) -> Path:
    return subject_dir(root, subject) / document.year / canonical_filename(document, subject)


def write(data: bytes, path: Path) -> None:
    with open(path, 'wb') as f:
        f.write(data)


class Materializer:
    def __init__(self, root: Path):
        self.root = Path(root)

    def ensure_layout(self, subject: SubjectCode, years: Iterable[str]) -> Path:
        return ensure_layout(self.root, subject, years)

    def target_path(self, subject: SubjectCode, document: Document) -> Path:
        return target_path(self.root, subject, document)

    def write(self, data: bytes, path: Path) -> None:
        write(data, path)
