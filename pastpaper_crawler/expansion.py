# -*- coding: utf-8 -*-
"""
目标展开：把用户的（可能不完整的）选择展开成 (科目, 年份) 检索目标。

- 科目未指定 -> 全部科目；指定但匹配不到 -> ConfigurationError（不发任何请求）
- 年份未指定 -> 每个科目在线程池中各做一次年份发现；失败或为空的科目被丢弃
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence

from .catalog import CATALOG, find_subject
from .errors import ConfigurationError
from .executor import WorkerPool
from .models import RetrievalTarget, Selection, SubjectCode
from .scraper import CatalogScraper


def resolve_subjects(selection: Selection, catalog: Sequence[SubjectCode] = CATALOG) -> List[SubjectCode]:
    if selection.subjects is None:
        subjects = list(catalog)
    else:
        subjects = []
        for query in selection.subjects:
            subject = find_subject(query, catalog)
            if subject is None:
                raise ConfigurationError(f'Subject {query!r} not found in syllabus codes.')
            if subject not in subjects:
                subjects.append(subject)
    if not subjects:
        raise ConfigurationError('No subjects resolved from selection.')
    return subjects


def _unique(years: Iterable[str]) -> List[str]:
    # 去重并保持原顺序
    return list(dict.fromkeys(years))


def _validate(selection: Selection) -> None:
    if selection.kinds is not None and not selection.kinds:
        raise ConfigurationError('At least one document kind must be requested.')
    if selection.seasons is not None and not selection.seasons:
        raise ConfigurationError('At least one season must be requested.')


def resolve_years(subjects: Iterable[SubjectCode], scraper: CatalogScraper, pool: WorkerPool) -> Dict[SubjectCode, List[str]]:
    subjects = list(subjects)
    found: Dict[SubjectCode, List[str]] = {}
    for result in pool.run(scraper.discover_years, subjects):
        if result.ok and result.value:
            found[result.item] = _unique(result.value)
        else:
            logging.error('Failed to get years for subject %s: %s', result.item.label, result.error or 'no years')
    # 线程池完成顺序不定，这里按科目原顺序返回
    return {s: found[s] for s in subjects if s in found}


def expand(selection: Selection, scraper: CatalogScraper, pool: WorkerPool,
           catalog: Sequence[SubjectCode] = CATALOG) -> List[RetrievalTarget]:
    _validate(selection)
    subjects = resolve_subjects(selection, catalog)
    seasons = selection.resolved_seasons()
    kinds = selection.resolved_kinds()

    if selection.years is not None:
        years_by_subject = {s: _unique(selection.years) for s in subjects}
    else:
        years_by_subject = resolve_years(subjects, scraper, pool)

    targets = [
        RetrievalTarget(subject=subject, year=year, seasons=seasons, kinds=kinds)
        for subject, years in years_by_subject.items()
        for year in years
    ]
    logging.info('Expanded selection to %d subjects, %d targets', len(years_by_subject), len(targets))
    return targets
