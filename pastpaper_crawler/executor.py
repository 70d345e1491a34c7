# -*- coding: utf-8 -*-
"""
并发执行：固定大小线程池，先发现文档、再下载落盘。

- 年份发现、文档发现、下载三个阶段共用同一个 WorkerPool，同时在途任务数不超过 max_workers
- 每个任务独立：单个失败只记录在它自己的结果里，不取消、不阻塞其他任务
- 每个阶段结束前阻塞等待全部任务完成；结果顺序不保证与输入一致
"""
from __future__ import annotations

import logging
from collections import OrderedDict
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Generic, Iterable, List, Optional, Sequence, TypeVar

import requests

from .errors import ConfigurationError, UnexpectedContentType
from .materialize import Materializer
from .models import (
    ErrorKind,
    FetchOutcome,
    PlannedDownload,
    RetrievalTarget,
    RunStats,
    SubjectCode,
)
from .scraper import CatalogScraper, Downloader

T = TypeVar('T')
R = TypeVar('R')

DEFAULT_THREADS = 4


@dataclass
class TaskResult(Generic[T, R]):
    item: T
    value: Optional[R] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

# ----------------------------- 线程池 -----------------------------

class WorkerPool:
    """
    固定大小的线程池，所有阶段共用。

    用法:
        with WorkerPool(4) as pool:
            results = pool.run(fn, items)
    """

    def __init__(self, max_workers: int = DEFAULT_THREADS):
        if max_workers < 1:
            raise ConfigurationError(f'Concurrency limit must be at least 1, got {max_workers}')
        self.max_workers = max_workers
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='pastpaper')

    def run(self, fn: Callable[[T], R], items: Iterable[T]) -> List[TaskResult[T, R]]:
        """对每个 item 执行 fn，阻塞直到全部结束；异常记录在对应的 TaskResult 中。"""
        futures = {self._executor.submit(fn, item): item for item in items}
        results: List[TaskResult[T, R]] = []
        for future in as_completed(futures):
            item = futures[future]
            try:
                results.append(TaskResult(item, value=future.result()))
            except Exception as e:
                results.append(TaskResult(item, error=e))
        return results

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> 'WorkerPool':
        return self

    def __exit__(self, *args) -> None:
        self.shutdown()

# ----------------------------- 错误分类 -----------------------------

def classify_error(exc: BaseException) -> ErrorKind:
    if isinstance(exc, requests.HTTPError):
        return ErrorKind.HTTP_STATUS
    if isinstance(exc, UnexpectedContentType):
        return ErrorKind.CONTENT
    if isinstance(exc, requests.RequestException):
        return ErrorKind.NETWORK
    if isinstance(exc, OSError):
        return ErrorKind.WRITE
    return ErrorKind.NETWORK


def _failed(plan: PlannedDownload, path: Path, exc: BaseException) -> FetchOutcome:
    return FetchOutcome(plan.subject, plan.document, path, ok=False,
                        error_kind=classify_error(exc), message=str(exc))

# ----------------------------- 执行器 -----------------------------

class FetchExecutor:
    def __init__(self, scraper: CatalogScraper, downloader: Downloader, materializer: Materializer, pool: WorkerPool):
        self.scraper = scraper
        self.downloader = downloader
        self.materializer = materializer
        self.pool = pool

    def _discover_one(self, target: RetrievalTarget) -> List[PlannedDownload]:
        docs = self.scraper.discover_documents(target.subject, target.year, target.seasons, target.kinds)
        # 考季过滤放在发现之后
        return [PlannedDownload(target.subject, d) for d in docs if d.season in target.seasons]

    def discover_all(self, targets: Sequence[RetrievalTarget]) -> List[PlannedDownload]:
        planned: List[PlannedDownload] = []
        for result in self.pool.run(self._discover_one, targets):
            if result.ok:
                planned.extend(result.value or [])
            else:
                logging.error('Document discovery failed for %s %s: %s',
                              result.item.subject.label, result.item.year, result.error)
        logging.info('Discovery done: %d targets -> %d documents', len(targets), len(planned))
        return planned

    def _download_one(self, plan: PlannedDownload) -> FetchOutcome:
        url = self.scraper.document_url(plan.subject, plan.document)
        path = self.materializer.target_path(plan.subject, plan.document)
        data, meta = self.downloader.download_pdf(url)
        self.materializer.write(data, path)
        logging.info('SUCCESS %s → %s', url, path)
        return FetchOutcome(plan.subject, plan.document, path, ok=True, size_bytes=meta['size_bytes'])

    def _prepare_layout(self, planned: Sequence[PlannedDownload]) -> List[FetchOutcome]:
        """下载开始前建好目录；某科目目录建不起来时，其文档全部记为失败。"""
        by_subject: Dict[SubjectCode, List[PlannedDownload]] = OrderedDict()
        for plan in planned:
            by_subject.setdefault(plan.subject, []).append(plan)
        failures: List[FetchOutcome] = []
        for subject, plans in by_subject.items():
            try:
                self.materializer.ensure_layout(subject, {p.document.year for p in plans})
            except OSError as e:
                logging.error('Failed to create folders for %s: %s', subject.label, e)
                failures.extend(_failed(p, self.materializer.target_path(p.subject, p.document), e) for p in plans)
        return failures

    def _unique_destinations(self, planned: Sequence[PlannedDownload]) -> List[PlannedDownload]:
        """每个目标路径只保留第一个下载项（同名科目、重复年份会映射到同一文件）。"""
        seen: Dict[Path, PlannedDownload] = {}
        for plan in planned:
            path = self.materializer.target_path(plan.subject, plan.document)
            if path in seen:
                logging.warning('Skipping duplicate destination %s (%s already planned from %s)',
                                path, path.name, seen[path].subject.catalog_path)
                continue
            seen[path] = plan
        return list(seen.values())

    def download_all(self, planned: Sequence[PlannedDownload]) -> List[FetchOutcome]:
        planned = self._unique_destinations(planned)
        outcomes = self._prepare_layout(planned)
        skipped = {(o.subject, o.document) for o in outcomes}
        runnable = [p for p in planned if (p.subject, p.document) not in skipped]
        for result in self.pool.run(self._download_one, runnable):
            if result.ok:
                outcomes.append(result.value)
                continue
            plan = result.item
            outcome = _failed(plan, self.materializer.target_path(plan.subject, plan.document), result.error)
            logging.error('FAILED %s [%s]: %s', outcome.path.name, outcome.error_kind.value, result.error)
            outcomes.append(outcome)
        return outcomes

    def fetch_all(self, targets: Sequence[RetrievalTarget]) -> List[FetchOutcome]:
        return self.download_all(self.discover_all(targets))


def fetch_all(targets: Sequence[RetrievalTarget], concurrency_limit: int, *, session: requests.Session,
              output_dir: Path, base_url: Optional[str] = None) -> List[FetchOutcome]:
    """便捷入口：建好线程池与各组件后执行完整的发现+下载流程。"""
    scraper = CatalogScraper(session, base_url) if base_url else CatalogScraper(session)
    with WorkerPool(concurrency_limit) as pool:
        executor = FetchExecutor(scraper, Downloader(session), Materializer(output_dir), pool)
        return executor.fetch_all(targets)


def summarize(outcomes: Iterable[FetchOutcome]) -> RunStats:
    stats = RunStats()
    for o in outcomes:
        stats.total += 1
        if o.ok:
            stats.success += 1
        else:
            stats.failed += 1
            stats.failures.append(o)
    return stats
