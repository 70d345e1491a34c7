# -*- coding: utf-8 -*-
"""A-Level 真题目录爬虫：发现 -> 展开 -> 并发下载。"""
from __future__ import annotations

from .catalog import CATALOG, find_subject
from .errors import ConfigurationError, DiscoveryError, GrammarError
from .executor import FetchExecutor, WorkerPool, fetch_all, summarize
from .expansion import expand
from .grammar import canonical_filename, parse_listing_name
from .models import (
    Document,
    DocumentKind,
    FetchOutcome,
    PlannedDownload,
    RetrievalTarget,
    Season,
    Selection,
    SubjectCode,
)

__version__ = '1.0.0'

__all__ = [
    'CATALOG',
    'ConfigurationError',
    'DiscoveryError',
    'Document',
    'DocumentKind',
    'FetchExecutor',
    'FetchOutcome',
    'GrammarError',
    'PlannedDownload',
    'RetrievalTarget',
    'Season',
    'Selection',
    'SubjectCode',
    'WorkerPool',
    'canonical_filename',
    'expand',
    'fetch_all',
    'find_subject',
    'parse_listing_name',
    'summarize',
]
