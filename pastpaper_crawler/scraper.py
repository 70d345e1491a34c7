# -*- coding: utf-8 -*-
"""
站点适配：年份发现、文档发现与 PDF 下载。

远程目录约定：
    GET {base}/{catalog_path}                    -> 年份列表（.name 元素）
    GET {base}/{catalog_path}/{year}             -> 文件列表（.name 元素）
    GET {base}/{catalog_path}/{year}/{filename}  -> PDF 文件

HTTP 客户端（requests.Session）由调用方创建并注入，所有任务共享其连接池。
不做重试；失败即上报。
"""
from __future__ import annotations

import logging
from typing import Any, Collection, Dict, List, Tuple

import requests
from bs4 import BeautifulSoup

from .errors import DiscoveryError, DiscoveryFailure, GrammarError, UnexpectedContentType
from .grammar import canonical_filename, parse_listing_name
from .models import Document, DocumentKind, Season, SubjectCode

BASE_URL = 'https://papers.gceguide.cc/a-levels/'
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = 'pastpaper-crawler/1.0'
LISTING_SELECTOR = '.name'


def build_session(user_agent: str = DEFAULT_USER_AGENT) -> requests.Session:
    session = requests.Session()
    session.headers.update({'User-Agent': user_agent, 'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8'})
    return session

# ----------------------------- 目录页解析 -----------------------------

class CatalogScraper:
    def __init__(self, session: requests.Session, base_url: str = BASE_URL, timeout: float = DEFAULT_TIMEOUT):
        self.session = session
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def subject_url(self, subject: SubjectCode) -> str:
        return f"{self.base_url}/{subject.catalog_path}"

    def year_url(self, subject: SubjectCode, year: str) -> str:
        return f"{self.subject_url(subject)}/{year}"

    def document_url(self, subject: SubjectCode, document: Document) -> str:
        return f"{self.year_url(subject, document.year)}/{canonical_filename(document, subject)}"

    def listing_names(self, url: str) -> List[str]:
        """取页面上所有 .name 元素的文字。"""
        logging.debug('Requesting listing: %s', url)
        try:
            r = self.session.get(url, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as e:
            raise DiscoveryError(DiscoveryFailure.NETWORK, f'{url}: {e}') from e
        if r.status_code == 404:
            raise DiscoveryError(DiscoveryFailure.NOT_FOUND, f'{url}: HTTP 404')
        if not 200 <= r.status_code < 300:
            raise DiscoveryError(DiscoveryFailure.NETWORK, f'{url}: HTTP {r.status_code}')
        try:
            soup = BeautifulSoup(r.text, 'lxml')
            return [node.get_text(strip=True) for node in soup.select(LISTING_SELECTOR)]
        except Exception as e:
            raise DiscoveryError(DiscoveryFailure.NETWORK, f'{url}: unparseable response: {e}') from e

    def discover_years(self, subject: SubjectCode) -> List[str]:
        url = self.subject_url(subject)
        logging.info('Requesting years from: %s', url)
        # 长度为 4 即视为年份（粗略判断，非年份标签也可能混入）
        years = [name for name in self.listing_names(url) if len(name) == 4]
        if not years:
            raise DiscoveryError(DiscoveryFailure.NOT_FOUND, f'No years data found for {subject.label}')
        logging.debug('Got years for %s: %s', subject.label, years)
        return years

    def discover_documents(self, subject: SubjectCode, year: str, seasons: Collection[Season],
                           kinds: Collection[DocumentKind]) -> List[Document]:
        """
        列出某科目某年的文档，只保留 kinds 中的类型。
        seasons 不在此处过滤，由调用方（FetchExecutor）处理。
        出错时记录日志并返回空列表，不向上抛出。
        """
        url = self.year_url(subject, year)
        try:
            names = self.listing_names(url)
        except DiscoveryError as e:
            logging.error('Document discovery failed for %s %s: %s', subject.label, year, e)
            return []
        docs: List[Document] = []
        for name in names:
            try:
                doc = parse_listing_name(name)
            except GrammarError as e:
                logging.warning('Skipping listing row for %s %s: %s', subject.label, year, e)
                continue
            if doc.kind not in kinds:
                logging.debug('Skipping unrequested kind: %s', name)
                continue
            docs.append(doc)
        logging.info('Found %d documents for %s %s', len(docs), subject.label, year)
        return docs

# ----------------------------- 下载器 -----------------------------

class Downloader:
    def __init__(self, session: requests.Session, timeout: float = DEFAULT_TIMEOUT, max_size_mb: int = 100):
        self.session = session
        self.timeout = timeout
        self.max_size_mb = max_size_mb

    def get(self, url: str, *, stream: bool = False) -> requests.Response:
        resp = self.session.get(url, timeout=self.timeout, allow_redirects=True, stream=stream)
        try:
            resp.raise_for_status()
        except requests.HTTPError:
            resp.close()
            raise
        return resp

    def download_pdf(self, url: str) -> Tuple[bytes, Dict[str, Any]]:
        resp = self.get(url, stream=True)
        ctype = (resp.headers.get('Content-Type') or '')
        if 'pdf' not in ctype.lower():
            logging.warning('Unexpected Content-Type for %s: %s', url, ctype)
        total = 0
        chunks: List[bytes] = []
        limit = self.max_size_mb * 1024 * 1024
        for chunk in resp.iter_content(chunk_size=65536):
            if chunk:
                chunks.append(chunk)
                total += len(chunk)
                if total > limit:
                    resp.close()
                    raise UnexpectedContentType(f'File too large: > {self.max_size_mb} MB')
        data = b''.join(chunks)
        meta = {
            'status_code': resp.status_code,
            'content_type': ctype,
            'size_bytes': total,
        }
        return data, meta
