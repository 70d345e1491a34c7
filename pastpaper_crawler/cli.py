# -*- coding: utf-8 -*-
"""
命令行入口。

用法
    python crawler.py generate-config -s Biology -y 2020 -k qp ms -o config.json
    python crawler.py download -c config.json -o "Past Papers"
    python crawler.py run -s 9700 --seasons s w -o "Past Papers"
    python crawler.py list-subjects

分两步（generate-config 再 download）或一步（run）均可。
配置错误在发出任何网络请求之前即以非零状态退出。
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .catalog import CATALOG, iter_subjects
from .configuration import build_configuration, load_configuration, save_configuration
from .errors import ConfigurationError
from .executor import DEFAULT_THREADS, FetchExecutor, WorkerPool, summarize
from .expansion import expand
from .materialize import Materializer
from .models import DocumentKind, FetchOutcome, Season, Selection
from .scraper import BASE_URL, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, CatalogScraper, Downloader, build_session

DEFAULT_CONFIG = 'config.json'
DEFAULT_OUTPUT = 'Past Papers'

EXIT_OK = 0
EXIT_ITEMS_FAILED = 1
EXIT_CONFIG_ERROR = 2


def init_logger(verbose: int = 0, log_file: Optional[Path] = None) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    logging.basicConfig(
        level=logging.DEBUG if verbose > 0 else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s %(message)s',
        handlers=handlers,
    )
    # requests/urllib3 的连接日志只在 -vv 时输出
    if verbose < 2:
        logging.getLogger('urllib3').setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog='pastpaper-crawler', description='下载 A-Level 历年真题、评分标准与考官报告')
    ap.add_argument('-t', '--threads', type=int, default=DEFAULT_THREADS, help='并发数（同时在途的请求上限）')
    ap.add_argument('-v', '--verbose', action='count', default=0, help='-v 输出 DEBUG；-vv 连同 urllib3')
    ap.add_argument('--base-url', type=str, default=BASE_URL)
    ap.add_argument('--user-agent', type=str, default=DEFAULT_USER_AGENT)
    ap.add_argument('--timeout', type=float, default=DEFAULT_TIMEOUT, help='单次请求超时（秒）')
    ap.add_argument('--log-file', type=Path, default=None)

    sub = ap.add_subparsers(dest='command', required=True)

    def add_selection(p: argparse.ArgumentParser) -> None:
        p.add_argument('-s', '--subjects', nargs='+', default=None, help='科目名称前缀或考试代码；缺省为全部科目')
        p.add_argument('-y', '--years', nargs='+', default=None, help='四位年份；缺省则从站点发现')
        p.add_argument('--seasons', nargs='+', default=None, choices=[s.tag for s in Season], help='m/s/w；缺省为全部')
        p.add_argument('-k', '--kinds', nargs='+', default=None, choices=[k.tag for k in DocumentKind], help='文档类型；缺省为全部')

    gen = sub.add_parser('generate-config', help='生成包含全部下载项的配置文件')
    add_selection(gen)
    gen.add_argument('-o', '--output', type=Path, default=Path(DEFAULT_CONFIG))

    dl = sub.add_parser('download', help='按配置文件下载')
    dl.add_argument('-c', '--config', type=Path, default=Path(DEFAULT_CONFIG))
    dl.add_argument('-o', '--output', type=Path, default=Path(DEFAULT_OUTPUT), help='输出目录（不存在则创建）')

    run = sub.add_parser('run', help='发现并下载（一步完成）')
    add_selection(run)
    run.add_argument('-o', '--output', type=Path, default=Path(DEFAULT_OUTPUT))

    sub.add_parser('list-subjects', help='列出支持的科目')
    return ap


def selection_from_args(args: argparse.Namespace) -> Selection:
    return Selection(
        subjects=args.subjects,
        years=args.years,
        seasons=None if args.seasons is None else frozenset(Season.from_tag(s) for s in args.seasons),
        kinds=None if args.kinds is None else frozenset(DocumentKind.from_tag(k) for k in args.kinds),
    )


def report(outcomes: List[FetchOutcome]) -> int:
    stats = summarize(outcomes)
    if stats.failed:
        logging.warning('Failed documents: %s', ', '.join(sorted(o.path.name for o in stats.failures)))
    logging.info('RUN DONE: total=%d success=%d failed=%d', stats.total, stats.success, stats.failed)
    return EXIT_ITEMS_FAILED if stats.failed else EXIT_OK


def cmd_list_subjects() -> int:
    for subject in iter_subjects(CATALOG):
        print(f"{subject.code}\t{subject.name}\t{subject.catalog_path}")
    return EXIT_OK


def cmd_generate(args: argparse.Namespace, pool: WorkerPool, executor: FetchExecutor) -> int:
    selection = selection_from_args(args)
    logging.info('Generating configuration file at %s', args.output)
    targets = expand(selection, executor.scraper, pool)
    planned = executor.discover_all(targets)
    config = build_configuration(selection.resolved_kinds(), selection.resolved_seasons(), targets, planned)
    save_configuration(args.output, config)
    logging.info('Configuration file generated: %d subjects, %d documents', len(config.subjects), len(planned))
    return EXIT_OK


def cmd_download(args: argparse.Namespace, executor: FetchExecutor) -> int:
    config = load_configuration(args.config)
    planned = config.planned_downloads()
    logging.info('Downloading %d documents for %d subjects into %s', len(planned), len(config.subjects), args.output)
    return report(executor.download_all(planned))


def cmd_run(args: argparse.Namespace, pool: WorkerPool, executor: FetchExecutor) -> int:
    targets = expand(selection_from_args(args), executor.scraper, pool)
    return report(executor.fetch_all(targets))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    init_logger(args.verbose, args.log_file)
    logging.debug('Arguments: %s', args)

    if args.command == 'list-subjects':
        return cmd_list_subjects()

    session = build_session(args.user_agent)
    try:
        with WorkerPool(args.threads) as pool:
            # generate-config 的 -o 是配置文件路径，不落盘 PDF
            root = args.output if args.command in ('download', 'run') else Path(DEFAULT_OUTPUT)
            executor = FetchExecutor(
                CatalogScraper(session, args.base_url, timeout=args.timeout),
                Downloader(session, timeout=args.timeout),
                Materializer(root),
                pool,
            )
            if args.command == 'generate-config':
                return cmd_generate(args, pool, executor)
            if args.command == 'download':
                return cmd_download(args, executor)
            return cmd_run(args, pool, executor)
    except ConfigurationError as e:
        logging.error('%s', e)
        print(f'error: {e}', file=sys.stderr)
        return EXIT_CONFIG_ERROR
    finally:
        session.close()


if __name__ == '__main__':
    raise SystemExit(main())
