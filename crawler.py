#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Crawler (A-Level past papers)：科目目录 -> 年份页 -> 文件列表 -> 并发下载 PDF

用法
    python crawler.py -t 8 generate-config -s Biology Chemistry -k qp ms -o config.json
    python crawler.py download -c config.json -o "Past Papers"
    python crawler.py run -s 9700 -y 2020 2021 --seasons s -o "Past Papers"

依赖
    pip install requests beautifulsoup4 lxml

输出目录
    {output}/{科目名} ({代码})/{YYYY}/{代码}_{考季}{YY}_{类型}[_{卷别}].pdf
"""
from __future__ import annotations

from pastpaper_crawler.cli import main


if __name__ == '__main__':
    raise SystemExit(main())
