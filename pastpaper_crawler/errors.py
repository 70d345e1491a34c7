# -*- coding: utf-8 -*-
"""异常类型：配置错误致命；发现/语法/下载错误按单元恢复。"""
from __future__ import annotations

import enum


class ConfigurationError(Exception):
    """未知科目、无可用科目、空的文档类型请求等。运行前即终止。"""


class GrammarFailure(enum.Enum):
    REGEX_NO_MATCH = 'regex_no_match'
    INVALID_SEASON = 'invalid_season'
    INVALID_KIND = 'invalid_kind'


class GrammarError(Exception):
    def __init__(self, reason: GrammarFailure, text: str):
        super().__init__(f'{reason.value}: {text!r}')
        self.reason = reason
        self.text = text


class DiscoveryFailure(enum.Enum):
    NOT_FOUND = 'not_found'
    NETWORK = 'network'


class DiscoveryError(Exception):
    def __init__(self, reason: DiscoveryFailure, message: str):
        super().__init__(message)
        self.reason = reason


class UnexpectedContentType(Exception):
    pass
