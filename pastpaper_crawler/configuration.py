# -*- coding: utf-8 -*-
"""
配置文件（JSON）：generate-config 写出，download 读回。

结构：
    {
      "version": "1.0",
      "kinds": ["qp", "ms"],
      "seasons": ["m", "s", "w"],
      "subjects": [
        {"name": "Biology", "code": "9700", "catalog_path": "biology-(9700)",
         "years": ["2020"],
         "documents": [{"year": "2020", "season": "s", "kind": "qp", "variant": "11"}]}
      ]
    }
"""
from __future__ import annotations

import json
from collections import OrderedDict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Sequence

from .errors import ConfigurationError
from .models import Document, DocumentKind, PlannedDownload, RetrievalTarget, Season, SubjectCode

CONFIG_VERSION = '1.0'


@dataclass
class SubjectEntry:
    subject: SubjectCode
    years: List[str] = field(default_factory=list)
    documents: List[Document] = field(default_factory=list)


@dataclass
class ConfigurationFile:
    kinds: FrozenSet[DocumentKind]
    seasons: FrozenSet[Season]
    subjects: List[SubjectEntry] = field(default_factory=list)

    def planned_downloads(self) -> List[PlannedDownload]:
        return [PlannedDownload(entry.subject, doc) for entry in self.subjects for doc in entry.documents]


def build_configuration(kinds: FrozenSet[DocumentKind], seasons: FrozenSet[Season],
                        targets: Sequence[RetrievalTarget], planned: Sequence[PlannedDownload]) -> ConfigurationFile:
    entries: Dict[SubjectCode, SubjectEntry] = OrderedDict()
    for t in targets:
        entry = entries.setdefault(t.subject, SubjectEntry(t.subject))
        if t.year not in entry.years:
            entry.years.append(t.year)
    for p in planned:
        entries.setdefault(p.subject, SubjectEntry(p.subject)).documents.append(p.document)
    return ConfigurationFile(kinds=frozenset(kinds), seasons=frozenset(seasons), subjects=list(entries.values()))

# ----------------------------- 序列化 -----------------------------

def _sorted_tags(members) -> List[str]:
    return sorted(m.tag for m in members)


def to_payload(config: ConfigurationFile) -> Dict[str, Any]:
    return {
        'version': CONFIG_VERSION,
        'kinds': _sorted_tags(config.kinds),
        'seasons': _sorted_tags(config.seasons),
        'subjects': [
            {
                'name': e.subject.name,
                'code': e.subject.code,
                'catalog_path': e.subject.catalog_path,
                'years': list(e.years),
                'documents': [
                    {'year': d.year, 'season': d.season.tag, 'kind': d.kind.tag, 'variant': d.variant}
                    for d in e.documents
                ],
            }
            for e in config.subjects
        ],
    }


def from_payload(data: Dict[str, Any]) -> ConfigurationFile:
    try:
        subjects: List[SubjectEntry] = []
        for raw in data.get('subjects', []):
            subject = SubjectCode(name=raw['name'], code=raw['code'], catalog_path=raw['catalog_path'])
            docs = [
                Document(year=str(d['year']), season=Season.from_tag(d['season']),
                         kind=DocumentKind.from_tag(d['kind']), variant=str(d.get('variant', '')))
                for d in raw.get('documents', [])
            ]
            subjects.append(SubjectEntry(subject, [str(y) for y in raw.get('years', [])], docs))
        kinds = frozenset(DocumentKind.from_tag(k) for k in data.get('kinds', [k.tag for k in DocumentKind]))
        seasons = frozenset(Season.from_tag(s) for s in data.get('seasons', [s.tag for s in Season]))
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ConfigurationError(f'Malformed configuration: {e}') from e
    return ConfigurationFile(kinds=kinds, seasons=seasons, subjects=subjects)


def save_configuration(path: Path, config: ConfigurationFile) -> None:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(to_payload(config), f, ensure_ascii=False, indent=2)
    except OSError as e:
        raise ConfigurationError(f'Failed to write configuration file {path}: {e}') from e


def load_configuration(path: Path) -> ConfigurationFile:
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f'Configuration file not found: {path}')
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except (OSError, ValueError) as e:
        raise ConfigurationError(f'Failed to parse configuration file {path}: {e}') from e
    if not isinstance(data, dict):
        raise ConfigurationError(f'Configuration file {path} must contain a JSON object')
    return from_payload(data)
