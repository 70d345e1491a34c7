# -*- coding: utf-8 -*-
"""
科目目录：科目名称 -> (名称, 考试代码, 远程路径段)。

静态只读表，进程启动即就绪，不涉及网络或磁盘。
注意：考试代码并非全局唯一（如 Islamic Studies 9013 对应两个路径）。
"""
from __future__ import annotations

from typing import Iterable, Optional, Tuple

from .models import SubjectCode


def _s(name: str, catalog_path: str, code: str) -> SubjectCode:
    return SubjectCode(name=name, code=code, catalog_path=catalog_path)


CATALOG: Tuple[SubjectCode, ...] = (
    _s("Accounting", "accounting-(9706)", "9706"),
    _s("Afrikaans", "afrikaans-(9679)", "9679"),
    _s("Applied Information And Communication Technology",
       "applied-Information-and-communication-technology-(9713)", "9713"),
    _s("Arabic", "arabic-(9680)", "9680"),
    _s("Arabic Language", "arabic-language-(AS-level-only)-(8680)", "8680"),
    _s("Art & Design", "art-&-design-(9479)", "9479"),
    _s("Art & Design", "art-&-design-(9704)", "9704"),
    _s("Biblical Studies", "biblical-studies-(9484)", "9484"),
    _s("Biology", "biology-(9700)", "9700"),
    _s("Business", "business-(9609)", "9609"),
    _s("Business Studies", "business-studies-(9707)", "9707"),
    _s("Cambridge International Project Qualification",
       "cambridge-international-project-qualification-(9980)", "9980"),
    _s("Chemistry", "chemistry-(9701)", "9701"),
    _s("Chinese", "chinese-(A level only)-(9715)", "9715"),
    _s("Chinese Language", "chinese-language-(AS-level-only)-(8681)", "8681"),
    _s("Classical Studies", "classical-studies-(9274)", "9274"),
    _s("Computer Science", "computer-science-(9608)", "9608"),
    _s("Computer Science", "computer-science-(9618)", "9618"),
    _s("Computing", "computing-(9691)", "9691"),
    _s("Design & Technology", "design-&-technology-(9705)", "9705"),
    _s("Design & Textiles", "design-&-textiles-(9631)", "9631"),
    _s("Digital Media & Design", "digital-media-&-design-(9481)", "9481"),
    _s("Divinity", "divinity-(9011)", "9011"),
    _s("Divinity", "divinity-(AS-level-only)-(8041)", "8041"),
    _s("Drama", "drama-(9482)", "9482"),
    _s("Economics", "economics-(9708)", "9708"),
    _s("English General Paper", "english-general-paper-(AS-level-only)-(8021)", "8021"),
    _s("English Language & Literature",
       "english-language-&-literature-(AS-level-only)-(8695)", "8695"),
    _s("English Language", "english-language-(9093)", "9093"),
    _s("English Literature", "english-literature-(9695)", "9695"),
    _s("Environmental Management", "environmental-management-(AS-only)-(8291)", "8291"),
    _s("Food Studies", "food-studies-(9336)", "9336"),
    _s("French", "french-(A-level-only)-(9716)", "9716"),
    _s("French Language", "french-language-(AS-level-only)-(8682)", "8682"),
    _s("French Literature", "french-literature-(AS-level-only)-(8670)", "8670"),
    _s("General Paper", "general-paper-(AS-level-only)-(8001)", "8001"),
    _s("General Paper", "general-paper-(AS-level-only)-(8004)", "8004"),
    _s("Geography", "geography-(9696)", "9696"),
    _s("German", "german-(A-level-only)-(9717)", "9717"),
    _s("German Language", "german-language-(AS-level-only)-(8683)", "8683"),
    _s("Global Perspectives & Research", "global-perspectives-&-research-(9239)", "9239"),
    _s("Hindi", "hindi-(A-level-only)-(9687)", "9687"),
    _s("Hindi Language", "hindi-language-(AS-level-only)-(8687)", "8687"),
    _s("Hindi Literature", "hindi-literature-(AS-level-only)-(8675)", "8675"),
    _s("Hinduism", "hinduism-(9014)", "9014"),
    _s("Hinduism", "hinduism-(9487)", "9487"),
    _s("Hinduism", "hinduism-(AS-level-only)-(8058)", "8058"),
    _s("History", "history-(9389)", "9389"),
    _s("History", "history-(9489)", "9489"),
    _s("Information Technology", "information-technology-(9626)", "9626"),
    _s("Islamic Studies", "islamic-studies-(9013)", "9013"),
    _s("Islamic Studies", "islamic-studies-(9013-&-8053)", "9013"),
    _s("Islamic Studies", "islamic-studies-(9488)", "9488"),
    _s("Islamic Studies", "islamic-studies-(AS-level-only)-(8053)", "8053"),
    _s("Japanese Language", "japanese-language-(AS-level-only)-(8281)", "8281"),
    _s("Law", "law-(9084)", "9084"),
    _s("Marine Science", "marine-science-(9693)", "9693"),
    _s("Mathematics", "mathematics-(9709)", "9709"),
    _s("Mathematics Further", "mathematics-further-(9231)", "9231"),
    _s("Media Studies", "media-studies-(9607)", "9607"),
    _s("Music", "music-(9483)", "9483"),
    _s("Music", "music-(9703)", "9703"),
    _s("Music", "music-(AS-level-only)-(8663)", "8663"),
    _s("Nepal Studies", "nepal-studies(AS-level-only)-(8024)", "8024"),
    _s("Physical Education", "physical-education-(9396)", "9396"),
    _s("Physics", "physics-(9702)", "9702"),
    _s("Portuguese", "portuguese-(A-level-only)-(9718)", "9718"),
    _s("Portuguese Language", "portuguese-language-(AS-level-only)-(8684)", "8684"),
    _s("Portuguese Literature", "portuguese-literature-(AS-level-only)-(8672)", "8672"),
    _s("Psychology", "psychology-(9698)", "9698"),
    _s("Psychology", "psychology-(9990)", "9990"),
    _s("Sociology", "sociology-(9699)", "9699"),
    _s("Spanish", "spanish-(A-level-only)-(9719)", "9719"),
    _s("Spanish First Language", "spanish-first-language-(AS-level-only)-(8665)", "8665"),
    _s("Spanish Language", "spanish-language-(AS-level-only)-(8685)", "8685"),
    _s("Spanish Literature", "spanish-literature-(AS-level-only)-(8673)", "8673"),
    _s("Tamil", "tamil-(9689)", "9689"),
    _s("Tamil Language", "tamil-language-(AS-level-only)-(8689)", "8689"),
    _s("Thinking Skills", "thinking-skills-(9694)", "9694"),
    _s("Travel & Tourism", "travel-&-tourism-(9395)", "9395"),
    _s("Urdu", "urdu-(A-level-only)-(9676)", "9676"),
    _s("Urdu Language", "urdu-language-(AS-level-only)-(8686)", "8686"),
    _s("Urdu Pakistan Only", "urdu-pakistan-only-(A-level-only)-(9686)", "9686"),
)


def find_subject(query: str, catalog: Iterable[SubjectCode] = CATALOG) -> Optional[SubjectCode]:
    """按名称前缀或考试代码匹配（不区分大小写），返回第一个命中的科目。"""
    q = (query or '').strip().lower()
    if not q:
        return None
    for subject in catalog:
        code = subject.code.lower()
        if subject.name.lower().startswith(q) or code == q or code.startswith(q):
            return subject
    return None


def iter_subjects(catalog: Iterable[SubjectCode] = CATALOG) -> Iterable[SubjectCode]:
    return iter(catalog)
