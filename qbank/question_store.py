# -*- coding: utf-8 -*-
from __future__ import annotations

import hashlib
import math
import re
import sqlite3
import time
from pathlib import Path
from typing import Optional

from .models import Question, QuestionPage, QuestionStatus

EDITABLE_FIELDS = ("question_text", "solution_text")

_COLUMNS = (
    "question_id, subject, chapter_name, identified_topic, difficulty_level, question_text, "
    "solution_text, status, verified_by, verified_at, created_at, updated_at"
)
_ORDER = "CASE status WHEN 'PENDING' THEN 0 ELSE 1 END, created_at, question_id"


def _key(s: str) -> str:
    return (s or "").strip().lower()


def _text_sig(text: str) -> str:
    norm = re.sub(r"\s+", " ", (text or "").strip().lower())
    return hashlib.sha1(norm.encode("utf-8", errors="replace")).hexdigest()[:16]


class QuestionStore:
    """
    Local question bank:
    - one row per question, keyed by question_id
    - subject / chapter / topic stored lower-cased for filtering
    - status PENDING -> VERIFIED or DISCARDED
    """

    def __init__(self, db_path: Path) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        # WAL helps concurrent reads while Streamlit reruns.
        conn = sqlite3.connect(str(self._db_path), timeout=30, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA synchronous=NORMAL;")
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS questions (
                  question_id TEXT PRIMARY KEY,
                  subject TEXT NOT NULL,
                  chapter_name TEXT NOT NULL,
                  identified_topic TEXT NOT NULL,
                  difficulty_level INTEGER,
                  question_text TEXT NOT NULL DEFAULT '',
                  solution_text TEXT NOT NULL DEFAULT '',
                  text_sig TEXT NOT NULL,
                  status TEXT NOT NULL DEFAULT 'PENDING',
                  verified_by TEXT,
                  verified_at REAL,
                  created_at REAL NOT NULL,
                  updated_at REAL NOT NULL
                );
                """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_questions_topic ON questions(subject, chapter_name, identified_topic);"
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_questions_sig ON questions(text_sig);")

    def upsert(self, question: Question) -> Question:
        now = time.time()
        created = question.created_at or now
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO questions (question_id, subject, chapter_name, identified_topic, difficulty_level, "
                "question_text, solution_text, text_sig, status, verified_by, verified_at, created_at, updated_at) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?) "
                "ON CONFLICT(question_id) DO UPDATE SET subject=excluded.subject, chapter_name=excluded.chapter_name, "
                "identified_topic=excluded.identified_topic, difficulty_level=excluded.difficulty_level, "
                "question_text=excluded.question_text, solution_text=excluded.solution_text, "
                "text_sig=excluded.text_sig, status=excluded.status, verified_by=excluded.verified_by, "
                "verified_at=excluded.verified_at, updated_at=excluded.updated_at",
                (
                    question.question_id,
                    _key(question.subject),
                    _key(question.chapter_name),
                    _key(question.identified_topic),
                    question.difficulty_level,
                    question.question_text,
                    question.solution_text,
                    _text_sig(question.question_text),
                    question.status.value,
                    question.verified_by,
                    question.verified_at,
                    created,
                    now,
                ),
            )
        return self.get(question.question_id)

    def get(self, question_id: str) -> Question:
        with self._connect() as conn:
            row = conn.execute(f"SELECT {_COLUMNS} FROM questions WHERE question_id = ?", (question_id,)).fetchone()
        if row is None:
            raise KeyError(question_id)
        return Question(**dict(row))

    def _filter(
        self,
        subject: str,
        chapter: str,
        topic: str,
        status: str = "all",
        level: Optional[int] = None,
    ) -> tuple[str, list]:
        where = "subject = ? AND chapter_name = ? AND identified_topic = ?"
        params: list = [_key(subject), _key(chapter), _key(topic)]
        st = (status or "all").strip()
        if st.lower() == "all":
            where += " AND status <> ?"
            params.append(QuestionStatus.DISCARDED.value)
        else:
            where += " AND status = ?"
            params.append(QuestionStatus(st.upper()).value)
        if level is not None:
            where += " AND difficulty_level = ?"
            params.append(int(level))
        return where, params

    def list_questions(
        self,
        subject: str,
        chapter: str,
        topic: str,
        status: str = "all",
        level: Optional[int] = None,
        page: int = 1,
        page_size: int = 7,
    ) -> QuestionPage:
        """
        One page of a topic's questions. status="all" means every question that
        was not discarded; pending ones come first.
        """
        if int(page) < 1 or int(page_size) < 1:
            raise ValueError("page and page_size must be >= 1")
        if not (_key(subject) and _key(chapter) and _key(topic)):
            raise ValueError("Subject, chapter, and topic are required")
        where, params = self._filter(subject, chapter, topic, status, level)
        with self._connect() as conn:
            total = int(conn.execute(f"SELECT COUNT(*) FROM questions WHERE {where}", params).fetchone()[0])
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM questions WHERE {where} ORDER BY {_ORDER} LIMIT ? OFFSET ?",
                (*params, int(page_size), (int(page) - 1) * int(page_size)),
            ).fetchall()
        return QuestionPage(
            questions=[Question(**dict(r)) for r in rows],
            total_count=total,
            page=int(page),
            page_size=int(page_size),
            total_pages=math.ceil(total / int(page_size)),
        )

    def count_by_status(self, subject: str, chapter: str, topic: str) -> dict[str, int]:
        out = {s.value: 0 for s in QuestionStatus}
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT status, COUNT(*) AS n FROM questions "
                "WHERE subject = ? AND chapter_name = ? AND identified_topic = ? GROUP BY status",
                (_key(subject), _key(chapter), _key(topic)),
            ).fetchall()
        for r in rows:
            out[str(r["status"])] = int(r["n"])
        return out

    def set_status(self, question_id: str, status: QuestionStatus, user_id: Optional[str] = None) -> Question:
        status = QuestionStatus(status)
        now = time.time()
        verified_by = user_id if status == QuestionStatus.VERIFIED else None
        verified_at = now if status == QuestionStatus.VERIFIED else None
        with self._connect() as conn:
            cur = conn.execute(
                "UPDATE questions SET status = ?, verified_by = ?, verified_at = ?, updated_at = ? WHERE question_id = ?",
                (status.value, verified_by, verified_at, now, question_id),
            )
            if not int(getattr(cur, "rowcount", 0) or 0):
                raise KeyError(question_id)
        return self.get(question_id)

    def update_text(self, question_id: str, field: str, text: str) -> Question:
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"field must be one of {EDITABLE_FIELDS}, got {field!r}")
        now = time.time()
        sets = f"{field} = ?, updated_at = ?"
        params: list = [text, now]
        if field == "question_text":
            sets += ", text_sig = ?"
            params.append(_text_sig(text))
        with self._connect() as conn:
            cur = conn.execute(f"UPDATE questions SET {sets} WHERE question_id = ?", (*params, question_id))
            if not int(getattr(cur, "rowcount", 0) or 0):
                raise KeyError(question_id)
        return self.get(question_id)

    def neighbors(self, question_id: str) -> tuple[Optional[str], Optional[str]]:
        """(previous_id, next_id) within the question's topic, in list order."""
        q = self.get(question_id)
        where, params = self._filter(q.subject, q.chapter_name, q.identified_topic)
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT question_id FROM questions WHERE {where} ORDER BY {_ORDER}", params
            ).fetchall()
        ids = [r["question_id"] for r in rows]
        if question_id not in ids:
            return None, None
        i = ids.index(question_id)
        prev_id = ids[i - 1] if i > 0 else None
        next_id = ids[i + 1] if i + 1 < len(ids) else None
        return prev_id, next_id

    def find_duplicates(self, question_text: str, exclude_id: Optional[str] = None) -> list[str]:
        """Ids of questions whose text matches ignoring case and whitespace."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT question_id FROM questions WHERE text_sig = ? ORDER BY created_at, question_id",
                (_text_sig(question_text),),
            ).fetchall()
        return [r["question_id"] for r in rows if r["question_id"] != exclude_id]
