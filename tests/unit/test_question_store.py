import pytest

from qbank.models import Question, QuestionStatus
from qbank.question_store import QuestionStore


def _q(qid, created_at, status=QuestionStatus.PENDING, level=None, text="What is x?"):
    return Question(
        question_id=qid,
        subject="Physics",
        chapter_name="Kinematics",
        identified_topic="Motion",
        difficulty_level=level,
        question_text=text,
        solution_text="",
        status=status,
        created_at=created_at,
    )


@pytest.fixture
def store(tmp_path):
    s = QuestionStore(tmp_path / "q.sqlite3")
    s.upsert(_q("q1", 1.0, QuestionStatus.VERIFIED, level=2, text="Find v"))
    s.upsert(_q("q2", 2.0, level=1, text="Find a"))
    s.upsert(_q("q3", 3.0, QuestionStatus.DISCARDED, text="Find t"))
    return s


def test_upsert_and_get(store):
    q = store.get("q2")
    assert q.subject == "physics"
    assert q.question_text == "Find a"
    assert q.status == QuestionStatus.PENDING


def test_get_unknown_raises(store):
    with pytest.raises(KeyError):
        store.get("nope")


def test_list_all_hides_discarded_and_puts_pending_first(store):
    page = store.list_questions("PHYSICS", "kinematics", " Motion ")
    assert [q.question_id for q in page.questions] == ["q2", "q1"]
    assert page.total_count == 2
    assert page.total_pages == 1


def test_list_by_status_and_level(store):
    page = store.list_questions("physics", "kinematics", "motion", status="discarded")
    assert [q.question_id for q in page.questions] == ["q3"]
    page = store.list_questions("physics", "kinematics", "motion", level=2)
    assert [q.question_id for q in page.questions] == ["q1"]


def test_list_pagination(store):
    page = store.list_questions("physics", "kinematics", "motion", page=2, page_size=1)
    assert [q.question_id for q in page.questions] == ["q1"]
    assert page.total_pages == 2


def test_list_rejects_bad_arguments(store):
    with pytest.raises(ValueError):
        store.list_questions("physics", "kinematics", "motion", page=0)
    with pytest.raises(ValueError):
        store.list_questions("physics", "kinematics", "")
    with pytest.raises(ValueError):
        store.list_questions("physics", "kinematics", "motion", status="bogus")


def test_count_by_status(store):
    assert store.count_by_status("physics", "kinematics", "motion") == {
        "PENDING": 1,
        "VERIFIED": 1,
        "DISCARDED": 1,
    }


def test_set_status_stamps_and_clears_verifier(store):
    q = store.set_status("q2", QuestionStatus.VERIFIED, "alice")
    assert q.verified_by == "alice"
    assert q.verified_at is not None
    q = store.set_status("q2", QuestionStatus.PENDING, "alice")
    assert q.verified_by is None
    assert q.verified_at is None
    with pytest.raises(KeyError):
        store.set_status("nope", QuestionStatus.VERIFIED, "alice")


def test_update_text(store):
    q = store.update_text("q2", "solution_text", "$a = 2$")
    assert q.solution_text == "$a = 2$"
    with pytest.raises(ValueError):
        store.update_text("q2", "subject", "x")
    with pytest.raises(KeyError):
        store.update_text("nope", "question_text", "x")


def test_neighbors_follow_list_order(store):
    assert store.neighbors("q2") == (None, "q1")
    assert store.neighbors("q1") == ("q2", None)
    assert store.neighbors("q3") == (None, None)


def test_find_duplicates_ignores_case_and_spacing(store):
    assert store.find_duplicates("  find   A ") == ["q2"]
    assert store.find_duplicates("find a", exclude_id="q2") == []
    store.update_text("q3", "question_text", "Find a")
    assert store.find_duplicates("find a", exclude_id="q2") == ["q3"]
