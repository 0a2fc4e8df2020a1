"""Shared fixtures: in-memory database and a seeded data handler."""
import os

# Must be set before config/models are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["NAME_EQUIVALENCES_FILE"] = ""

import pytest
from sqlalchemy.orm import sessionmaker
from models.student import make_engine, init_db
from data.handler import StudentDataHandler


SAMPLE_SHEET = [
    ["اسم الطالب", "رقم الطالب", "المادة", "الدرجة", "الفصل", "السنة"],
    ["أحمد علي", "1042", "رياضيات", "95", "الأول", "2024"],
    ["محمد حسن", "2001", "فيزياء", "٨٠", "الأول", "2024"],
    ["فاطمة الزهراء", "3003", "كيمياء", "88", "الثاني", "2024"],
    ["مُحَمَّد سعيد", "4004", "رياضيات", "70", "الثاني", "2023"],
    ["على عبدالله", "5005", "أحياء", "65", "الأول", "2023"],
]


@pytest.fixture
def session_factory():
    """Session factory bound to a fresh in-memory database."""
    engine = make_engine("sqlite://")
    init_db(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def handler(session_factory):
    """Data handler over an empty database."""
    return StudentDataHandler(session_factory=session_factory)


@pytest.fixture
def sample_sheet():
    """Header row plus five student rows, as read from an upload."""
    return [list(row) for row in SAMPLE_SHEET]


@pytest.fixture
def seeded_handler(handler, sample_sheet):
    """Data handler with the sample sheet imported."""
    handler.import_rows(sample_sheet)
    return handler
