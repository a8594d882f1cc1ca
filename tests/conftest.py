"""
Shared test fixtures - SQLite test database, test client, grade table rows.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Point settings at the test database before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["GRADE_SEED_PATH"] = "./no-grade-seed.json"

from fancycalc import models
from fancycalc.database import Base, get_db
from fancycalc.main import app


TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def db():
    """Direct database session for test setup/assertions."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def pear_grades(db):
    """A few Pear 8 Mains grade rows around table 60 / crown 30.0 / depth 45.2."""
    db.add_all([
        models.PearEightMainsKgs(table_width=60, crown_angle=30.0, pavilion_depth=45.2, kgs="3", feye="2"),
        models.PearEightMainsKgs(table_width=60, crown_angle=30.0, pavilion_depth=45.2, kgs="1", feye="n/a"),
        models.PearEightMainsKgs(table_width=60, crown_angle=30.0, pavilion_depth=45.4, kgs="0", feye="0"),
        models.PearEightMainsBowtie(crown_angle=30.0, halves_min=40.0, halves_max=41.5, bowtie="2"),
        models.PearEightMainsBowtie(crown_angle=30.0, halves_min=41.5, halves_max=43.0, bowtie="1"),
        models.PearEightMainsBowtie(crown_angle=30.5, halves_min=40.0, halves_max=43.0, bowtie="0"),
    ])
    db.commit()
    return db
