"""Tests for repository functions against in-memory SQLite."""

from datetime import date, datetime

import pytest
from sqlalchemy import create_engine, inspect

from gymapi.db import repository
from gymapi.db.errors import DuplicateEntityError, EntityNotFoundError
from gymapi.db.session import init_db


def _member_data(email: str = "lee@example.com") -> dict:
    return {
        "first_name": "Lee",
        "last_name": "Park",
        "email": email,
        "phone_number": "+15551112222",
        "date_of_birth": date(1992, 3, 4),
        "gender": "Male",
        "emergency_contact_name": "Kim Park",
        "emergency_contact_phone": "+15553334444",
    }


def _trainer_data(email: str = "coach@example.com") -> dict:
    return {
        "first_name": "Jo",
        "last_name": "Reyes",
        "email": email,
        "phone_number": "+15550009999",
        "hourly_rate": 50,
    }


def test_create_member_assigns_id_and_audit_fields(db_session):
    member = repository.create_member(db_session, _member_data(email="Lee@Example.com"))

    assert member.id
    assert member.email == "lee@example.com"
    assert member.created_at is not None
    assert member.updated_at is None
    assert member.is_deleted is False
    assert member.status == "Active"


def test_update_stamps_updated_at(db_session):
    member = repository.create_member(db_session, _member_data())

    member.phone_number = "+15559998888"
    db_session.commit()
    db_session.refresh(member)

    assert member.updated_at is not None


def test_soft_deleted_rows_are_hidden(db_session):
    member = repository.create_member(db_session, _member_data())
    member.is_deleted = True
    db_session.commit()

    assert repository.list_members(db_session) == []
    with pytest.raises(EntityNotFoundError) as exc_info:
        repository.get_member(db_session, member.id)
    assert exc_info.value.entity == "Member"


def test_duplicate_member_email(db_session):
    repository.create_member(db_session, _member_data())

    with pytest.raises(DuplicateEntityError):
        repository.create_member(db_session, _member_data(email="LEE@example.com"))


class _NoRowResult:
    def scalar_one_or_none(self):
        return None


def test_duplicate_committed_after_lookup_is_reported_as_duplicate(db_session, monkeypatch):
    repository.create_member(db_session, _member_data())
    # Another writer took the email between this request's lookup and its insert
    monkeypatch.setattr(db_session, "execute", lambda *args, **kwargs: _NoRowResult())

    with pytest.raises(DuplicateEntityError, match="A member with this email already exists."):
        repository.create_member(db_session, _member_data())

    monkeypatch.undo()
    assert len(repository.list_members(db_session)) == 1


def test_assignment_requires_existing_trainer(db_session):
    with pytest.raises(EntityNotFoundError) as exc_info:
        repository.create_assignment(
            db_session,
            {"title": "Core", "trainer_id": "nope", "due_date": datetime(2030, 1, 1)},
        )
    assert exc_info.value.entity == "Trainer"


def test_list_assignments_newest_first(db_session):
    trainer = repository.create_trainer(db_session, _trainer_data())
    member = repository.create_member(db_session, _member_data())
    titles = ["first", "second", "third"]
    for title in titles:
        repository.create_assignment(
            db_session,
            {"title": title, "trainer_id": trainer.id, "member_id": member.id, "due_date": datetime(2030, 1, 1)},
        )

    assignments = repository.list_assignments(db_session, member_id=member.id)

    assert [assignment.title for assignment in assignments] == list(reversed(titles))
    assert assignments[0].trainer.full_name == "Jo Reyes"
    assert repository.list_assignments(db_session, member_id=member.id, page=2, page_size=2)[0].title == "first"


def test_init_db_creates_tables_on_given_engine():
    engine = create_engine("sqlite://")

    init_db(engine)

    assert {"members", "trainers", "equipment", "assignments"} <= set(inspect(engine).get_table_names())
    engine.dispose()
