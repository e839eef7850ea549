from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from feedback_api.models.feedback import FeedbackForm
from feedback_api.models.user import User
from feedback_api.schemas.forms import FormField
from feedback_api.services.forms import FormRecord
from feedback_api.services.json_column import DecodeStatus
from feedback_api.services.responses import ResponseRecord
from feedback_api.services.users import CreateUserStatus


def _user(app, email="gw@example.com"):
    result = app.state.users.create(name="Gateway", email=email, password_hash="x")
    assert result.status is CreateUserStatus.CREATED
    return result.user


def _count_users(app):
    with Session(app.state.engine) as db:
        return db.scalar(select(func.count(User.id)))


# ---------- users ----------

def test_create_user_normalizes_email_and_assigns_id(app):
    user = _user(app, "Mixed.Case@Example.COM")
    assert user.id is not None
    assert user.email == "mixed.case@example.com"
    assert user.role == "user"
    assert user.created_at is not None


def test_duplicate_email_is_reported_and_not_inserted(app):
    _user(app, "dup@example.com")
    result = app.state.users.create(name="Again", email="DUP@example.com", password_hash="y")
    assert result.status is CreateUserStatus.DUPLICATE_EMAIL
    assert result.user is None
    assert _count_users(app) == 1


def test_user_lookups(app):
    user = _user(app, "find@example.com")
    users = app.state.users
    assert users.exists("FIND@example.com")
    assert not users.exists("missing@example.com")
    assert users.find_by_email(" Find@Example.com ").id == user.id
    assert users.find_by_id(user.id).email == "find@example.com"
    assert users.find_by_id(9999) is None


# ---------- forms ----------

def test_create_form_assigns_id_and_timestamps(app):
    owner = _user(app)
    form = app.state.forms.create(FormRecord(
        title="Survey",
        created_by=owner.id,
        fields=[FormField(id="q1", type="text", label="Q1")],
    ))
    assert form.id is not None
    assert form.created_at is not None
    assert form.updated_at is not None
    assert form.is_active is True
    assert form.description == ""
    assert form.fields_status is DecodeStatus.OK


def test_forms_by_owner_newest_first(app):
    owner, other = _user(app, "a@example.com"), _user(app, "b@example.com")
    forms = app.state.forms
    first = forms.create(FormRecord(title="first", created_by=owner.id))
    second = forms.create(FormRecord(title="second", created_by=owner.id))
    forms.create(FormRecord(title="not mine", created_by=other.id))

    assert [f.id for f in forms.find_by_owner(owner.id)] == [second.id, first.id]
    assert forms.find_by_owner(12345) == []


def test_update_never_touches_owner_or_created_at(app):
    owner, other = _user(app, "a@example.com"), _user(app, "b@example.com")
    forms = app.state.forms
    form = forms.create(FormRecord(title="before", created_by=owner.id))
    created_at = form.created_at

    form.title = "after"
    form.is_active = False
    form.created_by = other.id
    form.fields = [FormField(id="q9", type="radio", label="Pick", options=["x", "y"])]
    updated = forms.update(form)

    stored = forms.find_by_id(form.id)
    assert updated.title == stored.title == "after"
    assert stored.is_active is False
    assert stored.created_by == owner.id
    assert stored.created_at == created_at
    assert stored.updated_at >= created_at
    assert stored.fields[0].options == ["x", "y"]


def test_update_of_missing_form_returns_none(app):
    assert app.state.forms.update(FormRecord(id=999, title="ghost", created_by=1)) is None


def test_delete_form(app):
    owner = _user(app)
    forms = app.state.forms
    form = forms.create(FormRecord(title="bye", created_by=owner.id))
    assert forms.delete(form.id) is True
    assert forms.find_by_id(form.id) is None
    assert forms.delete(form.id) is False


def test_find_all_active_skips_inactive(app):
    owner = _user(app)
    forms = app.state.forms
    live = forms.create(FormRecord(title="live", created_by=owner.id))
    forms.create(FormRecord(title="closed", created_by=owner.id, is_active=False))
    assert [f.id for f in forms.find_all_active()] == [live.id]


def test_corrupt_fields_are_served_empty_but_flagged(app):
    owner = _user(app)
    forms = app.state.forms
    form = forms.create(FormRecord(
        title="broken", created_by=owner.id,
        fields=[FormField(id="q1", type="text", label="Q1")],
    ))
    with Session(app.state.engine) as db:
        db.execute(update(FeedbackForm).where(FeedbackForm.id == form.id).values(fields="[{broken"))
        db.commit()

    stored = forms.find_by_id(form.id)
    assert stored.fields == []
    assert stored.fields_status is DecodeStatus.CORRUPT

    empty = forms.create(FormRecord(title="empty", created_by=owner.id))
    assert forms.find_by_id(empty.id).fields_status is DecodeStatus.EMPTY


# ---------- responses ----------

def test_responses_newest_first_and_survive_form_deletion(app):
    owner = _user(app)
    form = app.state.forms.create(FormRecord(title="f", created_by=owner.id))
    responses = app.state.responses

    older = responses.create(ResponseRecord(form_id=form.id, response_data={"q1": "a"}))
    newer = responses.create(ResponseRecord(form_id=form.id, respondent_email="x@y.com", response_data={"q1": "b"}))
    assert older.respondent_email == "anonymous"
    assert older.submitted_at is not None

    assert app.state.forms.delete(form.id)
    stored = responses.find_by_form(form.id)
    assert [r.id for r in stored] == [newer.id, older.id]
    assert stored[0].response_data == {"q1": "b"}
    assert stored[0].data_status is DecodeStatus.OK
