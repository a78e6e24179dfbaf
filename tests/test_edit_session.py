"""Tests for the edit session: load, present, parse, validate, commit."""

import pendulum
import pytest

from conftest import NOW, USER, at, make_entry, rewriting_editor
from zeitedit.errors import (
    EditorFailedError,
    EntryNotFoundError,
    FinishBeforeBeginError,
    InvalidTimestampError,
    MalformedInputError,
    OverlapConflictError,
    StoreError,
)
from zeitedit.service.edit import EditState, EntryEditSession
from zeitedit.service.editable import decode_editable
from zeitedit.service.entry import create_entry


def session_for(store, editor=None, now=NOW) -> EntryEditSession:
    return EntryEditSession(
        store, editor or rewriting_editor(), clock=lambda: now
    )


class TestBeginEdit:
    def test_snapshot_of_closed_entry(self, store, two_entries):
        a, _ = two_entries
        session = session_for(store)

        editable = session.begin_edit(USER, a)

        assert editable["project"] == "alpha"
        assert editable["finish"] != ""
        assert session.state is EditState.LOADED

    def test_snapshot_of_open_entry(self, store):
        id = store.save_new_entry(USER, make_entry(at(9), None))

        assert session_for(store).begin_edit(USER, id)["finish"] == ""

    def test_unknown_id(self, store):
        session = session_for(store)

        with pytest.raises(EntryNotFoundError):
            session.begin_edit(USER, "missing")
        assert session.state is EditState.REJECTED

    def test_entries_are_scoped_to_their_user(self, store, two_entries):
        a, _ = two_entries

        with pytest.raises(EntryNotFoundError):
            session_for(store).begin_edit("bob", a)


class TestPresentAndParse:
    def test_editor_receives_yaml_snapshot(self, store, two_entries):
        a, _ = two_entries
        seen = []

        def editor(text):
            seen.append(text)
            return text

        session = session_for(store, editor)
        editable = session.begin_edit(USER, a)
        text = session.present(editable)

        assert decode_editable(seen[0]) == editable
        assert session.parse_edited(text) == editable
        assert session.state is EditState.EDITS_RECEIVED

    def test_editor_failure_rejects_session(self, store, two_entries):
        a, _ = two_entries

        def failing_editor(text):
            raise EditorFailedError("vi", returncode=1)

        session = session_for(store, failing_editor)
        with pytest.raises(EditorFailedError):
            session.present(session.begin_edit(USER, a))
        assert session.state is EditState.REJECTED

    def test_malformed_text(self, store):
        session = session_for(store)

        with pytest.raises(MalformedInputError):
            session.parse_edited("begin: [")
        assert session.state is EditState.REJECTED


class TestEdit:
    def test_commit_persists_candidate(self, store, two_entries):
        a, _ = two_entries
        editor = rewriting_editor(
            finish="2024-03-01 11:30:00 +0000", task="review", notes=""
        )
        session = session_for(store, editor)

        updated = session.edit(USER, a)

        assert updated is not None
        assert updated["id"] == a
        assert updated["finish"] == at(11, 30)
        assert updated["task"] == "review"
        assert store.get_entry(USER, a) == updated
        assert session.state is EditState.COMMITTED

    def test_finish_into_next_entry_conflicts(self, store, two_entries):
        a, b = two_entries
        before = store.get_entry(USER, a)
        session = session_for(store, rewriting_editor(finish="2024-03-01 12:30:00 +0000"))

        with pytest.raises(OverlapConflictError) as error:
            session.edit(USER, a)

        assert error.value.conflicting_id == b
        assert store.get_entry(USER, a) == before
        assert store.update_calls == 0
        assert session.state is EditState.REJECTED

    def test_finish_touching_next_entry_is_accepted(self, store, two_entries):
        a, _ = two_entries
        session = session_for(store, rewriting_editor(finish="2024-03-01 12:00:00 +0000"))

        updated = session.edit(USER, a)

        assert updated["finish"] == at(12)

    def test_reopened_entry_conflicts_with_entry_before_now(self, store, two_entries):
        a, b = two_entries
        session = session_for(store, rewriting_editor(finish=""))

        with pytest.raises(OverlapConflictError) as error:
            session.edit(USER, a)

        assert error.value.conflicting_id == b
        assert store.get_entry(USER, a)["finish"] == at(11)

    def test_reopened_entry_is_accepted_when_nothing_follows(self, store):
        id = store.save_new_entry(USER, make_entry(at(10), at(11)))
        session = session_for(store, rewriting_editor(finish=""))

        assert session.edit(USER, id)["finish"] is None

    def test_unparseable_begin_leaves_store_unchanged(self, store, two_entries):
        a, _ = two_entries
        before = store.get_entry(USER, a)
        session = session_for(store, rewriting_editor(begin="next tuesday"))

        with pytest.raises(InvalidTimestampError) as error:
            session.edit(USER, a)

        assert error.value.text == "next tuesday"
        assert store.get_entry(USER, a) == before

    def test_finish_before_begin(self, store, two_entries):
        a, _ = two_entries
        session = session_for(store, rewriting_editor(finish="2024-03-01 09:00:00 +0000"))

        with pytest.raises(FinishBeforeBeginError):
            session.edit(USER, a)
        assert store.update_calls == 0

    def test_unchanged_text_writes_nothing(self, store, two_entries):
        a, _ = two_entries
        session = session_for(store, lambda text: text)

        assert session.edit(USER, a) is None
        assert store.update_calls == 0
        assert session.state is EditState.IDLE

    def test_store_failure_is_surfaced(self, store, two_entries):
        a, _ = two_entries
        store.fail_updates = True
        session = session_for(store, rewriting_editor(notes="changed"))

        with pytest.raises(StoreError):
            session.edit(USER, a)
        assert session.state is EditState.REJECTED

    def test_notes_only_edit_next_to_sub_second_neighbour(self, store):
        store.save_new_entry(
            USER, make_entry(at(10), at(11).add(microseconds=700_000))
        )
        later = store.save_new_entry(
            USER, make_entry(at(11).add(microseconds=900_000), at(12))
        )
        session = session_for(store, rewriting_editor(notes="only the notes"))

        updated = session.edit(USER, later)

        assert updated["notes"] == "only the notes"
        assert updated["begin"] == at(11).add(microseconds=900_000)

    def test_other_users_entries_do_not_conflict(self, store, two_entries):
        a, _ = two_entries
        store.save_new_entry("bob", make_entry(at(11), at(12), user="bob"))
        session = session_for(store, rewriting_editor(finish="2024-03-01 12:00:00 +0000"))

        assert session.edit(USER, a) is not None


class TestCommit:
    def test_commit_without_editor(self, store, two_entries):
        _, b = two_entries
        session = session_for(store)
        editable = session.begin_edit(USER, b)
        editable["begin"] = "2024-03-01 11:00:00 +0000"

        updated = session.commit(USER, b, editable)

        assert updated["begin"] == at(11)
        assert updated["finish"] == at(13)

    def test_adjacent_edit_from_the_other_side(self, store, two_entries):
        _, b = two_entries
        session = session_for(store)
        editable = session.begin_edit(USER, b)
        editable["begin"] = "2024-03-01 10:59:59 +0000"

        with pytest.raises(OverlapConflictError):
            session.commit(USER, b, editable)


class TestCreateEntry:
    def test_new_entry_is_stored(self, store, two_entries):
        entry = create_entry(store, USER, at(11), at(12), "p", "t", "n", NOW)

        assert entry["id"] is not None
        assert store.get_entry(USER, entry["id"])["project"] == "p"

    def test_new_entry_may_not_overlap(self, store, two_entries):
        _, b = two_entries

        with pytest.raises(OverlapConflictError) as error:
            create_entry(store, USER, at(12, 30), None, "", "", "", NOW)

        assert error.value.conflicting_id == b
        assert len(store.list_entries(USER)) == 2

    def test_new_entry_may_not_finish_before_it_begins(self, store):
        with pytest.raises(FinishBeforeBeginError):
            create_entry(
                store,
                USER,
                pendulum.datetime(2024, 3, 2, tz="UTC"),
                pendulum.datetime(2024, 3, 1, tz="UTC"),
                "",
                "",
                "",
                NOW,
            )
