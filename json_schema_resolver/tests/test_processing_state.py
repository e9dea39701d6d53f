"""
Tests for the resolution engine with an in-memory parser.

Each fake file declares the types it defines and the types it needs;
an attempt fails while any needed type is missing from the bindings.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from json_schema_resolver.exceptions import UnresolvedReferenceError
from json_schema_resolver.resolver import DependencyResolver, FileState, ProcessingState


class FakeParser:
    """Parser stub driven by a table of defined/required types per file."""

    def __init__(self, files: dict[str, tuple[dict[str, object], set[str]]]):
        self.files = files
        self.calls: list[str] = []
        self.bindings: dict[str, list[dict[str, object]]] = {}

    def parse(self, source_file, known_types):
        name = Path(source_file).name
        self.calls.append(name)
        self.bindings.setdefault(name, []).append(dict(known_types))
        defines, requires = self.files[name]
        for type_name in sorted(requires):
            if type_name not in known_types and type_name not in defines:
                raise UnresolvedReferenceError(type_name)
        return defines


def file_names(file_states):
    return [f.source_file.name for f in file_states]


@pytest.fixture
def xyz_files():
    return {
        "x.json": ({"foo": "foo-def"}, set()),
        "y.json": ({"bar": "bar-def"}, {"foo"}),
        "z.json": ({"baz": "baz-def"}, {"bar"}),
    }


class TestProcessingState:
    """Tests for the queue, holding set and registry protocol."""

    def test_files_start_queued_in_order(self, tmp_path):
        state = ProcessingState([tmp_path / "a.json", tmp_path / "b.json"])
        assert state.has_pending_work()
        assert file_names(state.pending_files) == ["a.json", "b.json"]
        assert state.held_files == []

    def test_next_pending_is_fifo_and_returns_none_when_empty(self, tmp_path):
        state = ProcessingState([tmp_path / "a.json", tmp_path / "b.json"])
        assert state.next_pending().source_file.name == "a.json"
        assert state.next_pending().source_file.name == "b.json"
        assert state.next_pending() is None
        assert not state.has_pending_work()

    def test_holding_set_alone_is_not_pending_work(self, tmp_path):
        state = ProcessingState([tmp_path / "a.json"])
        file_state = state.next_pending()
        state.defer_to_holding_set(file_state)
        assert not state.has_pending_work()
        assert state.failed_files() == [file_state]

    def test_holding_is_idempotent(self, tmp_path):
        state = ProcessingState([tmp_path / "a.json", tmp_path / "b.json", tmp_path / "c.json"])
        held = state.next_pending()
        state.defer_to_holding_set(held)
        state.defer_to_holding_set(held)
        assert state.held_files == [held]
        assert file_names(state.pending_files) == ["b.json", "c.json"]

    def test_success_moves_held_files_to_queue_tail_in_order(self, tmp_path):
        state = ProcessingState([tmp_path / n for n in ("a.json", "b.json", "c.json", "d.json")])
        a = state.next_pending()
        b = state.next_pending()
        state.defer_to_holding_set(b)
        state.defer_to_holding_set(a)
        c = state.next_pending()

        state.commit_new_definitions(c, {"T": "t"})

        assert state.held_files == []
        assert file_names(state.pending_files) == ["d.json", "b.json", "a.json"]

    def test_commit_clears_error(self, tmp_path):
        state = ProcessingState([tmp_path / "a.json"])
        file_state = state.next_pending()
        file_state.record_error(UnresolvedReferenceError("T"))
        assert file_state.has_error

        state.commit_new_definitions(file_state, {})
        assert file_state.error is None

    def test_enqueue_appends_to_tail(self, tmp_path):
        state = ProcessingState([tmp_path / "a.json"])
        extra = FileState(tmp_path / "b.json")
        state.enqueue(extra)
        assert file_names(state.pending_files) == ["a.json", "b.json"]

    def test_redefinition_updates_entry_in_place(self, tmp_path):
        state = ProcessingState([tmp_path / "a.json", tmp_path / "b.json"])
        a = state.next_pending()
        b = state.next_pending()

        state.commit_new_definitions(a, {"T": "from-a"})
        entry = state.type_states["T"]
        state.commit_new_definitions(b, {"T": "from-b"})

        assert len(state.type_states) == 1
        assert state.type_states["T"] is entry
        assert entry.definition == "from-b"
        assert entry.source_file == tmp_path / "b.json"
        assert state.resolved_types() == {"T": "from-b"}

    def test_usable_types_exclude_duplicate_names(self, tmp_path):
        definer = FileState(tmp_path / "definer.json", duplicate_type_names=frozenset())
        dup = FileState(tmp_path / "dup.json", duplicate_type_names={"T"})
        state = ProcessingState([definer, dup])

        state.commit_new_definitions(state.next_pending(), {"T": "t", "U": "u"})

        assert state.determine_usable_types(dup) == {"U": "u"}
        assert state.determine_usable_types(definer) == {"T": "t", "U": "u"}

    def test_type_states_view_is_read_only(self, tmp_path):
        state = ProcessingState([tmp_path / "a.json"])
        with pytest.raises(TypeError):
            state.type_states["T"] = None


class TestDependencyResolverWithFakeParser:
    """Fixed-point behavior of the driving loop."""

    def resolve(self, tmp_path, files, order):
        parser = FakeParser(files)
        result = DependencyResolver(parser).resolve([tmp_path / name for name in order])
        return parser, result

    def test_independent_files_resolve_on_first_attempt(self, tmp_path):
        files = {
            "a.json": ({"A": 1}, set()),
            "b.json": ({"B": 2}, set()),
            "c.json": ({"C": 3}, set()),
        }
        parser, result = self.resolve(tmp_path, files, ["a.json", "b.json", "c.json"])
        assert parser.calls == ["a.json", "b.json", "c.json"]
        assert result.failed_files == []
        assert result.succeeded
        assert result.attempts == 3

    @pytest.mark.parametrize("order", [["a.json", "b.json"], ["b.json", "a.json"]])
    def test_order_independence(self, tmp_path, order):
        files = {
            "a.json": ({"T": "t-def"}, set()),
            "b.json": ({"U": "u-def"}, {"T"}),
        }
        _, result = self.resolve(tmp_path, files, order)
        assert result.succeeded
        assert result.definitions() == {"T": "t-def", "U": "u-def"}
        assert result.types["T"].source_file == tmp_path / "a.json"

    def test_cycle_fails_and_terminates(self, tmp_path):
        files = {
            "a.json": ({"TA": 1}, {"TB"}),
            "b.json": ({"TB": 2}, {"TA"}),
        }
        parser, result = self.resolve(tmp_path, files, ["a.json", "b.json"])
        assert parser.calls == ["a.json", "b.json"]
        assert file_names(result.failed_files) == ["a.json", "b.json"]
        assert result.types == {}
        assert all(isinstance(f.error, UnresolvedReferenceError) for f in result.failed_files)

    def test_cycle_does_not_block_unrelated_files(self, tmp_path):
        files = {
            "a.json": ({"TA": 1}, {"TB"}),
            "b.json": ({"TB": 2}, {"TA"}),
            "c.json": ({"TC": 3}, set()),
        }
        parser, result = self.resolve(tmp_path, files, ["a.json", "b.json", "c.json"])
        # c's success requeues a and b once more before they are given up
        assert parser.calls == ["a.json", "b.json", "c.json", "a.json", "b.json"]
        assert file_names(result.resolved_files) == ["c.json"]
        assert file_names(result.failed_files) == ["a.json", "b.json"]
        assert set(result.types) == {"TC"}

    def test_last_definition_wins(self, tmp_path):
        files = {
            "a.json": ({"T": "from-a"}, set()),
            "b.json": ({"T": "from-b"}, set()),
        }
        _, result = self.resolve(tmp_path, files, ["a.json", "b.json"])
        assert result.types["T"].definition == "from-b"
        assert result.types["T"].source_file == tmp_path / "b.json"

    def test_duplicate_names_are_not_offered_to_parser(self, tmp_path):
        files = {
            "a.json": ({"T": "from-a"}, set()),
            "dup.json": ({"T": "local"}, set()),
        }
        parser = FakeParser(files)
        dup = FileState(tmp_path / "dup.json", duplicate_type_names={"T"})
        state = ProcessingState([FileState(tmp_path / "a.json"), dup])

        while state.has_pending_work():
            file_state = state.next_pending()
            new_types = parser.parse(file_state.source_file, state.determine_usable_types(file_state))
            state.commit_new_definitions(file_state, new_types)

        assert parser.bindings["dup.json"] == [{}]

    def test_forward_order_trace(self, tmp_path, xyz_files):
        parser, result = self.resolve(tmp_path, xyz_files, ["x.json", "y.json", "z.json"])
        assert parser.calls == ["x.json", "y.json", "z.json"]
        assert result.succeeded
        assert set(result.types) == {"foo", "bar", "baz"}

    def test_reversed_order_trace(self, tmp_path, xyz_files):
        parser, result = self.resolve(tmp_path, xyz_files, ["y.json", "z.json", "x.json"])
        assert parser.calls == ["y.json", "z.json", "x.json", "y.json", "z.json"]
        assert parser.bindings["y.json"] == [{}, {"foo": "foo-def"}]
        assert file_names(result.resolved_files) == ["x.json", "y.json", "z.json"]
        assert result.succeeded
        assert result.definitions() == {"foo": "foo-def", "bar": "bar-def", "baz": "baz-def"}

    def test_duplicate_inputs_are_attempted_once(self, tmp_path):
        files = {"a.json": ({"A": 1}, set())}
        parser, result = self.resolve(tmp_path, files, ["a.json", "a.json"])
        assert parser.calls == ["a.json"]
        assert result.attempts == 1

    def test_unexpected_parser_errors_propagate(self, tmp_path):
        class BrokenParser:
            def parse(self, source_file, known_types):
                raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            DependencyResolver(BrokenParser()).resolve([tmp_path / "a.json"])
