# tests/unit/memory/test_state_manager.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Unit tests for DialogStateManager path reads, writes and deletes."""

import pytest

from agent_dialogs.config import DialogsConfig
from agent_dialogs.dialog import DialogInstance, DialogState
from agent_dialogs.dialog_context import DialogContext
from agent_dialogs.errors import (
    DialogConfigurationError,
    Errors,
    MemoryBindingError,
    PathError,
)
from agent_dialogs.memory.component import DialogsComponentRegistration
from agent_dialogs.memory.constants import (
    CONVERSATION_STATE_KEY,
    STATE_MANAGER_CONFIGURATION_KEY,
    USER_STATE_KEY,
    TurnPath,
)
from agent_dialogs.memory.path_resolvers import AliasPathResolver
from agent_dialogs.memory.scopes import TurnMemoryScope
from agent_dialogs.memory.state_manager import (
    DialogStateManager,
    DialogStateManagerConfiguration,
)
from agent_dialogs.recognizer_result import IntentScore, RecognizerResult
from agent_dialogs.turn_context import TurnContext


def make_configuration(**kwargs) -> DialogStateManagerConfiguration:
    return DialogsComponentRegistration(DialogsConfig(**kwargs)).create_configuration()


@pytest.fixture
def child(form_contexts):
    """Context of the prompt dialog running inside the form container."""
    return form_contexts[1]


@pytest.fixture
def state(child):
    return child.state


class TestGetSetValue:
    """Tests for get_value and set_value."""

    def test_turn_round_trip(self, state, turn_context):
        """Test a value written to turn memory reads back."""
        state.set_value("turn.foo.bar", 3)
        assert state.get_value("turn.foo.bar") == 3
        assert turn_context.turn_state["turn"] == {"foo": {"bar": 3}}

    def test_missing_returns_default(self, state):
        """Test missing segments yield the default rather than an error."""
        assert state.get_value("turn.nothing.here", "fallback") == "fallback"
        assert state.get_value("turn.nothing") is None

    def test_stored_none_returns_default(self, state):
        """Test a stored None reads as the default."""
        state.set_value("turn.empty", None)
        assert state.get_value("turn.empty", "fallback") == "fallback"

    def test_empty_path_returns_default(self, state):
        """Test empty paths read as the default."""
        assert state.get_value("", 5) == 5
        assert state.get_value("   ", 5) == 5

    def test_empty_path_write_rejected(self, state):
        """Test writing an empty path raises PATH_NOT_SPECIFIED."""
        with pytest.raises(PathError) as exc_info:
            state.set_value("", 1)
        assert exc_info.value.code == Errors.PATH_NOT_SPECIFIED.code

    def test_dialog_scope_binds_container(self, form_contexts):
        """Test dialog memory of a leaf is its container's instance state."""
        root, child = form_contexts
        child.state.set_value("dialog.name", "Ada")
        assert root.active_dialog.state["name"] == "Ada"
        assert root.state.get_value("dialog.name") == "Ada"
        assert child.state.get_value("$step") == "name"

    def test_this_scope(self, state):
        """Test this memory is the active instance's own state."""
        assert state.get_value("this.attempt") == 1
        state.set_value("this.attempt", 2)
        assert state.get_value("this.attempt") == 2

    def test_default_scope(self, form_contexts):
        """Test paths without a scope name are relative to dialog memory."""
        root, child = form_contexts
        assert child.state.get_value("step") == "name"
        child.state.set_value("color", "red")
        assert root.active_dialog.state["color"] == "red"

    def test_case_insensitive_keys(self, state, turn_context):
        """Test property keys match case-insensitively, reusing the stored key."""
        state.set_value("turn.Greeting", "hi")
        assert state.get_value("turn.greeting") == "hi"
        state.set_value("turn.GREETING", "yo")
        assert turn_context.turn_state["turn"] == {"Greeting": "yo"}

    def test_scope_names_case_sensitive(self, state):
        """Test a differently cased scope name is not a scope."""
        state.set_value("turn.x", 1)
        assert state.get_value("TURN.x") is None

    def test_list_writes(self, state):
        """Test list creation, appends and out-of-range writes."""
        state.set_value("turn.items[0]", "a")
        state.set_value("turn.items[1]", "b")
        assert state.get_value("turn.items") == ["a", "b"]
        assert state.get_value("turn.items[9]", "none") == "none"

        with pytest.raises(PathError) as exc_info:
            state.set_value("turn.items[5]", "z")
        assert exc_info.value.code == Errors.UNABLE_TO_UPDATE_VALUE.code

    def test_creates_intermediate_containers(self, state):
        """Test missing intermediates become lists before indices, dicts otherwise."""
        state.set_value("turn.rows[0].name", "x")
        assert state.get_value("turn.rows") == [{"name": "x"}]

    def test_scalar_in_middle(self, state):
        """Test writing below a scalar raises UNABLE_TO_UPDATE_VALUE."""
        state.set_value("turn.count", 1)
        with pytest.raises(PathError) as exc_info:
            state.set_value("turn.count.value", 2)
        assert exc_info.value.code == Errors.UNABLE_TO_UPDATE_VALUE.code

    def test_negative_index(self, state):
        """Test negative indices are rejected."""
        with pytest.raises(PathError) as exc_info:
            state.set_value("turn.items[-1]", "a")
        assert exc_info.value.code == Errors.NEGATIVE_INDEX_NOT_ALLOWED.code

    def test_set_scope_root(self, state):
        """Test a path naming only a scope replaces its memory."""
        state.set_value("turn", {"a": 1})
        assert state.get_value("turn.a") == 1

    def test_set_scope_root_none(self, state):
        """Test replacing scope memory with None is rejected."""
        with pytest.raises(MemoryBindingError) as exc_info:
            state.set_value("turn", None)
        assert exc_info.value.code == Errors.UNDEFINED_MEMORY_OBJECT.code

    def test_read_only_scope(self, state):
        """Test writes into the class scope are not supported."""
        with pytest.raises(MemoryBindingError) as exc_info:
            state.set_value("class.prompt", "changed")
        assert exc_info.value.code == Errors.MEMORY_SCOPE_OPERATION_NOT_SUPPORTED.code

        with pytest.raises(MemoryBindingError) as exc_info:
            state.set_value("class", {})
        assert exc_info.value.code == Errors.MEMORY_SCOPE_OPERATION_NOT_SUPPORTED.code

    def test_mapping_access(self, state):
        """Test item access and membership delegate to path operations."""
        state["turn.x"] = 1
        assert "turn.x" in state
        assert state["turn.x"] == 1
        del state["turn.x"]
        assert "turn.x" not in state


class TestAliases:
    """Tests for alias paths against turn memory."""

    @pytest.fixture
    def recognized(self, state):
        result = RecognizerResult(
            text="book a flight to seattle",
            intents={"BookFlight": IntentScore(score=0.9), "Cancel": IntentScore(score=0.1)},
            entities={
                "city": ["Seattle", "Portland"],
                "address": [{"street": "Main"}],
            },
        )
        state.set_value(TurnPath.RECOGNIZED, result.to_memory())
        return state

    def test_at_first_entity(self, recognized):
        """Test @entity reads the first value."""
        assert recognized.get_value("@city") == "Seattle"
        assert recognized.get_value("@address.street") == "Main"

    def test_at_at_all_entities(self, recognized):
        """Test @@entity reads every value."""
        assert recognized.get_value("@@city") == ["Seattle", "Portland"]

    def test_hash_intent(self, recognized):
        """Test #intent reads the intent's score."""
        assert recognized.get_value("#BookFlight.score") == 0.9
        assert recognized.get_value(TurnPath.TOP_INTENT) == "BookFlight"
        assert recognized.get_value(TurnPath.TOP_SCORE) == 0.9
        assert recognized.get_value(TurnPath.TEXT) == "book a flight to seattle"

    def test_missing_entity(self, recognized):
        """Test an unrecognized entity reads as the default."""
        assert recognized.get_value("@country", "none") == "none"

    def test_set_first_entity(self, recognized):
        """Test writing @entity replaces the first value or starts a list."""
        recognized.set_value("@city", "Tacoma")
        assert recognized.get_value("@@city") == ["Tacoma", "Portland"]

        recognized.set_value("@state", "WA")
        assert recognized.get_value("@@state") == ["WA"]

    def test_model_values(self, state):
        """Test paths walk into models stored in memory."""
        state.set_value(
            "turn.recognized",
            RecognizerResult(text="hi", intents={"Greeting": IntentScore(score=0.8)}),
        )
        assert state.get_value("#Greeting.score") == 0.8
        assert state.get_value("turn.recognized.text") == "hi"

    def test_percent_class(self, state):
        """Test %prop reads the active dialog's definition."""
        assert state.get_value("%prompt") == "What is your name?"
        assert state.get_value("%max_turns") == 3

    def test_transform_idempotent(self, state):
        """Test transformed paths are fixed points."""
        for path in ["$name", "#Intent.score", "@city", "@@city", "%prompt", "user.name", "dialog.$x"]:
            once = state.transform_path(path)
            assert state.transform_path(once) == once

    def test_alias_in_middle_is_literal(self, state):
        """Test an alias character after the first segment is part of the key."""
        state.set_value("dialog.$foo", "literal")
        assert state.get_value("dialog.$foo") == "literal"
        assert state.get_value("$foo") is None

    def test_resolution_depth_exceeded(self, child):
        """Test a resolver that never settles fails after max_resolution_depth."""
        configuration = DialogStateManagerConfiguration(
            path_resolvers=[AliasPathResolver("^", "^^")],
            memory_scopes=[TurnMemoryScope()],
        )
        state = DialogStateManager(child, configuration)
        with pytest.raises(PathError) as exc_info:
            state.get_value("^x")
        assert exc_info.value.code == Errors.PATH_RESOLUTION_FAILED.code

    def test_zero_resolution_depth(self, child):
        """Test a depth of zero only accepts canonical paths."""
        state = DialogStateManager(child, make_configuration(max_resolution_depth=0))
        assert state.transform_path("turn.x") == "turn.x"
        with pytest.raises(PathError):
            state.transform_path("$x")


class TestNestedPaths:
    """Tests for bracketed nested paths."""

    def test_nested_index(self, state):
        """Test a nested path's value selects the list element."""
        state.set_value("turn.index", 1)
        state.set_value("turn.items", ["a", "b"])
        assert state.get_value("turn.items[turn.index]") == "b"

    def test_nested_key_write(self, state):
        """Test a nested path's value becomes the key written."""
        state.set_value("turn.key", "color")
        state.set_value("turn.prefs[turn.key]", "red")
        assert state.get_value("turn.prefs") == {"color": "red"}

    def test_nested_disabled(self, child):
        """Test nested paths are rejected when disabled."""
        state = DialogStateManager(child, make_configuration(allow_nested_paths=False))
        with pytest.raises(PathError) as exc_info:
            state.get_value("turn.items[turn.index]")
        assert exc_info.value.code == Errors.INVALID_PATH_CHARACTERS.code


class TestDeleteValue:
    """Tests for delete_value."""

    def test_delete_property(self, state):
        """Test deleting a property leaves its parent."""
        state.set_value("turn.a.b", 1)
        state.delete_value("turn.a.b")
        assert state.get_value("turn.a.b") is None
        assert state.get_value("turn.a") == {}

    def test_delete_list_element(self, state):
        """Test deleting an index removes the element."""
        state.set_value("turn.items", ["a", "b"])
        state.delete_value("turn.items[0]")
        assert state.get_value("turn.items") == ["b"]

    def test_delete_missing_is_noop(self, state):
        """Test deleting something that does not exist does nothing."""
        state.delete_value("turn.nothing.here")
        state.delete_value("turn.items[3]")

    def test_delete_scope_rejected(self, state):
        """Test a path without a segment below the scope is invalid."""
        with pytest.raises(PathError) as exc_info:
            state.delete_value("turn")
        assert exc_info.value.code == Errors.INVALID_DELETE_PATH.code

        with pytest.raises(PathError) as exc_info:
            state.delete_value("")
        assert exc_info.value.code == Errors.INVALID_DELETE_PATH.code

    def test_delete_read_only_settings(self, child, dialogs, activity):
        """Test settings cannot be deleted from and stay intact for later turns."""
        configuration = make_configuration(settings={"luis": {"endpoint": "x"}})
        manager = DialogStateManager(child, configuration)

        with pytest.raises(MemoryBindingError) as exc_info:
            manager.delete_value("settings.luis.endpoint")
        assert exc_info.value.code == Errors.MEMORY_SCOPE_OPERATION_NOT_SUPPORTED.code

        next_turn = DialogContext(dialogs, TurnContext(activity), DialogState())
        next_manager = DialogStateManager(next_turn, configuration)
        assert next_manager.get_value("settings.luis.endpoint") == "x"

    def test_delete_read_only_class(self, state):
        """Test class memory cannot be deleted from."""
        with pytest.raises(MemoryBindingError) as exc_info:
            state.delete_value("class.prompt")
        assert exc_info.value.code == Errors.MEMORY_SCOPE_OPERATION_NOT_SUPPORTED.code
        assert state.get_value("class.prompt") == "What is your name?"

    def test_delete_unbound_dialog(self, greeting_context):
        """Test deleting from dialog memory with no container does nothing."""
        greeting_context.state.delete_value("dialog.x")
        assert greeting_context.active_dialog.state == {"count": 2}


class TestBindingErrors:
    """Tests for writes into unbound scopes."""

    def test_dialog_unbound_without_container(self, greeting_context):
        """Test dialog memory is unbound when no container is active."""
        state = greeting_context.state
        assert state.get_value("dialog.x") is None
        assert state.get_value("this.count") == 2

        with pytest.raises(MemoryBindingError) as exc_info:
            state.set_value("dialog.x", 1)
        assert exc_info.value.code == Errors.ACTIVE_DIALOG_UNDEFINED.code

    def test_empty_stack(self, root_context):
        """Test this and dialog are unbound on an empty stack."""
        state = root_context.state
        assert state.get_value("this.x", "none") == "none"

        with pytest.raises(MemoryBindingError) as exc_info:
            state.set_value("this.x", 1)
        assert exc_info.value.code == Errors.ACTIVE_DIALOG_UNDEFINED.code

        with pytest.raises(MemoryBindingError) as exc_info:
            state.set_value("$x", 1)
        assert exc_info.value.code == Errors.ACTIVE_DIALOG_UNDEFINED.code

    def test_user_state_not_loaded(self, state):
        """Test user writes fail until the state is loaded; reads do not."""
        assert state.get_value("user.name", "none") == "none"
        with pytest.raises(MemoryBindingError) as exc_info:
            state.set_value("user.name", "Ada")
        assert exc_info.value.code == Errors.STATE_KEY_NOT_AVAILABLE.code

    def test_replace_agent_state_root(self, state):
        """Test the user state root object cannot be replaced."""
        with pytest.raises(MemoryBindingError) as exc_info:
            state.set_value("user", {"name": "Ada"})
        assert exc_info.value.code == Errors.CANNOT_REPLACE_ROOT_AGENT_STATE.code


class TestDefaultScopePolicy:
    """Tests for paths naming no registered scope."""

    @pytest.fixture
    def strict_state(self, child):
        return DialogStateManager(child, make_configuration(default_scope=None))

    def test_read_unknown_scope(self, strict_state):
        """Test reading an unknown scope returns the default."""
        assert strict_state.get_value("unknown.x", "d") == "d"

    def test_write_unknown_scope(self, strict_state):
        """Test writing an unknown scope raises SCOPE_NOT_FOUND."""
        with pytest.raises(DialogConfigurationError) as exc_info:
            strict_state.set_value("unknown.x", 1)
        assert exc_info.value.code == Errors.SCOPE_NOT_FOUND.code
        assert "unknown" in str(exc_info.value)

    def test_delete_unknown_scope(self, strict_state):
        """Test deleting from an unknown scope raises SCOPE_NOT_FOUND_FOR_DELETE."""
        with pytest.raises(DialogConfigurationError) as exc_info:
            strict_state.delete_value("unknown.x")
        assert exc_info.value.code == Errors.SCOPE_NOT_FOUND_FOR_DELETE.code


class TestConfiguration:
    """Tests for configuration sharing and validation."""

    def test_configuration_shared(self, form_contexts, turn_context):
        """Test every manager in a turn uses the same configuration."""
        root, child = form_contexts
        assert root.state.configuration is child.state.configuration
        assert turn_context.turn_state[STATE_MANAGER_CONFIGURATION_KEY] is root.state.configuration

    def test_duplicate_scopes(self):
        """Test registering two scopes with one name fails."""
        with pytest.raises(DialogConfigurationError) as exc_info:
            DialogStateManagerConfiguration(memory_scopes=[TurnMemoryScope(), TurnMemoryScope()])
        assert exc_info.value.code == Errors.DUPLICATE_MEMORY_SCOPE.code

    def test_scope_lookup(self, state):
        """Test scopes are looked up by exact name."""
        assert state.get_memory_scope("turn").name == "turn"
        assert state.get_memory_scope("Turn") is None


class TestSnapshot:
    """Tests for get_memory_snapshot."""

    def test_snapshot_scopes(self, state):
        """Test only scopes marked for snapshots are included."""
        snapshot = state.get_memory_snapshot()
        assert set(snapshot) == {"turn", "dialog", "this", "conversation", "user"}
        assert snapshot["dialog"]["step"] == "name"
        assert snapshot["this"] == {"attempt": 1}

    def test_snapshot_is_copy(self, state):
        """Test changing the snapshot leaves memory untouched."""
        snapshot = state.get_memory_snapshot()
        snapshot["this"]["attempt"] = 99
        assert state.get_value("this.attempt") == 1

    def test_snapshot_dumps_child_stack(self, state):
        """Test the container's child stack appears as plain data."""
        snapshot = state.get_memory_snapshot()
        stack = snapshot["dialog"]["dialogs"]["dialog_stack"]
        assert [entry["id"] for entry in stack] == ["prompt"]


class TestPersistence:
    """Tests for loading and saving scopes backed by agent state."""

    @pytest.mark.asyncio
    async def test_user_round_trip(self, dialogs, loaded_turn_context):
        """Test user values read back once the state is loaded."""
        dc = DialogContext(dialogs, loaded_turn_context, DialogState())
        dc.state.set_value("user.profile.name", "Ada")
        assert dc.state.get_value("user.profile.name") == "Ada"
        assert dc.state.get_value("user.profile.missing", "default") == "default"

    @pytest.mark.asyncio
    async def test_values_persist_across_turns(
        self, dialogs, activity, storage, user_state, conversation_state
    ):
        """Test user and conversation values survive into the next turn."""
        services = {USER_STATE_KEY: user_state, CONVERSATION_STATE_KEY: conversation_state}

        first = DialogContext(dialogs, TurnContext(activity, dict(services)), DialogState())
        await first.state.load_all_scopes()
        first.state.set_value("user.profile.name", "Ada")
        first.state.set_value("conversation.topic", "travel")
        await first.state.save_all_changes()

        second = DialogContext(dialogs, TurnContext(activity, dict(services)), DialogState())
        await second.state.load_all_scopes()
        assert second.state.get_value("user.profile.name") == "Ada"
        assert second.state.get_value("conversation.topic") == "travel"

    @pytest.mark.asyncio
    async def test_delete_scopes_memory(self, dialogs, activity, storage, user_state):
        """Test deleting a scope's memory removes it from storage."""
        context = TurnContext(activity, {USER_STATE_KEY: user_state})
        dc = DialogContext(dialogs, context, DialogState())
        await dc.state.load_all_scopes()
        dc.state.set_value("user.name", "Ada")
        await dc.state.save_all_changes()
        assert "test/users/user1" in storage.memory

        await dc.state.delete_scopes_memory("user")
        assert "test/users/user1" not in storage.memory

        await dc.state.delete_scopes_memory("nonexistent")

    @pytest.mark.asyncio
    async def test_container_stack_persists(self, dialogs, activity, conversation_state):
        """Test a dialog stack kept in conversation state round-trips through storage."""
        services = {CONVERSATION_STATE_KEY: conversation_state}

        context = TurnContext(activity, dict(services))
        await conversation_state.load(context)
        stack = DialogState(dialog_stack=[DialogInstance(id="form", state={"step": "name"})])
        root = DialogContext(dialogs, context, stack)
        root.child.stack.append(DialogInstance(id="prompt", state={"attempt": 1}))
        root.state.set_value("conversation.stack", stack)
        await root.state.save_all_changes()

        context = TurnContext(activity, dict(services))
        loaded = await conversation_state.load(context)
        restored = DialogState.model_validate(loaded["stack"])
        root = DialogContext(dialogs, context, restored)
        assert root.child.state.get_value("this.attempt") == 1
        assert root.child.state.get_value("$step") == "name"
