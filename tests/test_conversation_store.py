"""Tests for the in-memory conversation store and message log."""

import threading

import pytest
from pydantic import ValidationError

from integration_chat.services.conversation import (
    InMemoryConversationStore,
    Message,
    MessageLog,
    Role,
)


class TestMessage:
    def test_to_openai_shape(self):
        assert Message.user("hi").to_openai() == {"role": "user", "content": "hi"}
        assert Message.system("be nice").to_openai() == {"role": "system", "content": "be nice"}

    def test_messages_are_immutable(self):
        message = Message.assistant("done")
        with pytest.raises(ValidationError):
            message.text = "changed"

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            Message(role="tool", text="x")


class TestGetOrCreate:
    def test_generates_id_when_absent(self, store):
        conversation_id, log = store.get_or_create()
        assert conversation_id
        assert len(log) == 0
        assert conversation_id in store

    def test_generated_ids_are_unique(self, store):
        ids = {store.get_or_create()[0] for _ in range(50)}
        assert len(ids) == 50

    def test_known_id_returns_same_log(self, store):
        conversation_id, log = store.get_or_create()
        log.append(Message.user("hello"))

        resolved_id, same_log = store.get_or_create(conversation_id)
        assert resolved_id == conversation_id
        assert same_log is log
        assert len(same_log) == 1

    def test_unknown_id_is_created_as_is(self, store):
        conversation_id, log = store.get_or_create("my-conversation")
        assert conversation_id == "my-conversation"
        assert len(log) == 0

    def test_seed_only_applies_on_creation(self, store):
        seed = (Message.system("You are a helpful assistant."),)
        conversation_id, log = store.get_or_create(seed=seed)
        assert [m.role for m in log] == [Role.SYSTEM]

        store.get_or_create(conversation_id, seed=seed)
        assert len(log) == 1


class TestAppend:
    def test_sequential_appends_keep_order(self, store):
        conversation_id, _ = store.get_or_create()
        for i in range(10):
            store.append(conversation_id, Message.user(f"message {i}"))

        log = store.get(conversation_id)
        assert [m.text for m in log] == [f"message {i}" for i in range(10)]

    def test_append_to_unknown_id_creates_conversation(self, store):
        store.append("fresh", Message.user("hi"))
        assert len(store.get("fresh")) == 1

    def test_extend_is_not_interleaved(self, store):
        conversation_id, log = store.get_or_create()

        def writer(n):
            for i in range(100):
                store.extend(conversation_id, (Message.user(f"{n}-{i}"), Message.assistant(f"{n}-{i}")))

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        messages = log.snapshot()
        assert len(messages) == 800
        for user, assistant in zip(messages[::2], messages[1::2]):
            assert user.role is Role.USER
            assert assistant.role is Role.ASSISTANT
            assert user.text == assistant.text

    def test_snapshot_is_a_copy(self, store):
        conversation_id, log = store.get_or_create()
        snapshot = log.snapshot()
        log.append(Message.user("later"))
        assert snapshot == ()
        assert len(log) == 1


class TestDelete:
    def test_delete(self, store):
        conversation_id, _ = store.get_or_create()
        assert store.delete(conversation_id) is True
        assert store.get(conversation_id) is None
        assert store.delete(conversation_id) is False


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestLimits:
    def test_max_messages_keeps_system_preamble(self):
        log = MessageLog("c", [Message.system("preamble")], max_messages=3)
        for i in range(4):
            log.append(Message.user(str(i)))

        assert [m.text for m in log] == ["preamble", "2", "3"]

    def test_max_messages_drops_whole_turns(self):
        log = MessageLog("c", [Message.system("preamble")], max_messages=4)
        log.extend((Message.user("q1"), Message.assistant("a1")))
        log.extend((Message.user("q2"), Message.assistant("a2")))

        assert [m.text for m in log] == ["preamble", "q2", "a2"]

    def test_max_messages_never_leaves_leading_assistant(self):
        log = MessageLog("c", max_messages=3)
        log.extend((Message.user("q1"), Message.assistant("a1")))
        log.extend((Message.user("q2"), Message.assistant("a2")))

        messages = log.snapshot()
        assert messages[0].role is Role.USER
        assert [m.text for m in messages] == ["q2", "a2"]

    def test_max_conversations_evicts_least_recently_used(self):
        store = InMemoryConversationStore(max_conversations=2)
        store.get_or_create("a")
        store.get_or_create("b")
        store.get_or_create("a")  # touch
        store.get_or_create("c")

        assert "a" in store
        assert "b" not in store
        assert "c" in store
        assert len(store) == 2

    def test_ttl_evicts_idle_conversations(self):
        clock = FakeClock()
        store = InMemoryConversationStore(ttl_seconds=60, timer=clock)
        store.get_or_create("old")

        clock.now = 120
        assert store.get("old") is None
        assert len(store) == 0

    def test_ttl_counts_from_last_use(self):
        clock = FakeClock()
        store = InMemoryConversationStore(ttl_seconds=60, timer=clock)
        _, log = store.get_or_create("active")

        clock.now = 50
        store.get_or_create("active")
        clock.now = 100
        assert store.get("active") is log

        clock.now = 200
        assert "active" not in store

    def test_ttl_with_max_conversations(self):
        clock = FakeClock()
        store = InMemoryConversationStore(max_conversations=1, ttl_seconds=60, timer=clock)
        store.get_or_create("a")
        store.get_or_create("b")

        assert "a" not in store
        assert "b" in store

    def test_unbounded_by_default(self, store):
        conversation_id, log = store.get_or_create()
        for i in range(500):
            log.append(Message.user(str(i)))
        assert len(log) == 500


class TestSave:
    def test_restores_evicted_log(self):
        store = InMemoryConversationStore(max_conversations=1)
        _, log = store.get_or_create("mine")
        store.get_or_create("other")
        assert "mine" not in store

        log.extend((Message.user("hi"), Message.assistant("hello")))
        store.save(log)

        assert store.get("mine") is log
        assert len(store.get("mine")) == 2

    def test_keeps_newer_log_under_same_id(self, store):
        _, stale = store.get_or_create("c1")
        store.delete("c1")
        _, fresh = store.get_or_create("c1")

        store.save(stale)
        assert store.get("c1") is fresh

    def test_extend_after_idle_timeout_starts_fresh_log(self):
        clock = FakeClock()
        store = InMemoryConversationStore(ttl_seconds=60, timer=clock)
        store.extend("c1", (Message.user("hi"),))

        clock.now = 120
        assert "c1" not in store
        store.extend("c1", (Message.user("again"),))
        assert [m.text for m in store.get("c1")] == ["again"]
