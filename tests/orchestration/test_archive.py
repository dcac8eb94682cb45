"""Tests for saving and restoring conversation history."""

from knowledge import MemoryBlobStore
from orchestration import ConversationArchive, Coordinator
from orchestration.archive import CONVERSATION_KEY


class BrokenPort:
    def load(self, key):
        raise OSError("gone")

    def save(self, key, blob):
        raise OSError("gone")

    def delete(self, key):
        raise OSError("gone")


class TestConversationArchive:
    def test_round_trip(self, store, port, clock, id_factory):
        coordinator = Coordinator(store=store, clock=clock, id_factory=id_factory)
        coordinator.process_message("Please improve the grammar and tone of my essay")
        archive = ConversationArchive(port)
        archive.save(coordinator.get_conversation_history())

        restored = ConversationArchive(port).load()

        original = coordinator.get_conversation_history()
        assert [m.id for m in restored] == [m.id for m in original]
        assert restored[1].agent_id == "writing-agent"
        assert [a.type for a in restored[1].metadata["actions"]] == ["improve_text", "adjust_tone"]
        assert restored == original

    def test_restore_into_new_session(self, store, port, clock, id_factory):
        first = Coordinator(store=store, clock=clock, id_factory=id_factory)
        first.process_message("hello")
        ConversationArchive(port).save(first.get_conversation_history())

        second = Coordinator(store=store, clock=clock, id_factory=id_factory)
        second.restore_conversation_history(ConversationArchive(port).load())
        assert len(second.get_conversation_history()) == 2

    def test_empty(self):
        assert ConversationArchive(MemoryBlobStore()).load() == []

    def test_corrupt_blob(self):
        port = MemoryBlobStore({CONVERSATION_KEY: "{{{"})
        assert ConversationArchive(port).load() == []

    def test_bad_messages_skipped(self):
        port = MemoryBlobStore(
            {
                CONVERSATION_KEY: '[{"id": "m1", "role": "user", "content": "hi", '
                '"timestamp": "2026-10-19T10:00:00"}, {"id": "m2", "role": "robot"}]'
            }
        )
        assert [m.id for m in ConversationArchive(port).load()] == ["m1"]

    def test_clear(self, port):
        archive = ConversationArchive(port)
        archive.save([])
        archive.clear()
        assert CONVERSATION_KEY not in port.blobs

    def test_port_failures_swallowed(self):
        archive = ConversationArchive(BrokenPort())
        assert archive.load() == []
        archive.save([])
        archive.clear()
