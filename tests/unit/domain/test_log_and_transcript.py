"""Tests for ExecutionLog and ConversationTranscript."""

from pipeline_console.domain.entities.execution_log import (
    START_NOTICE,
    ExecutionLog,
    error_notice,
    missing_field_notice,
    success_notice,
)
from pipeline_console.domain.entities.transcript import ConversationTranscript, Sender, sender_for


class TestExecutionLog:

    def test_append_order(self):
        log = ExecutionLog()
        log.append(START_NOTICE)
        log.append(success_notice("ok"))
        assert log.entries() == ["Working on it...", "Execution result: ok."]

    def test_reset_clears(self):
        log = ExecutionLog()
        log.append("x")
        log.reset()
        assert log.entries() == []
        assert len(log) == 0

    def test_entries_returns_copy(self):
        log = ExecutionLog()
        log.append("x")
        log.entries().append("y")
        assert log.entries() == ["x"]

    def test_notice_texts(self):
        assert missing_field_notice("repository_path") == 'Mandatory setting field missing: fill "repository_path".'
        assert error_notice("boom") == "Error: boom."


class TestConversationTranscript:

    def test_parity_labels(self):
        transcript = ConversationTranscript()
        for turn in ["q1", "a1", "q2", "a2"]:
            transcript.append(turn)
        assert [s for s, _ in transcript.labelled()] == [
            Sender.OPERATOR,
            Sender.ASSISTANT,
            Sender.OPERATOR,
            Sender.ASSISTANT,
        ]
        assert transcript.turns() == ["q1", "a1", "q2", "a2"]

    def test_sender_for(self):
        assert sender_for(0) is Sender.OPERATOR
        assert sender_for(7) is Sender.ASSISTANT
        assert Sender.OPERATOR.value == "You"
        assert Sender.ASSISTANT.value == "Jon"
