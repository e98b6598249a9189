"""
Unit tests for the instruction preamble injection.
"""

from app.models.chat import ChatMessage
from app.services.prompt import SYSTEM_PROMPT, ensure_system_prompt

INSTRUCTION = "Track containers carefully."


def test_injects_preamble_when_missing():
    messages = [
        ChatMessage(role="user", content="Where is ABC123?"),
        ChatMessage(role="assistant", content="In transit."),
        ChatMessage(role="user", content="ETA?"),
    ]

    result = ensure_system_prompt(messages, INSTRUCTION)

    assert len(result) == len(messages) + 1
    assert result[0] == ChatMessage(role="system", content=INSTRUCTION)
    assert result[1:] == messages


def test_empty_transcript_gets_only_preamble():
    result = ensure_system_prompt([], INSTRUCTION)

    assert result == [ChatMessage(role="system", content=INSTRUCTION)]


def test_default_instruction_is_canonical_prompt():
    result = ensure_system_prompt([ChatMessage(role="user", content="hi")])

    assert result[0].content == SYSTEM_PROMPT


def test_caller_system_message_is_left_alone():
    """A system message anywhere, even duplicated, suppresses injection."""
    messages = [
        ChatMessage(role="user", content="Where is ABC123?"),
        ChatMessage(role="system", content="Be brief."),
        ChatMessage(role="system", content="Be brief."),
    ]

    result = ensure_system_prompt(messages, INSTRUCTION)

    assert result == messages


def test_input_is_not_mutated():
    messages = [ChatMessage(role="user", content="Where is ABC123?")]

    ensure_system_prompt(messages, INSTRUCTION)

    assert len(messages) == 1


def test_idempotent():
    messages = [ChatMessage(role="user", content="Where is ABC123?")]

    once = ensure_system_prompt(messages, INSTRUCTION)
    twice = ensure_system_prompt(once, INSTRUCTION)

    assert twice == once
