import dataclasses

import pytest

from magnus_liber.core.models.chat import ChatHistory, ChatMessage, Role, build_conversation
from magnus_liber.core.models.completion import CompletionRequest, CompletionResult
from magnus_liber.core.errors import MalformedResponseError


def _exchanges(count):
    messages = []
    for i in range(count):
        messages.append(ChatMessage.user(f"question {i}"))
        messages.append(ChatMessage.assistant(f"answer {i}"))
    return messages


class TestChatMessage:

    def test_is_immutable(self):
        message = ChatMessage.user("Who was Trajan?")
        with pytest.raises(dataclasses.FrozenInstanceError):
            message.content = "changed"

    def test_to_dict_uses_wire_role_names(self):
        assert ChatMessage.system("s").to_dict() == {"content": "s", "role": "system"}
        assert ChatMessage.user("u").to_dict() == {"content": "u", "role": "user"}
        assert ChatMessage.assistant("a").to_dict() == {"content": "a", "role": "assistant"}


class TestChatHistory:

    @pytest.mark.parametrize("limit", [2, 3, 4, 10])
    def test_trim_keeps_last_entries_in_order(self, limit):
        existing = _exchanges(6)
        history = ChatHistory(max_messages=limit, messages=list(existing))
        user, assistant = ChatMessage.user("new q"), ChatMessage.assistant("new a")

        history.add_pair(user, assistant)

        expected = (existing + [user, assistant])[-limit:]
        assert len(history) == limit
        assert history.messages == expected

    def test_below_limit_keeps_everything(self):
        history = ChatHistory(max_messages=10)
        history.add_pair(ChatMessage.user("q"), ChatMessage.assistant("a"))

        assert [m.role for m in history.messages] == [Role.USER, Role.ASSISTANT]

    def test_odd_limit_evicts_by_position_not_role(self):
        history = ChatHistory(max_messages=3)
        history.add_pair(ChatMessage.user("q1"), ChatMessage.assistant("a1"))
        history.add_pair(ChatMessage.user("q2"), ChatMessage.assistant("a2"))

        assert [m.content for m in history.messages] == ["a1", "q2", "a2"]

    def test_zero_limit_keeps_nothing(self):
        history = ChatHistory(max_messages=0)
        history.add_pair(ChatMessage.user("q"), ChatMessage.assistant("a"))

        assert len(history) == 0

    def test_snapshot_is_a_copy(self):
        history = ChatHistory(messages=_exchanges(1))
        snapshot = history.snapshot()
        snapshot.append(ChatMessage.user("extra"))

        assert len(history) == 2


class TestBuildConversation:

    def test_system_message_first_and_only_once(self):
        system = ChatMessage.system("persona")
        history = ChatHistory(messages=_exchanges(3))
        user = ChatMessage.user("next")

        conversation = build_conversation(system, history, user)

        assert conversation[0] == system
        assert sum(1 for m in conversation if m.role is Role.SYSTEM) == 1
        assert conversation[1:-1] == history.messages
        assert conversation[-1] == user

    def test_empty_history(self):
        system = ChatMessage.system("persona")
        user = ChatMessage.user("first")

        assert build_conversation(system, ChatHistory(), user) == [system, user]


class TestCompletionModels:

    def test_payload_fields(self, sampling):
        request = CompletionRequest(
            messages=[ChatMessage.system("s"), ChatMessage.user("u")],
            max_tokens=1500,
            sampling=sampling,
        )

        assert request.to_payload() == {
            "messages": [
                {"content": "s", "role": "system"},
                {"content": "u", "role": "user"},
            ],
            "max_tokens": 1500,
            "n": 1,
            "temperature": 0.7,
            "top_p": 0.95,
            "frequency_penalty": 0.0,
            "presence_penalty": 0.0,
        }

    def test_result_holds_exactly_one_outcome(self):
        ok = CompletionResult.success(ChatMessage.assistant("X"))
        failed = CompletionResult.failure(MalformedResponseError("empty"))

        assert ok.ok and ok.error is None
        assert not failed.ok and failed.reply is None
        with pytest.raises(ValueError):
            CompletionResult()
