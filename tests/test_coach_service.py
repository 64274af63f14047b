from types import SimpleNamespace
import uuid

import pytest

from fitcoach.services.coach_service import (
    CoachGenerationError,
    CoachService,
    ConversationNotFoundError,
)
from tests.conftest import StubGenerator


class FakeCoachRepo:
    def __init__(self, conversations, history=None):
        self.conversations = conversations
        self.history = history or []
        self.exchanges = []

    async def get_user_conversation(self, conversation_id, user_id):
        for c in self.conversations:
            if c.id == conversation_id and c.user_id == user_id:
                return c
        return None

    async def get_messages(self, conversation_id):
        return self.history

    async def add_exchange(self, conversation_id, user_content, assistant_content):
        self.exchanges.append((conversation_id, user_content, assistant_content))


@pytest.fixture
def conversation(user_id):
    return SimpleNamespace(id=uuid.uuid4(), user_id=user_id)


async def test_reply_is_persisted_with_history(conversation, user_id, activity_repo):
    history = [SimpleNamespace(role="user", content="Hola"), SimpleNamespace(role="assistant", content="¡Hola!")]
    repo = FakeCoachRepo([conversation], history)
    generator = StubGenerator(text="Prueba 20 minutos de cardio.")
    service = CoachService(repo, activity_repo, generator)

    reply = await service.send_message(user_id, conversation.id, "¿Qué hago hoy?", email="ana@example.com")

    assert reply == "Prueba 20 minutos de cardio."
    assert repo.exchanges == [(conversation.id, "¿Qué hago hoy?", reply)]
    call = generator.calls[0]
    assert [m["role"] for m in call["messages"]] == ["user", "assistant", "user"]
    assert "ana@example.com" in call["system"]
    assert "420" in call["system"]


async def test_foreign_conversation_is_not_found(conversation, activity_repo):
    service = CoachService(FakeCoachRepo([conversation]), activity_repo, StubGenerator())
    with pytest.raises(ConversationNotFoundError):
        await service.send_message(uuid.uuid4(), conversation.id, "hola")


async def test_generation_failure_persists_nothing(conversation, user_id, activity_repo):
    repo = FakeCoachRepo([conversation])
    service = CoachService(repo, activity_repo, StubGenerator(fail_on={1}))

    with pytest.raises(CoachGenerationError):
        await service.send_message(user_id, conversation.id, "hola")
    assert repo.exchanges == []
