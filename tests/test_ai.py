import json

import pytest

from dev2050.modules.ai import ai_service
from dev2050.modules.ai.schemas import ChatMessage, ChatRequest, ChatRole
from dev2050.modules.learning_path.schemas import UserProfile


@pytest.fixture
def model_calls(monkeypatch):
    """Replace the model call with a scripted reply and record the prompts sent."""
    calls = []
    state = {"reply": "ok", "error": None}

    async def fake_generate(contents, system_instruction=None):
        calls.append({"contents": contents, "system_instruction": system_instruction})
        if state["error"] is not None:
            raise state["error"]
        return state["reply"]

    monkeypatch.setattr(ai_service, "generate_text", fake_generate)
    return calls, state


def test_strip_code_fences():
    assert ai_service.strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert ai_service.strip_code_fences('{"a": 1}') == '{"a": 1}'


async def test_quote_strips_quotation_marks(model_calls):
    calls, state = model_calls
    state["reply"] = '"Ship small, ship often."'
    assert await ai_service.get_motivational_quote() == "Ship small, ship often."
    assert len(calls) == 1


async def test_quote_falls_back_on_failure(model_calls):
    _, state = model_calls
    state["error"] = RuntimeError("quota exceeded")
    assert await ai_service.get_motivational_quote() == "Build something amazing today."


async def test_answer_for_empty_query_makes_no_call(model_calls):
    calls, _ = model_calls
    assert await ai_service.get_ai_answer("   ") is None
    assert calls == []


async def test_answer_includes_query_and_returns_none_on_error(model_calls):
    calls, state = model_calls
    state["reply"] = "**React** is a UI library."
    assert await ai_service.get_ai_answer("React") == "**React** is a UI library."
    assert "Query: React" in calls[0]["contents"]

    state["error"] = RuntimeError("down")
    assert await ai_service.get_ai_answer("React") is None


async def test_chat_sends_history_with_roles(model_calls):
    calls, state = model_calls
    state["reply"] = "Use a goroutine."
    messages = [
        ChatMessage(role=ChatRole.USER, content="How do I run things concurrently in Go?"),
        ChatMessage(role=ChatRole.MODEL, content="What are you trying to do?"),
        ChatMessage(role=ChatRole.USER, content="Fetch two URLs at once."),
    ]

    assert await ai_service.chat(messages) == "Use a goroutine."

    contents = calls[0]["contents"]
    assert [c["role"] for c in contents] == ["user", "model", "user"]
    assert contents[-1]["parts"][0]["text"] == "Fetch two URLs at once."
    assert calls[0]["system_instruction"] == ai_service.CHAT_INSTRUCTION


async def test_chat_falls_back_on_error(model_calls):
    _, state = model_calls
    state["error"] = RuntimeError("down")
    reply = await ai_service.chat([ChatMessage(role=ChatRole.USER, content="hi")])
    assert reply == ai_service.FALLBACK_CHAT_REPLY


def test_chat_request_must_end_with_user_message():
    with pytest.raises(ValueError):
        ChatRequest(messages=[{"role": "model", "content": "hello"}])


async def test_json_generator_pretty_prints_valid_json(model_calls):
    _, state = model_calls
    state["reply"] = '```json\n{"name":"Ada","age":36}\n```'
    body = await ai_service.generate_request_body("a user with name and age")
    assert json.loads(body) == {"name": "Ada", "age": 36}
    assert body.startswith("{\n  ")


async def test_json_generator_rejects_invalid_json(model_calls):
    _, state = model_calls
    state["reply"] = "Sure! Here is your JSON: {name: Ada}"
    assert await ai_service.generate_request_body("a user") is None


async def test_learning_plan_drops_untitled_steps(model_calls):
    _, state = model_calls
    state["reply"] = json.dumps({
        "title": "Go Backend",
        "steps": [{"title": "Go syntax", "estimated_hours": 10}, {"description": "no title"}],
    })
    profile = UserProfile(
        skill_level="beginner", target_role="Backend Developer", hours_per_week=5,
        learning_style="mixed", current_skills=[],
    )
    plan = await ai_service.generate_learning_plan(profile)
    assert plan["title"] == "Go Backend"
    assert [s["title"] for s in plan["steps"]] == ["Go syntax"]


async def test_learning_plan_without_steps_is_discarded(model_calls):
    _, state = model_calls
    state["reply"] = json.dumps({"title": "Empty", "steps": []})
    profile = UserProfile(
        skill_level="beginner", target_role="Backend Developer", hours_per_week=5,
        learning_style="mixed",
    )
    assert await ai_service.generate_learning_plan(profile) is None


async def test_quote_route_is_always_available(client, model_calls):
    _, state = model_calls
    state["reply"] = "Keep shipping."
    response = await client.get("/ai/quote")
    assert response.status_code == 200
    assert response.json() == {"quote": "Keep shipping."}


async def test_beta_routes_are_hidden_when_disabled(client, model_calls):
    calls, _ = model_calls
    response = await client.post("/ai/answer", json={"query": "React"})
    assert response.status_code == 404
    assert calls == []


async def test_beta_routes_when_enabled(client, model_calls, enable_beta):
    _, state = model_calls
    state["reply"] = "An answer."

    answer = await client.post("/ai/answer", json={"query": "React"})
    assert answer.json() == {"answer": "An answer."}

    chat = await client.post("/ai/chat", json={"messages": [{"role": "user", "content": "hi"}]})
    assert chat.json()["message"] == {"role": "model", "content": "An answer."}

    state["reply"] = "not json"
    generated = await client.post("/ai/json-generator", json={"prompt": "a user"})
    assert generated.status_code == 502
