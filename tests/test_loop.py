import pytest

from tool_chat.errors import ToolLoopExceededError
from tool_chat.models.message import Message
from tool_chat.tools.base import ParsedCall, ToolOutcome
from tool_chat.tools.calculator import CalculatorArgs
from tool_chat.tools.loop import ToolLoop, format_tool_result


def test_format_success_result():
    call = ParsedCall("calculator", CalculatorArgs("add", 2.0, 2.0))
    text = format_tool_result(call, ToolOutcome.success(4.0))
    assert text == (
        'You executed calculator({"operation": "add", "a": 2, "b": 2}); result = 4. '
        "Use this to reply to the user."
    )


def test_format_failure_result_names_tool_and_error():
    call = ParsedCall("calculator", CalculatorArgs("divide", 5.0, 0.0))
    text = format_tool_result(call, ToolOutcome.failure("Division by zero is not allowed."))
    assert text.startswith("You executed calculator(")
    assert '"operation": "divide"' in text
    assert "Division by zero is not allowed." in text
    assert text.endswith("Use this to reply to the user.")


def test_plain_reply_ends_loop(registry, scripted_client):
    client = scripted_client("  Hello!  ")
    messages = [Message("user", "hi")]
    loop = ToolLoop(registry)

    response = loop.run(messages, client.chat)

    assert response.content == "Hello!"
    assert [(m.role, m.content) for m in messages] == [("user", "hi"), ("assistant", "Hello!")]
    assert loop.tool_calls == []


def test_tool_call_is_executed_and_result_injected(registry, scripted_client):
    client = scripted_client("CALL_TOOL multiply 6 7", "It is 42.")
    messages = [Message("user", "6*7?")]
    seen_calls, seen_results = [], []
    loop = ToolLoop(registry, on_tool_call=seen_calls.append, on_tool_result=seen_results.append)

    response = loop.run(messages, client.chat)

    assert response.content == "It is 42."
    assert [m.role for m in messages] == ["user", "assistant", "user", "assistant"]
    assert messages[2].content.startswith("You executed calculator(")
    assert "result = 42" in messages[2].content
    assert len(client.requests) == 2
    # second request carries the synthetic result
    assert client.requests[1][-1] == ("user", messages[2].content)
    assert [c.tool_name for c in seen_calls] == ["calculator"]
    assert seen_results[0].outcome.value == 42


def test_failed_tool_is_reported_to_model(registry, scripted_client):
    client = scripted_client("CALL_TOOL divide 1 0", "You can't divide by zero.")
    messages = [Message("user", "1/0?")]
    loop = ToolLoop(registry)

    loop.run(messages, client.chat)

    assert loop.tool_calls[0].outcome.ok is False
    assert "Division by zero is not allowed." in messages[2].content


def test_iteration_limit(registry, scripted_client):
    client = scripted_client("CALL_TOOL add 1 1", "CALL_TOOL add 2 2", "CALL_TOOL add 3 3", "done")
    messages = [Message("user", "loop")]
    loop = ToolLoop(registry, max_iterations=2)

    with pytest.raises(ToolLoopExceededError) as exc_info:
        loop.run(messages, client.chat)

    assert exc_info.value.limit == 2
    assert len(loop.tool_calls) == 2
    assert len(client.requests) == 3


def test_no_limit_allows_many_calls(registry, scripted_client):
    replies = [f"CALL_TOOL add {i} 1" for i in range(25)] + ["finished"]
    client = scripted_client(*replies)
    loop = ToolLoop(registry, max_iterations=None)

    response = loop.run([Message("user", "go")], client.chat)

    assert response.content == "finished"
    assert len(loop.tool_calls) == 25


def test_transport_error_propagates(registry, scripted_client):
    client = scripted_client("CALL_TOOL add 1 1", RuntimeError("down"))
    messages = [Message("user", "x")]

    with pytest.raises(RuntimeError, match="down"):
        ToolLoop(registry).run(messages, client.chat)

    assert [m.role for m in messages] == ["user", "assistant", "user"]
