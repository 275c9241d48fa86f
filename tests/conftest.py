"""Pytest configuration for the smart trip planner project."""
from __future__ import annotations

import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, List, Mapping, Tuple, Union

import pytest
from jose import jwt
from langchain_core.messages import AIMessage, BaseMessage

# Ensure the project root is on sys.path so that import smart_trip works under pytest.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from smart_trip.core.llm import LLMClient  # noqa: E402
from smart_trip.core.schemas import Location, TripData  # noqa: E402

Reply = Union[str, BaseException]


def _message_text(message: BaseMessage) -> str:
    content = message.content
    if isinstance(content, list):
        return "\n".join(
            block.get("text", "") for block in content if isinstance(block, dict) and block.get("type") == "text"
        )
    return str(content)


class FakeChatModel:
    """Chat model double.

    ``replies`` is either a mapping from a prompt keyword to the reply (used
    when calls run concurrently) or a list consumed in call order. A reply
    that is an exception is raised instead of returned.
    """

    model_name = "fake-chat"

    def __init__(self, replies: Union[Mapping[str, Reply], List[Reply]]) -> None:
        self.replies = replies
        self.calls: List[List[BaseMessage]] = []
        self.bindings: List[dict] = []

    def bind(self, **kwargs: Any) -> "FakeChatModel":
        self.bindings.append(kwargs)
        return self

    async def ainvoke(self, messages: List[BaseMessage]) -> AIMessage:
        self.calls.append(messages)
        reply = self._reply_for(_message_text(messages[-1]))
        if isinstance(reply, BaseException):
            raise reply
        return AIMessage(content=reply)

    def _reply_for(self, prompt: str) -> Reply:
        if isinstance(self.replies, Mapping):
            for keyword, reply in self.replies.items():
                if keyword in prompt:
                    return reply
            raise AssertionError(f"No scripted reply for prompt: {prompt[:80]!r}")
        if not self.replies:
            raise AssertionError("Reply queue exhausted")
        return self.replies.pop(0)

    def prompts(self) -> List[str]:
        return [_message_text(messages[-1]) for messages in self.calls]


@pytest.fixture
def make_llm() -> Callable[[Any], Tuple[LLMClient, FakeChatModel]]:
    def _make(replies: Union[Mapping[str, Reply], List[Reply]]) -> Tuple[LLMClient, FakeChatModel]:
        model = FakeChatModel(replies)
        return LLMClient(model), model

    return _make


@pytest.fixture
def jaipur() -> Location:
    return Location(name="Jaipur", display_name="Jaipur, Rajasthan, India", lat=26.9124, lng=75.7873, country="India")


@pytest.fixture
def delhi() -> Location:
    return Location(name="Delhi", display_name="New Delhi, Delhi, India", lat=28.6139, lng=77.2090, country="India")


@pytest.fixture
def trip(delhi: Location, jaipur: Location) -> TripData:
    return TripData(
        start_location=delhi,
        destination=jaipur,
        start_date=date(2025, 11, 10),
        end_date=date(2025, 11, 12),
        travelers="Duo",
        budget="Moderate",
        transport="Train",
    )


@pytest.fixture
def sign_token() -> Callable[..., str]:
    """Sign a session token the way the front-end does after sign-in."""

    def _sign(email: str, *, secret: str, expires_in: timedelta = timedelta(days=30)) -> str:
        now = datetime.now(timezone.utc)
        claims = {"sub": email, "email": email, "iat": now, "exp": now + expires_in}
        return jwt.encode(claims, secret, algorithm="HS256")

    return _sign
