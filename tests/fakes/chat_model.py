from __future__ import annotations

import asyncio

from langchain_core.messages import AIMessage


class StubChatModel:
    """Stands in for a LangChain chat model: canned reply, raised error, or a stall."""

    def __init__(
        self,
        reply: str = "",
        *,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.reply = reply
        self.error = error
        self.delay = delay
        self.calls: list[list] = []

    async def ainvoke(self, messages):
        self.calls.append(messages)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.reply)

    @property
    def last_prompt(self) -> str:
        return self.calls[-1][0].content
