from __future__ import annotations

import pytest

from historian.capabilities.guidance import (
    GUIDANCE_TEXT,
    READ_NAME,
    UPDATES_NAME,
    WRITE_NAME,
    guidance_handler,
)


@pytest.mark.asyncio
async def test_guidance_returns_fixed_text() -> None:
    res = await guidance_handler({})
    assert res.text == GUIDANCE_TEXT
    assert res.mime_type == "text/plain"


def test_guidance_names_capabilities_in_execution_order() -> None:
    positions = [GUIDANCE_TEXT.index(name) for name in (UPDATES_NAME, READ_NAME, WRITE_NAME)]
    assert positions == sorted(positions)


def test_guidance_states_decision_rule() -> None:
    text = GUIDANCE_TEXT.lower()
    assert "compare" in text
    assert "1-2" in text
    assert "known: true" in text
    assert "confirm" in text
