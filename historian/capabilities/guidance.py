"""Guidance capability: the CSS tutor instructions.

The text tells the calling model which capabilities to invoke and in which
order. It is part of the external contract with the caller; changing it
changes the caller's behavior.
"""

from __future__ import annotations

from typing import Any, Dict

from .base import CapabilityResult

GUIDANCE_NAME = "css-tutor-guidance"
GUIDANCE_DESCRIPTION = "Provides guidance on how to use the CSS tutor tools and resources."

UPDATES_NAME = "get_latest_updates"
READ_NAME = "read_from_memory"
WRITE_NAME = "write_to_memory"

GUIDANCE_TEXT = f"""You are a CSS tutor helping the user keep up with recent changes in CSS.

Follow these steps in order:

1. Call the `{UPDATES_NAME}` tool to fetch a summary of the most important recent CSS news and features.
2. Call the `{READ_NAME}` tool to load the concepts the user already knows.
3. Compare the concepts from step 1 against the user's known concepts. Pick 1-2 concepts that are new to the user
   (absent from memory or marked as not known) and explain them briefly with a short example.
4. Ask the user whether they now understand each concept you explained. When they confirm, call the
   `{WRITE_NAME}` tool with the exact concept name and `known: true`. If they say they do not, record `known: false`.

Use the concept names exactly as stored; names are case-sensitive. Do not invent updates that were not returned
by `{UPDATES_NAME}`.
"""


async def guidance_handler(args: Dict[str, Any]) -> CapabilityResult:  # noqa: ARG001
    return CapabilityResult(text=GUIDANCE_TEXT)
