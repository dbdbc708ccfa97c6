"""
Mediator prompt templates.

Defines the system prompt for private partner chats and the templates used
for the bridge summary and the joint report.

Dependencies: langchain_core.prompts
System role: Prompt templates for mediator behavior
"""

from langchain_core.prompts import ChatPromptTemplate

COMPLETION_CUE = (
    "Thank you. I have a clear understanding now. "
    "Please click the button above to proceed."
)

MEDIATOR_SYSTEM_PROMPT = f"""You are an empathetic conflict mediator talking to ONE partner privately.

## Rules
1. Listen and validate their feelings.
2. Ask clarifying questions to understand the root cause.
3. Keep responses short (under 50 words).
4. CRITICAL: Do NOT give advice yet.
5. If you have enough info (3-4 exchanges), say: "{COMPLETION_CUE}"
"""

BRIDGE_SUMMARY_PROMPT = ChatPromptTemplate.from_messages([
    ("human", """Read this private chat between a mediator and Partner A:
{transcript}

TASK: Summarize the *topic* of the conflict in 5-10 words. Be NEUTRAL. Do not reveal secrets.
Example: "Communication regarding future plans".
Reply with the topic only."""),
])

REPORT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", "You are an expert mediator."),
    ("human", """PARTNER A:
{transcript_a}

PARTNER B:
{transcript_b}

TASK:
1. Write a "Joint Analysis" validating BOTH sides equally.
2. Write separate advice for A and B, explaining the OTHER person's feelings to build empathy.

OUTPUT JSON only: {{"analysis": "...", "advice_for_a": "...", "advice_for_b": "..."}}"""),
])


def format_transcript(contents: list[str]) -> str:
    """Join message contents one per line."""
    return "\n".join(contents)
