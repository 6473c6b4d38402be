"""
Prompt rendering for persona and host turns
"""
from textwrap import dedent
from typing import Dict, List

from ...models import SentimentClass, SpeakerKind
from ..base import GenerationRequest

PERSONA_SYSTEM_PROMPT = dedent("""
    You are {name}, one of several friends in a spoken group conversation.
    Your personality: {description}.
    {speaking_style}.

    Rules:
    - Speak in 1-3 short sentences, as if talking out loud.
    - Stay in character and never mention that you are an AI.
    - Refer to specific details from the conversation when you can.
    - Do not use any formatting, lists, stage directions or quotation marks.
""").strip()

HOST_SYSTEM_PROMPT = dedent("""
    You are a friendly conversation host facilitating a chat between friends.
    Keep the conversation flowing with brief, encouraging remarks that pick up
    on what people just said and invite someone else to jump in.

    Rules:
    - Keep comments to 1-2 sentences.
    - Use a warm, positive tone.
    - Do not use any formatting or quotation marks.
""").strip()

MOOD_HINTS: Dict[SentimentClass, str] = {
    SentimentClass.POSITIVE: "The user sounds upbeat; match their energy.",
    SentimentClass.NEGATIVE: "The user sounds upset; acknowledge how they feel.",
    SentimentClass.NEUTRAL: "",
}


def render_transcript(request: GenerationRequest) -> str:
    return "\n".join(f"{speaker}: {text}" for speaker, text in request.recent_window)


def build_messages(request: GenerationRequest) -> List[Dict[str, str]]:
    """Render a GenerationRequest into chat messages"""
    if request.speaker is SpeakerKind.HOST or request.persona is None:
        system = HOST_SYSTEM_PROMPT
    else:
        system = PERSONA_SYSTEM_PROMPT.format(
            name=request.persona.name,
            description=request.personality_description or request.persona.personality.value,
            speaking_style=request.speaking_style or "Respond naturally"
        )

    sections = [system]
    if request.thematic_directive:
        sections.append(f"Conversation theme: {request.thematic_directive}")
    if request.historical_context:
        sections.append(f"Background shared by the group:\n{request.historical_context}")
    if request.recent_window:
        sections.append(f"Conversation so far:\n{render_transcript(request)}")

    user_content = request.prompt
    if request.user_sentiment is not None:
        hint = MOOD_HINTS[request.user_sentiment.sentiment]
        if hint:
            user_content = f"{user_content}\n{hint}"

    return [
        {"role": "system", "content": "\n\n".join(sections)},
        {"role": "user", "content": user_content},
    ]
