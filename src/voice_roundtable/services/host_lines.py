"""
Host lines - greeting templates and canned transition remarks
"""
import random
import re
from enum import Enum
from typing import Dict, Optional, Sequence, Tuple

from ..models import Persona


class DirectiveCategory(Enum):
    """Greeting flavour derived from the thematic directive"""
    SUPPORT = "support"
    PROFESSIONAL = "professional"
    NARRATIVE = "narrative"
    CASUAL = "casual"
    GENERIC = "generic"


# Checked in order; first category with a matching keyword wins
DIRECTIVE_KEYWORDS: Tuple[Tuple[DirectiveCategory, Tuple[str, ...]], ...] = (
    (DirectiveCategory.SUPPORT, (
        "support", "comfort", "encourage", "difficult", "grief", "sad", "cope", "struggling"
    )),
    (DirectiveCategory.PROFESSIONAL, (
        "professional", "business", "meeting", "work", "quarterly", "strategy", "project", "career"
    )),
    (DirectiveCategory.NARRATIVE, (
        "story", "storytelling", "narrate", "narrative", "tale", "once upon"
    )),
    (DirectiveCategory.CASUAL, (
        "casual", "chat", "friendly", "hang out", "catch up", "fun", "coffee"
    )),
)

GREETING_TEMPLATES: Dict[DirectiveCategory, str] = {
    DirectiveCategory.SUPPORT: (
        "Hi everyone, thank you for being here. With us today: {names}. "
        "This is a safe space to share whatever is on your heart."
    ),
    DirectiveCategory.PROFESSIONAL: (
        "Good morning everyone. Joining us today: {names}. "
        "Let's get started and keep the discussion focused."
    ),
    DirectiveCategory.NARRATIVE: (
        "Gather round, everyone! Our storytellers today: {names}. "
        "Who wants to begin our tale?"
    ),
    DirectiveCategory.CASUAL: (
        "Hey hey! Hanging out with us today: {names}. "
        "Grab a drink and tell us what's new!"
    ),
    DirectiveCategory.GENERIC: (
        "Hey everyone! Welcome to our voice chat. We have {names} here today. "
        "What's on your mind?"
    ),
}

HOST_REMARKS: Tuple[str, ...] = (
    "That's a great point! What do you all think?",
    "Interesting perspective! Anyone else want to weigh in?",
    "I love the energy here! Keep it going!",
    "Fascinating discussion! Let's hear more thoughts.",
    "Great conversation, everyone! What else is on your minds?",
    "You're all so insightful! This is wonderful to hear.",
    "That brings up an interesting question...",
    "I'm curious to hear what others think about this.",
    "What a thoughtful group! Please, continue.",
    "This is exactly the kind of discussion I hoped for!",
)


def classify_directive(directive: Optional[str]) -> DirectiveCategory:
    if not directive or not directive.strip():
        return DirectiveCategory.GENERIC

    text = directive.lower()
    for category, keywords in DIRECTIVE_KEYWORDS:
        for keyword in keywords:
            if re.search(rf"\b{re.escape(keyword)}", text):
                return category
    return DirectiveCategory.GENERIC


def join_names(participants: Sequence[Persona]) -> str:
    """'Ava', 'Ava and Ben', 'Ava, Ben and Cleo'"""
    names = [persona.name for persona in participants]
    if len(names) <= 1:
        return "".join(names)
    return f"{', '.join(names[:-1])} and {names[-1]}"


def build_greeting(participants: Sequence[Persona], directive: Optional[str] = None) -> str:
    """Host greeting for the directive's category, naming every participant"""
    template = GREETING_TEMPLATES[classify_directive(directive)]
    return template.format(names=join_names(participants))


def pick_host_remark(rng: random.Random) -> str:
    return rng.choice(HOST_REMARKS)
