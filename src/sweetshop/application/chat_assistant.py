"""Rule-based shop assistant.

``reply`` maps one free-text message to one answer. Rules are checked top
to bottom and the first whose keywords appear in the message wins. The
assistant keeps no state; the visible conversation lives in a
ChatTranscript owned by the caller.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from sweetshop.application.dto import SweetDTO

WELCOME = "Hello! I'm your Sweet Shop Assistant. How can I help you today?"

GREETING_KW = ["hello", "hi", "hey"]
FESTIVAL_KW = ["diwali", "festival"]
DIETARY_KW = ["sugar-free", "sugar free", "diabetic"]
PRICE_KW = ["price", "cost"]
RECOMMEND_KW = ["recommend", "suggest"]
PURCHASE_KW = ["buy", "purchase", "order"]
LISTING_KW = ["list", "available", "menu"]

FESTIVE_CATEGORIES = ("Chocolate", "Cake", "Cookie")
BIRTHDAY_CATEGORIES = ("Cake", "Chocolate")
EVERYDAY_CATEGORIES = ("Chocolate", "Ice Cream")


def _keywords(words: Sequence[str]) -> re.Pattern[str]:
    return re.compile(r"\b(?:" + "|".join(re.escape(w) for w in words) + r")\b")


def _mentions(pattern: re.Pattern[str]) -> Callable[[str], bool]:
    return lambda text: pattern.search(text) is not None


def _named_sweet(text: str, catalog: Sequence[SweetDTO]) -> SweetDTO | None:
    # longest name first so "Mint Chocolate Chip" beats a shorter overlap
    for sweet in sorted(catalog, key=lambda s: len(s.name), reverse=True):
        if re.search(r"\b" + re.escape(sweet.name.lower()) + r"\b", text):
            return sweet
    return None


def _picks(catalog: Sequence[SweetDTO], categories: Sequence[str]) -> list[str]:
    """First in-stock sweet of each category, in category order."""
    names: list[str] = []
    for category in categories:
        for sweet in catalog:
            if sweet.category == category and sweet.in_stock:
                names.append(sweet.name)
                break
    return names


def _join(names: Sequence[str], conjunction: str = "or") -> str:
    if len(names) <= 1:
        return "".join(names)
    return f"{', '.join(names[:-1])} {conjunction} {names[-1]}"


# --- Responders -------------------------------------------------------------------


def _greeting(text: str, catalog: Sequence[SweetDTO]) -> str:
    return "Hello! Welcome to our sweet shop. What can I help you with today?"


def _festival(text: str, catalog: Sequence[SweetDTO]) -> str:
    picks = _picks(catalog, FESTIVE_CATEGORIES)
    if not picks:
        return "Our festive selection is sold out right now, but ask me what else is available!"
    return (
        f"For festivals like Diwali, I recommend our festive sweets: {_join(picks)}. "
        "Which one interests you?"
    )


def _dietary(text: str, catalog: Sequence[SweetDTO]) -> str:
    return (
        "We have sugar-free options like our fresh fruits in pastries. "
        "Would you like recommendations?"
    )


def _price(text: str, catalog: Sequence[SweetDTO]) -> str:
    sweet = _named_sweet(text, catalog)
    if sweet is not None:
        return f"{sweet.name} costs {sweet.price}."
    if not catalog:
        return "We don't have any sweets listed right now."
    cheapest = min(catalog, key=lambda s: s.price_amount)
    dearest = max(catalog, key=lambda s: s.price_amount)
    return (
        f"Our sweets range from {cheapest.price} to {dearest.price}. "
        "Which sweet are you interested in?"
    )


def _recommendation(text: str, catalog: Sequence[SweetDTO]) -> str:
    if re.search(r"\bbirthday\b", text):
        picks = _picks(catalog, BIRTHDAY_CATEGORIES)
        if picks:
            return f"For birthdays, our {_join(picks)} would be perfect!"
    if re.search(r"\bwedding\b", text):
        return "For weddings, try our elegant pastries or cakes."
    picks = _picks(catalog, EVERYDAY_CATEGORIES)
    if not picks:
        return "Ask me for the menu and I'll tell you what we have today. What occasion is this for?"
    return f"I recommend trying our {_join(picks)}. What occasion is this for?"


def _purchase(text: str, catalog: Sequence[SweetDTO]) -> str:
    sweet = _named_sweet(text, catalog)
    if sweet is None:
        return "I'd be happy to help you purchase! Which sweet would you like?"
    if not sweet.in_stock:
        return f"Sorry, {sweet.name} is out of stock right now. Can I suggest something else?"
    return (
        f"Great choice! {sweet.name} is {sweet.price}. How many would you like? "
        "Please use the purchase option to complete your order."
    )


def _listing(text: str, catalog: Sequence[SweetDTO]) -> str:
    if not catalog:
        return "We don't have any sweets listed right now."
    items = ", ".join(f"{s.name} ({s.price})" for s in catalog)
    return f"We have: {items}. What interests you?"


def _fallback(text: str, catalog: Sequence[SweetDTO]) -> str:
    return (
        "I'm here to help with sweet recommendations and purchases. "
        "Ask me about our sweets, prices, or recommendations for occasions!"
    )


@dataclass(frozen=True)
class Rule:
    name: str
    applies: Callable[[str], bool]
    respond: Callable[[str, Sequence[SweetDTO]], str]


RULES: tuple[Rule, ...] = (
    Rule("greeting", _mentions(_keywords(GREETING_KW)), _greeting),
    Rule("festival", _mentions(_keywords(FESTIVAL_KW)), _festival),
    Rule("dietary", _mentions(_keywords(DIETARY_KW)), _dietary),
    Rule("price", _mentions(_keywords(PRICE_KW)), _price),
    Rule("recommendation", _mentions(_keywords(RECOMMEND_KW)), _recommendation),
    Rule("purchase", _mentions(_keywords(PURCHASE_KW)), _purchase),
    Rule("listing", _mentions(_keywords(LISTING_KW)), _listing),
)
FALLBACK = Rule("fallback", lambda text: True, _fallback)


def match_rule(message: str) -> Rule:
    text = " ".join((message or "").lower().split())
    for rule in RULES:
        if rule.applies(text):
            return rule
    return FALLBACK


def reply(message: str, catalog: Sequence[SweetDTO]) -> str:
    text = " ".join((message or "").lower().split())
    return match_rule(text).respond(text, catalog)


# --- Conversation ---------------------------------------------------------------


@dataclass(frozen=True)
class ChatMessage:
    text: str
    is_bot: bool


@dataclass
class ChatTranscript:
    """The visible conversation, starting with the assistant's welcome."""

    messages: list[ChatMessage] = field(
        default_factory=lambda: [ChatMessage(WELCOME, is_bot=True)]
    )

    def send(self, message: str, catalog: Sequence[SweetDTO]) -> str | None:
        """Record a shopper message and the assistant's answer.

        Blank messages are ignored and return None.
        """
        if not message or not message.strip():
            return None
        answer = reply(message, catalog)
        self.messages.append(ChatMessage(message, is_bot=False))
        self.messages.append(ChatMessage(answer, is_bot=True))
        return answer
