"""
customer_intel.composer.reply

Deterministic reply synthesis from ticket, customer profile and recent posts.

Responsibilities:
- Hold the two literal reply templates (friendly, concise).
- Derive placeholder values, clean ticket text, and substitute.
- Never fail: missing inputs degrade to default literals.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from customer_intel.models import CustomerPost, CustomerProfile, TicketRecord

Tone = Literal["friendly", "concise"]

DEFAULT_CUSTOMER_NAME = "Customer"
DESCRIPTION_LIMIT = 100
ELLIPSIS = "..."

FRIENDLY_TEMPLATE = """Hi {customer_name},

Thank you for reaching out{company_info}{location_info}! I've received your inquiry about "{subject}" and I'm here to help.

{recent_activity}

Regarding your message: "{description}"

I understand your concern and I'm committed to providing you with the best possible solution. Let me look into this matter and get back to you with a comprehensive response shortly.

{website_info}

Please don't hesitate to reach out if you have any additional questions in the meantime.

Best regards,
Customer Support Team"""

CONCISE_TEMPLATE = """Hi {customer_name},

Thanks for contacting us about "{subject}".

{recent_activity}

I've reviewed your message: "{description}"

I'll investigate this and provide a solution shortly.{website_info}

Best regards,
Support Team"""

TEMPLATES: dict[str, str] = {"friendly": FRIENDLY_TEMPLATE, "concise": CONCISE_TEMPLATE}

_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")
_BLANK_RUN_RE = re.compile(r"\n{3,}")
_PLACEHOLDER_RE = re.compile(r"\{([a-z_]+)\}")


@dataclass(frozen=True, slots=True)
class ReplyDraft:
    text: str
    tone: Tone


def strip_tags(text: str) -> str:
    """Remove HTML tags and collapse whitespace. Applying it twice changes nothing."""

    if not text:
        return ""
    return _WS_RE.sub(" ", _TAG_RE.sub("", text)).strip()


def truncate(text: str, limit: int = DESCRIPTION_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


class ReplyComposer:
    """
    Stateless; one instance can be shared freely. Same inputs, same text.
    """

    def compose(
        self,
        ticket: TicketRecord,
        profile: CustomerProfile | None,
        posts: Sequence[CustomerPost],
        tone: Tone = "friendly",
    ) -> ReplyDraft:
        try:
            template = TEMPLATES[tone]
        except KeyError:
            raise ValueError(f"Unknown tone: {tone!r}") from None
        values = self.placeholders(ticket, profile, posts)

        # Single pass over the template: substituted values are never rescanned.
        text = _PLACEHOLDER_RE.sub(lambda m: values.get(m.group(1), m.group(0)), template)

        # Empty segments leave blank-line runs behind; fold them into one blank line.
        text = _BLANK_RUN_RE.sub("\n\n", text).strip()
        return ReplyDraft(text=text, tone=tone)

    def placeholders(
        self,
        ticket: TicketRecord,
        profile: CustomerProfile | None,
        posts: Sequence[CustomerPost],
    ) -> dict[str, str]:
        name = profile.name.strip() if profile is not None else ""
        company = profile.company.name.strip() if profile is not None else ""
        city = profile.address.city.strip() if profile is not None else ""
        website = profile.website.strip() if profile is not None else ""

        recent_activity = ""
        if posts:
            recent_activity = (
                f'I see you\'ve been active with topics like "{posts[0].title}" recently.'
            )

        return {
            "customer_name": name or DEFAULT_CUSTOMER_NAME,
            "company_info": f" from {company}" if company else "",
            "location_info": f" in {city}" if city else "",
            "recent_activity": recent_activity,
            "subject": strip_tags(ticket.subject),
            "description": truncate(strip_tags(ticket.description)),
            "website_info": (
                f"\n\nI noticed your website ({website}) - thanks for sharing that with us."
                if website
                else ""
            ),
        }


# --- Module Notes -----------------------------------------------------------
# A subject or post title containing text like "{subject}" is inserted literally;
# only the template itself is scanned for placeholders.
