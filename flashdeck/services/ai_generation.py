"""AI card generation for a deck.

``generate_ai_cards`` is the action behind ``POST /decks/{deck_id}/generate``.
It never raises for expected failures: every outcome is returned as a
``GenerateSuccess`` or ``GenerateFailure`` so the caller can show a specific,
localized message. Cards are only written when the provider returned at least
the requested number; the batch is then truncated to that number and inserted
in a single transaction.
"""

import json
import re
from typing import Any, List, Optional, Protocol

from loguru import logger
from openai import APIError, APIStatusError, APITimeoutError, AsyncOpenAI, RateLimitError
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.core.config import Settings, get_settings
from flashdeck.core.errors import (
    AppError,
    AuthorizationError,
    FeatureNotEntitledError,
    MalformedOutputError,
    NotFoundError,
    ProviderError,
    ProviderNotConfiguredError,
    QuotaExceededError,
    ValidationFailed,
)
from flashdeck.core.security import AI_DECK_FEATURE, has_feature
from flashdeck.i18n.translator import Translator
from flashdeck.models.card import Card
from flashdeck.models.user import User
from flashdeck.schemas.ai import ErrorInfo, GenerateFailure, GeneratedCard, GenerateResult, GenerateSuccess
from flashdeck.services.access import get_owned_deck

QUOTA_PATTERN = re.compile(r"quota|billing|insufficient_quota", re.IGNORECASE)


def build_prompt(title: str, description: str, count: int) -> str:
    return "\n".join(
        [
            "You are an assistant that creates flashcards.",
            f"Create at least {count} diverse and non-redundant flashcards (not fewer than {count}).",
            f"Title: {title}",
            f"Description: {description}",
            'Only return a JSON object of the form {"cards": [{"frontSide": ..., "backSide": ...}]}. '
            "No extra fields.",
        ]
    )


def parse_generated_cards(text: str) -> List[GeneratedCard]:
    """Parse the provider's JSON reply into validated cards.

    Accepts either ``{"cards": [...]}`` or a bare list. Anything else, or any
    item failing validation, raises ``MalformedOutputError``.
    """
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError:
        # some models wrap the payload in code fences
        try:
            data = json.loads(text.strip().strip("`").removeprefix("json"))
        except json.JSONDecodeError as exc:
            raise MalformedOutputError(f"Provider reply is not JSON: {exc}")
    if isinstance(data, dict):
        data = data.get("cards")
    if not isinstance(data, list):
        raise MalformedOutputError("Provider reply has no card list")
    try:
        return [GeneratedCard.model_validate(item) for item in data]
    except ValidationError as exc:
        raise MalformedOutputError(f"Provider returned an invalid card: {exc.error_count()} error(s)")


class CardGenerator(Protocol):
    @property
    def is_configured(self) -> bool: ...

    async def generate(self, prompt: str) -> List[GeneratedCard]: ...


class OpenAICardGenerator:
    """Chat-completions backed generator using JSON object output."""

    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None):
        self.settings = settings
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self.settings.OPENAI_API_KEY) or self._client is not None

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.settings.OPENAI_API_KEY,
                timeout=self.settings.AI_TIMEOUT_SECONDS,
                max_retries=self.settings.AI_MAX_RETRIES,
            )
        return self._client

    async def generate(self, prompt: str) -> List[GeneratedCard]:
        try:
            resp = await self.client.chat.completions.create(
                model=self.settings.OPENAI_MODEL,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.settings.AI_TEMPERATURE,
                max_tokens=self.settings.AI_MAX_TOKENS,
                response_format={"type": "json_object"},
            )
        except RateLimitError as exc:
            raise QuotaExceededError(str(exc))
        except APITimeoutError as exc:
            raise ProviderError(f"Provider timed out: {exc}")
        except APIStatusError as exc:
            if exc.status_code == 429 or QUOTA_PATTERN.search(str(exc)):
                raise QuotaExceededError(str(exc))
            raise ProviderError(f"Provider returned HTTP {exc.status_code}")
        except APIError as exc:
            raise ProviderError(str(exc))
        text = resp.choices[0].message.content or ""
        return parse_generated_cards(text)


def get_card_generator() -> CardGenerator:
    return OpenAICardGenerator(get_settings())


def _failure(t: Translator, code: str, stage: str) -> GenerateFailure:
    return GenerateFailure(error=ErrorInfo(code=code, message=t(f"errors.{code}")), stage=stage)


async def generate_ai_cards(
    deck_id: str,
    count: int,
    user: User,
    db: AsyncSession,
    generator: CardGenerator,
    t: Translator,
) -> GenerateResult:
    stage = "start"
    try:
        stage = "parse"
        max_cards = get_settings().AI_MAX_CARDS
        if count > max_cards:
            raise ValidationFailed(f"Requested {count} cards, limit is {max_cards}")

        stage = "feature_check"
        if not has_feature(user, AI_DECK_FEATURE):
            raise FeatureNotEntitledError(f"User {user.id} lacks {AI_DECK_FEATURE}")

        stage = "deck_fetch"
        try:
            deck = await get_owned_deck(deck_id, user, db)
        except (NotFoundError, AuthorizationError) as exc:
            raise NotFoundError(exc.detail, code="deck_not_found")

        stage = "pre_ai_checks"
        if not deck.title or not deck.description:
            raise ValidationFailed("Deck needs title and description", code="missing_title_or_description")
        if not generator.is_configured:
            raise ProviderNotConfiguredError("No API key for the text generation provider")

        stage = "ai_call"
        logger.info(f"[generate_ai_cards] ai call start deck={deck_id} count={count}")
        cards = await generator.generate(build_prompt(deck.title, deck.description, count))
        logger.info(f"[generate_ai_cards] ai call done received={len(cards)}")
        if len(cards) < count:
            raise ProviderError(f"Expected at least {count} cards, got {len(cards)}", code="insufficient_cards")

        stage = "db_insert"
        batch = cards[:count]
        db.add_all(
            [Card(deck_id=deck.id, front_side=c.front_side, back_side=c.back_side) for c in batch]
        )
        await db.commit()
        logger.info(f"[generate_ai_cards] inserted {len(batch)} cards into deck={deck_id}")
        return GenerateSuccess(inserted=len(batch))
    except AppError as exc:
        logger.warning(f"[generate_ai_cards] failed stage={stage} code={exc.code}: {exc.detail}")
        await db.rollback()
        return _failure(t, exc.code, stage)
    except SQLAlchemyError:
        logger.exception(f"[generate_ai_cards] database error at stage={stage}")
        await db.rollback()
        return _failure(t, "generation_failed", stage)
    except Exception as exc:
        logger.exception(f"[generate_ai_cards] unexpected error at stage={stage}")
        await db.rollback()
        code = "quota_exceeded" if QUOTA_PATTERN.search(str(exc)) else "generation_failed"
        return _failure(t, code, stage)
