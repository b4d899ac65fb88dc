"""
Narrative enrichment

Optional collaborator that asks an LLM for a short free-text commentary on an
analysis. The text is decoration: it is never parsed and never feeds a score.
The implementation is chosen once, when the engine is built.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from openai import AsyncOpenAI

from scoring import config
from scoring.errors import EnrichmentTimeoutError
from scoring.models import ProductInput

logger = logging.getLogger(__name__)

SYSTEM_PROMPTS = {
    "food": "Tu es un expert en nutrition et sécurité alimentaire.",
    "cosmetics": "Tu es un expert en dermatologie et en formulation cosmétique.",
    "detergents": "Tu es un expert en chimie verte et en impact environnemental des produits ménagers.",
}


class NarrativeEnricher(ABC):
    """Turns a product and its classification summary into narrative text, or None."""

    @abstractmethod
    async def enrich(self, product: ProductInput, summary: Dict[str, Any]) -> Optional[str]:
        pass

    @property
    def available(self) -> bool:
        return True


class NullEnricher(NarrativeEnricher):
    """Default when no LLM is configured. Never produces text."""

    async def enrich(self, product: ProductInput, summary: Dict[str, Any]) -> Optional[str]:
        return None

    @property
    def available(self) -> bool:
        return False


class OpenAINarrativeEnricher(NarrativeEnricher):
    """Narrative from an OpenAI chat model."""

    def __init__(self, client: Optional[AsyncOpenAI] = None, model: Optional[str] = None):
        self.client = client or AsyncOpenAI(api_key=config.OPENAI_API_KEY)
        self.model = model or config.ENRICHMENT_MODEL

    def build_user_prompt(self, product: ProductInput, summary: Dict[str, Any]) -> str:
        return f"""Produit: {product.name}
Marque: {product.brand or 'Non spécifiée'}
Catégorie: {product.category.value}

RÉSULTAT DE L'ANALYSE:
{json.dumps(summary, indent=2, ensure_ascii=False)}

Fournis une analyse approfondie en 3 points maximum, en français, sans répéter le score.
"""

    async def enrich(self, product: ProductInput, summary: Dict[str, Any]) -> Optional[str]:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPTS[product.category.value]},
                {"role": "user", "content": self.build_user_prompt(product, summary)},
            ],
            temperature=0.3,
        )
        content = response.choices[0].message.content
        return content.strip() if content else None


def build_enricher(api_key: Optional[str] = None) -> NarrativeEnricher:
    """OpenAI enricher when an API key is configured, NullEnricher otherwise."""
    api_key = api_key if api_key is not None else config.OPENAI_API_KEY
    if not api_key:
        logger.info("No OPENAI_API_KEY configured, narrative enrichment disabled")
        return NullEnricher()
    return OpenAINarrativeEnricher(client=AsyncOpenAI(api_key=api_key))


async def enrich_with_timeout(
    enricher: NarrativeEnricher,
    product: ProductInput,
    summary: Dict[str, Any],
    timeout: float,
) -> Optional[str]:
    """
    Call the enricher once, bounded by timeout.

    Raises EnrichmentTimeoutError when the call does not finish in time.
    Cancellation of the caller propagates into the pending call.
    """
    try:
        return await asyncio.wait_for(enricher.enrich(product, summary), timeout=timeout)
    except asyncio.TimeoutError as e:
        raise EnrichmentTimeoutError(f"Enrichment did not answer within {timeout}s") from e
