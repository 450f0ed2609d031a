import logging

from sql_arena.content.curriculum import get_context_for_topic
from sql_arena.content.theory import STATIC_THEORY
from sql_arena.services.llm.base import LLMClient, ProviderError
from sql_arena.services.storage import KeyValueStore, theory_cache_key

THEORY_ERROR = "## Error loading content."
logger = logging.getLogger(__name__)


def build_theory_prompt(topic_title: str) -> str:
    curriculum_context = get_context_for_topic(topic_title)
    return (
        f"Write a comprehensive, textbook-quality tutorial on {topic_title} in SQL.\n\n"
        "CRITICAL: The content MUST be strictly based on these curriculum notes and rules:\n"
        f"{curriculum_context.strip()}\n\n"
        "Structure the response using standard Markdown:\n"
        "1. **Title**: Use an H1 (#) for the main title.\n"
        "2. **Introduction**: Brief summary of the concept.\n"
        "3. **Key Concepts**: Use H2 (##) for sections. Use bolding (**text**) for key terms defined in the curriculum.\n"
        "4. **Syntax & Examples**: Use code blocks (```sql) for ALL SQL examples. Use Markdown Tables for comparing "
        "concepts (e.g. RANK vs DENSE_RANK).\n"
        "5. **Common Pitfalls**: Use a blockquote (>) to highlight traps mentioned in the slides (e.g. \"Fan Traps\").\n"
        "6. **Real-world Scenario**: Provide a concrete example (e.g. \"Class of '26 Database\").\n\n"
        "Keep it educational, formal, and visually structured. Ensure headers are clearly marked with #.\n"
    )


def get_theory(
    llm: LLMClient,
    store: KeyValueStore,
    topic_id: str,
    topic_title: str,
    force_refresh: bool = False,
) -> str:
    """Return study markdown for a topic.

    A cached page wins over static content, static content wins over a fresh
    generation. Only a refresh or a cache miss on a topic without static
    content reaches the provider. A forced refresh skips both reads and its
    result overwrites the cache, so it shadows static content from then on.
    Reading the cache before static content is deliberate: without it a
    refreshed page would never be shown for a topic with static content.
    """
    cache_key = theory_cache_key(topic_id)
    if not force_refresh:
        cached = store.get(cache_key)
        if cached:
            return cached
        static_content = STATIC_THEORY.get(topic_title)
        if static_content:
            return static_content

    try:
        content = llm.complete(build_theory_prompt(topic_title))
    except ProviderError as exc:
        logger.warning("Theory generation failed for topic=%s: %s", topic_id, exc)
        return THEORY_ERROR
    except Exception:
        logger.exception("Unexpected error generating theory for topic=%s.", topic_id)
        return THEORY_ERROR

    store.set(cache_key, content)
    return content
