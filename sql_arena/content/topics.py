from typing import Dict, List, Optional

from sql_arena.schemas.topic import Topic, TopicIcon, TopicId

TOPIC_ICONS: Dict[TopicId, TopicIcon] = {
    TopicId.window_functions: TopicIcon.layers,
    TopicId.subqueries: TopicIcon.git_merge,
    TopicId.normalization: TopicIcon.database,
    TopicId.data_modeling: TopicIcon.list_tree,
}

_missing_icons = set(TopicId) - set(TOPIC_ICONS)
if _missing_icons:
    raise RuntimeError(f"Topics without an icon: {sorted(item.value for item in _missing_icons)}")


TOPICS: List[Topic] = [
    Topic(
        id=TopicId.window_functions,
        title="Window Functions",
        description="Master OVER(), partitioning, frames, and ranking functions like NTH_VALUE and CUME_DIST.",
        key_concepts=["PARTITION BY", "ROWS/RANGE FRAME", "LAG/LEAD", "NTH_VALUE", "CUME_DIST", "PERCENT_RANK"],
        icon=TOPIC_ICONS[TopicId.window_functions],
    ),
    Topic(
        id=TopicId.subqueries,
        title="Subqueries",
        description="Deep dive into nested queries, correlated subqueries, and existence testing.",
        key_concepts=[
            "Correlated Subqueries",
            "EXISTS vs IN",
            "ANY / ALL Operators",
            "Scalar vs Table Subqueries",
            "Outer References",
        ],
        icon=TOPIC_ICONS[TopicId.subqueries],
    ),
    Topic(
        id=TopicId.normalization,
        title="Normalization",
        description="Eliminate redundancy and anomalies. Master dependencies and Normal Forms (1NF to 4NF).",
        key_concepts=[
            "Functional Dependencies",
            "Transitive Dependency",
            "1NF, 2NF, 3NF, BCNF",
            "Multivalued Dependency (4NF)",
            "Primary/Foreign Keys",
        ],
        icon=TOPIC_ICONS[TopicId.normalization],
    ),
    Topic(
        id=TopicId.data_modeling,
        title="Advanced Modeling",
        description="Extended Entity Relationship (EER) models, supertypes, subtypes, and inheritance.",
        key_concepts=[
            "Supertypes & Subtypes",
            "Disjoint vs Overlapping",
            "Completeness Constraints",
            "Entity Clustering",
            "Surrogate Keys",
        ],
        icon=TOPIC_ICONS[TopicId.data_modeling],
    ),
]

_TOPICS_BY_ID = {topic.id.value: topic for topic in TOPICS}


def get_topic(topic_id: str) -> Optional[Topic]:
    return _TOPICS_BY_ID.get((topic_id or "").strip())
