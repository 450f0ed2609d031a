from sql_arena.content.curriculum import CURRICULUM_CONTEXT, DEFAULT_CONTEXT, get_context_for_topic
from sql_arena.content.topics import TOPIC_ICONS, TOPICS, get_topic
from sql_arena.schemas.topic import TopicIcon, TopicId


def test_context_matches_keywords_case_insensitively():
    assert get_context_for_topic("WINDOW Functions") == CURRICULUM_CONTEXT["Window Functions"]
    assert get_context_for_topic("Subqueries & CTEs") == CURRICULUM_CONTEXT["Subqueries"]
    assert get_context_for_topic("normalization") == CURRICULUM_CONTEXT["Normalization"]
    assert get_context_for_topic("data_modeling") == CURRICULUM_CONTEXT["Advanced Modeling"]


def test_context_uses_anchor_priority_order():
    assert get_context_for_topic("window over subqueries") == CURRICULUM_CONTEXT["Window Functions"]
    assert get_context_for_topic("modeling after normalization") == CURRICULUM_CONTEXT["Normalization"]


def test_context_falls_back_for_unknown_topics():
    assert get_context_for_topic("Joins & Set Operations") == DEFAULT_CONTEXT
    assert get_context_for_topic("") == DEFAULT_CONTEXT
    assert "standard SQL best practices" in DEFAULT_CONTEXT


def test_every_topic_has_an_icon():
    assert set(TOPIC_ICONS) == set(TopicId)
    assert [topic.icon for topic in TOPICS] == [
        TopicIcon.layers,
        TopicIcon.git_merge,
        TopicIcon.database,
        TopicIcon.list_tree,
    ]


def test_get_topic_by_id():
    topic = get_topic("window_functions")
    assert topic is not None
    assert topic.title == "Window Functions"
    assert "PARTITION BY" in topic.key_concepts
    assert get_topic("joins") is None
